from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from graph_projector.core.errors import InvalidArgumentError


Context = dict[str, Any]
Translator = Callable[[Any, Context], Any]
Factory = Callable[[Context], Any]


class Classification(str, Enum):
    DIRECT = "direct"
    COLLECTION = "collection"
    BLIND = "blind"
    OPAQUE = "opaque"


class SortDirection(str, Enum):
    UNKNOWN = "unknown"
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class PropertyReference:
    """One requested include, e.g. ``Owner.Address.City``.

    ``parts`` runs outer to inner. A negated reference (``-Secret``) removes a
    property that would otherwise be included by default.
    """

    parts: tuple[str, ...]
    negated: bool = False

    def __post_init__(self) -> None:
        if not self.parts or any(not p for p in self.parts):
            raise InvalidArgumentError(
                code="E_INCLUDE_SYNTAX",
                message=f"property reference has an empty segment: {'.'.join(self.parts)!r}",
                path="includes",
            )

    @classmethod
    def parse(cls, text: str) -> "PropertyReference":
        raw = text.strip()
        negated = raw.startswith("-")
        if negated:
            raw = raw[1:].strip()
        return cls(parts=tuple(p.strip() for p in raw.split(".")), negated=negated)

    @property
    def head(self) -> str:
        return self.parts[0]

    @property
    def tail(self) -> Optional["PropertyReference"]:
        if len(self.parts) == 1:
            return None
        return PropertyReference(parts=self.parts[1:], negated=self.negated)

    def __str__(self) -> str:
        return ("-" if self.negated else "") + ".".join(self.parts)


def parse_includes(text: str | None) -> list[PropertyReference]:
    """Parse ``"Name,Friends.Name,-Secret"`` into property references.

    Blank input yields an empty list (use the mapping's defaults).
    """
    if text is None or not text.strip():
        return []
    return [PropertyReference.parse(chunk) for chunk in text.split(",") if chunk.strip()]


def as_references(includes: Iterable[PropertyReference | str] | None) -> list[PropertyReference]:
    if includes is None:
        return []
    out: list[PropertyReference] = []
    for item in includes:
        out.append(item if isinstance(item, PropertyReference) else PropertyReference.parse(item))
    return out


@dataclass(frozen=True)
class PropertyRule:
    """How one destination property is resolved from the source object.

    ``source`` names the attribute to read (defaults to the destination name).
    A ``translator`` replaces the read entirely. ``always`` marks the property as
    included unless explicitly excluded.
    """

    source: Optional[str] = None
    translator: Optional[Translator] = None
    always: bool = False


@dataclass(frozen=True)
class MappingDefinition:
    properties: Mapping[str, PropertyRule]
    destination: Optional[type] = None
    default_includes: tuple[PropertyReference, ...] = field(default_factory=tuple)

    @classmethod
    def of(
        cls,
        *names: str,
        destination: Optional[type] = None,
        default_includes: Iterable[PropertyReference | str] | None = None,
        **rules: PropertyRule,
    ) -> "MappingDefinition":
        """Shorthand: plain names copy same-named attributes, keyword rules override."""
        props: dict[str, PropertyRule] = {n: PropertyRule() for n in names}
        props.update(rules)
        return cls(
            properties=MappingProxyType(props),
            destination=destination,
            default_includes=tuple(as_references(default_includes)),
        )
