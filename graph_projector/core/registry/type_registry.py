from __future__ import annotations

import datetime
import decimal
import enum
import pathlib
import uuid
from typing import Iterable, Optional

from graph_projector.core.logging import get_logger
from graph_projector.core.model import Factory, MappingDefinition


logger = get_logger(__name__)


DEFAULT_BLACKLIST: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    # Scalar terminals that would otherwise look like property bags.
    enum.Enum,
    pathlib.PurePath,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    decimal.Decimal,
    uuid.UUID,
)

DEFAULT_MAX_DEPTH = 64


class TypeRegistry:
    """Source type -> mapping definition (+ optional destination factory).

    Build it once at startup; after that it is only read, so a single registry
    can back concurrent expansions.
    """

    def __init__(
        self,
        *,
        blacklist: Iterable[type] | None = None,
        expand_blind_objects: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._mappings: dict[type, MappingDefinition] = {}
        self._factories: dict[type, Factory] = {}
        self._blacklist: set[type] = set(DEFAULT_BLACKLIST if blacklist is None else blacklist)
        self.expand_blind_objects = expand_blind_objects
        self.max_depth = max_depth

    def register(
        self,
        source_type: type,
        definition: MappingDefinition,
        factory: Optional[Factory] = None,
    ) -> None:
        """Register (or replace) the mapping for *source_type*. Last write wins."""
        if source_type in self._mappings:
            logger.debug("replacing mapping for %s", source_type.__qualname__)
        self._mappings[source_type] = definition
        if factory is not None:
            self._factories[source_type] = factory
        else:
            self._factories.pop(source_type, None)

    def lookup(self, source_type: type) -> Optional[MappingDefinition]:
        # Exact type only; subclasses must be registered on their own.
        return self._mappings.get(source_type)

    def factory_for(self, source_type: type) -> Optional[Factory]:
        return self._factories.get(source_type)

    def is_blacklisted(self, tp: type) -> bool:
        if tp in self._blacklist:
            return True
        if not isinstance(tp, type):
            return False
        return any(issubclass(tp, b) for b in self._blacklist)

    def blacklist(self, tp: type) -> None:
        self._blacklist.add(tp)

    def unblacklist(self, tp: type) -> None:
        self._blacklist.discard(tp)

    @property
    def blacklisted_types(self) -> frozenset[type]:
        return frozenset(self._blacklist)

    @property
    def registered_types(self) -> list[type]:
        return list(self._mappings.keys())
