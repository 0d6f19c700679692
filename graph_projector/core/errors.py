from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProjectionError(Exception):
    """Base error envelope for the projector.

    Everything raised by the library itself derives from this class. Errors raised
    by caller-supplied translators and factories are never wrapped.
    """

    code: str
    message: str
    path: Optional[str] = None

    def __str__(self) -> str:
        loc = self.path if self.path else "<projection>"
        return f"{loc}: {self.code}: {self.message}"


class UnknownMappingError(ProjectionError):
    """A top-level source has no registered, collection or blind classification."""


class InvalidArgumentError(ProjectionError):
    pass


class PropertyNotFoundError(ProjectionError):
    pass


class ExpansionDepthError(ProjectionError):
    """The source graph nests deeper than the registry's max_depth."""


class DocumentLoadError(ProjectionError):
    pass


def type_name(tp: type) -> str:
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None) or repr(tp)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"
