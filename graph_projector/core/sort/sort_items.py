from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from graph_projector.core.access.accessors import get_property
from graph_projector.core.errors import InvalidArgumentError, PropertyNotFoundError, type_name
from graph_projector.core.model import SortDirection


_MISSING = object()


def sort_items(source: Any, property_name: str, direction: SortDirection | str) -> Any:
    """Return a new list of *source*'s items ordered by one property.

    - The sort is stable in both directions.
    - Sequences of 0 or 1 items are returned as-is (the same object).
    - Every item must carry the property; the first one missing it raises
      PropertyNotFoundError.
    """
    direction = _coerce_direction(direction)
    if direction is SortDirection.UNKNOWN:
        raise InvalidArgumentError(
            code="E_SORT_UNKNOWN_DIRECTION",
            message="sort direction must be ascending or descending",
            path="direction",
        )

    if not isinstance(source, Iterable) or isinstance(source, (str, bytes, Mapping)):
        raise InvalidArgumentError(
            code="E_SORT_NOT_ITERABLE",
            message=f"cannot sort a value of type {type_name(type(source))}",
            path="source",
        )

    items = source if isinstance(source, list) else list(source)
    if len(items) <= 1:
        # A consumed iterator cannot be handed back; return what was read.
        return items if _is_one_shot(source) else source

    def _key(item: Any) -> Any:
        value = get_property(item, property_name, _MISSING)
        if value is _MISSING:
            raise PropertyNotFoundError(
                code="E_SORT_PROPERTY_NOT_FOUND",
                message=f"{type_name(type(item))} has no property {property_name!r}",
                path=property_name,
            )
        return value

    return sorted(
        items,
        key=_key,
        reverse=direction is SortDirection.DESCENDING,
    )


def _coerce_direction(direction: SortDirection | str) -> SortDirection:
    if isinstance(direction, SortDirection):
        return direction
    try:
        return SortDirection(str(direction).strip().lower())
    except ValueError:
        return SortDirection.UNKNOWN


def _is_one_shot(source: Iterable[Any]) -> bool:
    return iter(source) is source
