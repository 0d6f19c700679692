from __future__ import annotations

import typing
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional

from graph_projector.core.access.accessors import declared_properties, list_properties
from graph_projector.core.model import Classification
from graph_projector.core.registry.type_registry import TypeRegistry


_EXPANDABLE_ELEMENTS = (Classification.DIRECT, Classification.BLIND)
# Runtime values may also nest collections of expandable elements.
_EXPANDABLE_VALUES = _EXPANDABLE_ELEMENTS + (Classification.COLLECTION,)
_EMPTY = object()


def _origin(tp: Any) -> Any:
    return typing.get_origin(tp) or tp


def _element_type(tp: Any) -> Any:
    """Declared element type of a parameterized collection, or Any."""
    args = typing.get_args(tp)
    if _origin(tp) is tuple and len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    if len(args) == 1:
        return args[0]
    return Any


def _is_collection_type(tp: Any) -> bool:
    origin = _origin(tp)
    if not isinstance(origin, type):
        return False
    return issubclass(origin, Iterable) and not issubclass(origin, Mapping)


def _exposes_properties(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    if issubclass(tp, Mapping):
        return True
    if tp.__module__ == "builtins":
        return False
    return bool(declared_properties(tp))


def _unknown_elements(registry: TypeRegistry) -> Classification:
    # Element type unknown until runtime; only blind expansion can take it.
    return Classification.COLLECTION if registry.expand_blind_objects else Classification.OPAQUE


def classify(registry: TypeRegistry, tp: Any) -> Classification:
    """Decide how a type expands.

    Priority is fixed: blacklist, registered mapping, collection of expandable
    elements, blind object. Anything else is opaque.
    """
    origin = _origin(tp)
    if registry.is_blacklisted(origin):
        return Classification.OPAQUE
    if isinstance(tp, type) and registry.lookup(tp) is not None:
        return Classification.DIRECT
    if _is_collection_type(tp):
        element = _element_type(tp)
        if element is Any:
            return _unknown_elements(registry)
        if classify(registry, element) in _EXPANDABLE_ELEMENTS:
            return Classification.COLLECTION
        return Classification.OPAQUE
    if registry.expand_blind_objects and _exposes_properties(origin):
        return Classification.BLIND
    return Classification.OPAQUE


def classify_value(
    registry: TypeRegistry, value: Any, _seen: Optional[set[int]] = None
) -> Classification:
    """Classify a runtime value.

    Collections are judged by their first non-None element (sequences are
    assumed uniform); an empty or all-None collection is still a collection.
    A collection reached again while peeking into itself is skipped, so
    self-containing lists classify without recursing forever. One-shot
    iterators cannot be peeked and are treated like an unparameterized
    collection type. Plain instances with public attributes count as blind
    even when their class declares none.
    """
    if value is None:
        return Classification.OPAQUE

    tp = type(value)
    if registry.is_blacklisted(tp):
        return Classification.OPAQUE
    if registry.lookup(tp) is not None:
        return Classification.DIRECT

    if _is_collection_type(tp):
        if isinstance(value, Iterator):
            return _unknown_elements(registry)
        seen = set() if _seen is None else _seen
        seen.add(id(value))
        first = _peek(value, seen)
        if first is _EMPTY:
            return Classification.COLLECTION
        if classify_value(registry, first, seen) in _EXPANDABLE_VALUES:
            return Classification.COLLECTION
        return Classification.OPAQUE

    if registry.expand_blind_objects:
        if _exposes_properties(tp):
            return Classification.BLIND
        if tp.__module__ != "builtins" and list_properties(value):
            return Classification.BLIND
    return Classification.OPAQUE


def _peek(value: Iterable[Any], seen: set[int]) -> Any:
    for item in value:
        if item is None or id(item) in seen:
            continue
        return item
    return _EMPTY


def will_expand_type(registry: TypeRegistry, tp: Any) -> bool:
    return classify(registry, tp) is not Classification.OPAQUE


def will_expand(registry: TypeRegistry, value: Any) -> bool:
    if value is None:
        return False
    return classify_value(registry, value) is not Classification.OPAQUE
