from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Iterable, Mapping, Optional

from graph_projector.core.access.accessors import get_property, list_properties, set_property
from graph_projector.core.errors import ExpansionDepthError, UnknownMappingError, type_name
from graph_projector.core.expand.classify import classify_value, will_expand, will_expand_type
from graph_projector.core.logging import get_logger
from graph_projector.core.model import (
    Classification,
    Context,
    MappingDefinition,
    PropertyReference,
    PropertyRule,
    SortDirection,
    as_references,
    parse_includes,
)
from graph_projector.core.registry.type_registry import TypeRegistry
from graph_projector.core.sort.sort_items import sort_items


logger = get_logger(__name__)

Includes = Iterable[PropertyReference | str] | str | None

_BLIND_RULE = PropertyRule()


class Expander:
    """Projects source objects into include-selected shapes.

    Registered types follow their MappingDefinition; collections are projected
    element by element; anything else with public properties is expanded blind
    when the registry allows it. Every object identity is expanded at most once
    per top-level call, later encounters become ``None``. A collection that
    contains itself becomes ``None`` where it recurs.
    """

    def __init__(self, registry: Optional[TypeRegistry] = None) -> None:
        self.registry = registry if registry is not None else TypeRegistry()

    def will_expand(self, source: Any) -> bool:
        return will_expand(self.registry, source)

    def will_expand_type(self, source_type: Any) -> bool:
        return will_expand_type(self.registry, source_type)

    def expand(
        self,
        source: Any,
        context: Optional[Context] = None,
        includes: Includes = None,
        visited: Optional[set[int]] = None,
        destination_type_hint: Optional[type] = None,
    ) -> Any:
        """Return the projection of *source*.

        ``includes`` are dotted property paths (``"Friends.Name"``), either as
        PropertyReference objects, strings, or one comma separated string. Paths
        that do not exist on the source are ignored.

        None and blacklisted values come back unchanged. Any other value the
        registry cannot expand raises UnknownMappingError.
        """
        if context is None:
            context = {}
        if visited is None:
            visited = set()
        refs = parse_includes(includes) if isinstance(includes, str) else as_references(includes)

        source = _materialize(source)
        if source is None or self.registry.is_blacklisted(type(source)):
            return source

        if classify_value(self.registry, source) is Classification.OPAQUE:
            name = type_name(type(source))
            raise UnknownMappingError(
                code="E_UNKNOWN_MAPPING",
                message=f"no mapping registered for type {name}",
                path=name,
            )

        return self._expand(source, context, refs, visited, destination_type_hint, 0, "$")

    def sort(self, source: Any, property_name: str, direction: SortDirection) -> Any:
        return sort_items(source, property_name, direction)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _expand(
        self,
        source: Any,
        context: Context,
        includes: list[PropertyReference],
        visited: set[int],
        hint: Optional[type],
        depth: int,
        path: str,
    ) -> Any:
        if depth > self.registry.max_depth:
            raise ExpansionDepthError(
                code="E_MAX_DEPTH",
                message=f"source graph is nested deeper than max_depth={self.registry.max_depth}",
                path=path,
            )

        kind = classify_value(self.registry, source)
        if kind is Classification.DIRECT:
            definition = self.registry.lookup(type(source))
            return self._expand_object(source, definition, context, includes, visited, depth, path)
        if kind is Classification.COLLECTION:
            return self._expand_collection(source, context, includes, visited, hint, depth, path)
        if kind is Classification.BLIND:
            return self._expand_object(source, None, context, includes, visited, depth, path)
        return source

    def _member(
        self,
        value: Any,
        context: Context,
        includes: list[PropertyReference],
        visited: set[int],
        depth: int,
        path: str,
    ) -> Any:
        value = _materialize(value)
        if not self.will_expand(value):
            return value
        return self._expand(value, context, includes, visited, None, depth + 1, path)

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def _expand_object(
        self,
        source: Any,
        definition: Optional[MappingDefinition],
        context: Context,
        includes: list[PropertyReference],
        visited: set[int],
        depth: int,
        path: str,
    ) -> Any:
        key = id(source)
        if key in visited:
            logger.debug("cycle at %s: %s already expanded", path, type_name(type(source)))
            return None
        visited.add(key)

        if definition is None:
            rules: Mapping[Any, PropertyRule] = {n: _BLIND_RULE for n in list_properties(source)}
            defaults: tuple[PropertyReference, ...] = ()
        else:
            rules = definition.properties
            defaults = definition.default_includes

        target = self._new_destination(type(source), definition, context)
        for name, child_includes in _select(rules, includes, defaults, path):
            rule = rules[name]
            child_path = f"{path}.{name}"
            if rule.translator is not None:
                value = rule.translator(source, context)
            else:
                raw = get_property(source, rule.source or name)
                value = self._member(raw, context, child_includes, visited, depth, child_path)
            set_property(target, name, value)
        return target

    def _expand_collection(
        self,
        source: Iterable[Any],
        context: Context,
        includes: list[PropertyReference],
        visited: set[int],
        hint: Optional[type],
        depth: int,
        path: str,
    ) -> Any:
        # A collection is on the visited set only while it is being walked, so a
        # list that contains itself stops here but a shared list is copied twice.
        key = id(source)
        if key in visited:
            logger.debug("cycle at %s: %s already being expanded", path, type_name(type(source)))
            return None
        visited.add(key)
        try:
            items = [
                self._member(item, context, includes, visited, depth, f"{path}[{i}]")
                for i, item in enumerate(source)
            ]
        finally:
            visited.discard(key)
        if hint is None or hint is list:
            return items
        return hint(items)

    def _new_destination(
        self,
        source_type: type,
        definition: Optional[MappingDefinition],
        context: Context,
    ) -> Any:
        factory = self.registry.factory_for(source_type)
        if factory is not None:
            return factory(context)
        if definition is not None and definition.destination is not None:
            return definition.destination()
        return {}


def _materialize(value: Any) -> Any:
    # One-shot iterators are read once into a list so they can be classified and walked.
    if isinstance(value, Iterator) and not isinstance(value, (str, bytes)):
        return list(value)
    return value


def _select(
    rules: Mapping[Any, PropertyRule],
    includes: list[PropertyReference],
    defaults: tuple[PropertyReference, ...],
    path: str,
) -> list[tuple[Any, list[PropertyReference]]]:
    """Pick the properties to populate at this level, with their narrowed includes.

    Requested names (or the defaults when nothing is requested here) plus
    ``always`` properties, minus explicit exclusions, in mapping order.
    """
    positive = [r for r in includes if not r.negated]
    negative = [r for r in includes if r.negated]
    if not positive and not defaults:
        # Every property, including mapping keys that are not valid include text.
        requested: set[Any] = set(rules)
    else:
        if not positive:
            positive = list(defaults)
        requested = {r.head for r in positive}

    excluded = {r.head for r in negative if r.tail is None}

    for name in sorted(requested - set(rules), key=str):
        logger.debug("ignoring include %s.%s: no such property", path, name)

    selected: list[tuple[Any, list[PropertyReference]]] = []
    for name, rule in rules.items():
        if name in excluded:
            continue
        if name not in requested and not rule.always:
            continue
        child: list[PropertyReference] = []
        for ref in positive + negative:
            if ref.head == name and ref.tail is not None:
                child.append(ref.tail)
        selected.append((name, child))
    return selected
