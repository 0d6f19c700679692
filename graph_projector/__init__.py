"""
graph_projector: include-driven projection of in-memory object graphs.

Register the source types an API exposes, then ask an :class:`Expander` for
exactly the fields (and nested relations) a caller listed:

    registry = TypeRegistry()
    registry.register(Person, MappingDefinition.of("name", "friends"))
    Expander(registry).expand(ada, includes="name,friends.name")
"""

from graph_projector.core.errors import (
    DocumentLoadError,
    ExpansionDepthError,
    InvalidArgumentError,
    ProjectionError,
    PropertyNotFoundError,
    UnknownMappingError,
)
from graph_projector.core.model import (
    Classification,
    Context,
    Factory,
    MappingDefinition,
    PropertyReference,
    PropertyRule,
    SortDirection,
    Translator,
    parse_includes,
)
from graph_projector.core.registry.type_registry import TypeRegistry
from graph_projector.core.expand.classify import classify, classify_value
from graph_projector.core.expand.expander import Expander
from graph_projector.core.sort.sort_items import sort_items

__all__ = [
    # Errors
    "ProjectionError",
    "UnknownMappingError",
    "InvalidArgumentError",
    "PropertyNotFoundError",
    "ExpansionDepthError",
    "DocumentLoadError",
    # Model
    "Classification",
    "Context",
    "Factory",
    "Translator",
    "MappingDefinition",
    "PropertyReference",
    "PropertyRule",
    "SortDirection",
    "parse_includes",
    # Engine
    "TypeRegistry",
    "classify",
    "classify_value",
    "Expander",
    "sort_items",
]
