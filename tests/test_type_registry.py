from dataclasses import dataclass
from decimal import Decimal

from graph_projector.core.model import MappingDefinition
from graph_projector.core.registry.type_registry import DEFAULT_BLACKLIST, TypeRegistry


@dataclass
class Person:
    name: str


@dataclass
class Employee(Person):
    badge: int = 0


class Tag(str):
    pass


def test_register_and_lookup():
    registry = TypeRegistry()
    definition = MappingDefinition.of("name")
    registry.register(Person, definition)
    assert registry.lookup(Person) is definition
    assert registry.registered_types == [Person]


def test_reregistering_replaces_definition_and_factory():
    registry = TypeRegistry()
    first = MappingDefinition.of("name")
    second = MappingDefinition.of("name", default_includes=["name"])

    registry.register(Person, first, factory=lambda ctx: {})
    registry.register(Person, second)

    assert registry.lookup(Person) is second
    assert registry.factory_for(Person) is None


def test_lookup_is_exact_type_only():
    registry = TypeRegistry()
    registry.register(Person, MappingDefinition.of("name"))
    assert registry.lookup(Employee) is None


def test_default_blacklist():
    registry = TypeRegistry()
    assert str in DEFAULT_BLACKLIST
    assert registry.is_blacklisted(str)
    assert registry.is_blacklisted(Tag)
    assert registry.is_blacklisted(Decimal)
    assert not registry.is_blacklisted(Person)


def test_blacklist_is_configurable():
    registry = TypeRegistry(blacklist=[Person])
    assert registry.is_blacklisted(Employee)
    assert not registry.is_blacklisted(str)

    registry.unblacklist(Person)
    registry.blacklist(int)
    assert registry.blacklisted_types == frozenset({int})


def test_registry_options():
    registry = TypeRegistry(expand_blind_objects=True, max_depth=5)
    assert registry.expand_blind_objects is True
    assert registry.max_depth == 5
