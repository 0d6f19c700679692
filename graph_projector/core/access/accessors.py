"""Dynamic property access over plain Python objects.

Everything the projector reads or writes goes through these helpers so the
engine never needs to know whether it is looking at a dataclass, a mapping,
a slotted class or an ordinary instance.
"""
from __future__ import annotations

import dataclasses
import inspect
import typing
from collections.abc import Mapping, MutableMapping
from typing import Any


_MISSING = object()


def _is_public(name: Any) -> bool:
    return isinstance(name, str) and bool(name) and not name.startswith("_")


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def declared_properties(tp: type) -> list[str]:
    """Public readable property names a type declares, in declaration order.

    Sources: dataclass fields, class annotations, public ``__slots__`` and
    ``property`` descriptors, walking the MRO from base to subclass.
    """
    names: list[str] = []

    def _add(name: str) -> None:
        if _is_public(name) and name not in names:
            names.append(name)

    if dataclasses.is_dataclass(tp):
        for f in dataclasses.fields(tp):
            _add(f.name)

    for klass in reversed(getattr(tp, "__mro__", (tp,))):
        if klass is object:
            continue
        for name, annotation in inspect.get_annotations(klass).items():
            if not _is_class_var(annotation):
                _add(name)
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            _add(name)
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                _add(name)
    return names


def list_properties(obj: Any) -> list[Any]:
    """Readable property names of a runtime value.

    Mapping keys are data, so every key is listed whatever its type or
    spelling. Objects list only their public attributes.
    """
    if isinstance(obj, Mapping):
        return list(obj.keys())

    names = declared_properties(type(obj))
    instance_vars = getattr(obj, "__dict__", None)
    if isinstance(instance_vars, dict):
        for name in instance_vars:
            if _is_public(name) and name not in names:
                names.append(name)
    return names


def has_property(obj: Any, name: Any) -> bool:
    if isinstance(obj, Mapping):
        return name in obj
    return _get_attr(obj, name) is not _MISSING


def get_property(obj: Any, name: Any, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    value = _get_attr(obj, name)
    return default if value is _MISSING else value


def set_property(target: Any, name: Any, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[name] = value
        return
    setattr(target, name, value)


def _get_attr(obj: Any, name: Any) -> Any:
    # Explicit names may be private; only reflection filters on visibility.
    if not isinstance(name, str) or not name:
        return _MISSING
    try:
        return getattr(obj, name)
    except AttributeError:
        return _MISSING
