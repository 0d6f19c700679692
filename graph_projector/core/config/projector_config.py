from __future__ import annotations

import importlib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from graph_projector.core.registry.type_registry import DEFAULT_BLACKLIST, DEFAULT_MAX_DEPTH, TypeRegistry


class ProjectorConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ProjectorSettings:
    expand_blind_objects: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    # Extra terminal types on top of the defaults.
    blacklist: tuple[type, ...] = field(default_factory=tuple)


def resolve_type(dotted: str) -> type:
    """Resolve ``"decimal.Decimal"`` or ``"pkg.mod:Class"`` to the class object."""
    if ":" in dotted:
        module_name, _, attr = dotted.partition(":")
    else:
        module_name, _, attr = dotted.rpartition(".")
    if not module_name or not attr:
        raise ProjectorConfigError(f"blacklist entry '{dotted}' must be a dotted import path")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in attr.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as e:
        raise ProjectorConfigError(f"blacklist entry '{dotted}' cannot be imported: {e}") from e
    if not isinstance(obj, type):
        raise ProjectorConfigError(f"blacklist entry '{dotted}' is not a class")
    return obj


def parse_settings(raw: Any) -> ProjectorSettings:
    """Validate a config mapping.

    Format:
      expand_blind_objects: true
      max_depth: 32
      blacklist: ["decimal.Decimal", "myapp.models:Secret"]
    """
    if raw is None:
        return ProjectorSettings()
    if not isinstance(raw, dict):
        raise ProjectorConfigError("config file must be a mapping")

    unknown = sorted(str(k) for k in set(raw) - {"expand_blind_objects", "max_depth", "blacklist"})
    if unknown:
        raise ProjectorConfigError(f"unknown config keys: {', '.join(unknown)}")

    settings = ProjectorSettings()

    blind = raw.get("expand_blind_objects", settings.expand_blind_objects)
    if not isinstance(blind, bool):
        raise ProjectorConfigError("expand_blind_objects must be a boolean")

    depth = raw.get("max_depth", settings.max_depth)
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise ProjectorConfigError("max_depth must be a positive integer")

    entries = raw.get("blacklist", [])
    if not isinstance(entries, list):
        raise ProjectorConfigError("blacklist must be a list of dotted import paths")
    types: list[type] = []
    for item in entries:
        if not isinstance(item, str) or not item.strip():
            raise ProjectorConfigError("blacklist items must be non-empty strings")
        types.append(resolve_type(item.strip()))

    return replace(settings, expand_blind_objects=blind, max_depth=depth, blacklist=tuple(types))


def load_config_file(path: str | Path) -> ProjectorSettings:
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ProjectorConfigError(f"config file is not valid YAML: {e}") from e
    return parse_settings(raw)


def build_registry(settings: ProjectorSettings | None = None) -> TypeRegistry:
    settings = settings or ProjectorSettings()
    return TypeRegistry(
        blacklist=DEFAULT_BLACKLIST + settings.blacklist,
        expand_blind_objects=settings.expand_blind_objects,
        max_depth=settings.max_depth,
    )


def load_settings(config_file: str | None) -> ProjectorSettings:
    if not config_file:
        return ProjectorSettings()
    return load_config_file(config_file)
