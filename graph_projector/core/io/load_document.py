from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml

from graph_projector.core.errors import DocumentLoadError


OutputFormat = Literal["json", "yaml"]


def load_document(path: str) -> Any:
    """Load a YAML/JSON document into plain Python data.

    No shape checks; any top-level value is returned as parsed.
    """

    p = Path(path)
    if not p.exists():
        raise DocumentLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            path=str(p),
        )

    suffix = p.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise DocumentLoadError(
            code="E_UNSUPPORTED_FORMAT",
            message="supported formats are .yaml/.yml and .json",
            path=str(p),
        )

    try:
        raw_text = p.read_text(encoding="utf-8")
    except OSError as e:  # pragma: no cover
        raise DocumentLoadError(code="E_FILE_READ", message=str(e), path=str(p)) from e

    try:
        if suffix == ".json":
            return json.loads(raw_text)
        return yaml.safe_load(raw_text)
    except (yaml.YAMLError, ValueError) as e:
        code = "E_JSON_PARSE" if suffix == ".json" else "E_YAML_PARSE"
        raise DocumentLoadError(code=code, message=str(e), path=str(p)) from e


def render_document(data: Any, fmt: OutputFormat = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def dump_document(data: Any, path: str, fmt: OutputFormat = "json") -> None:
    p = Path(path)
    if str(p.parent) not in (".", ""):
        p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_document(data, fmt), encoding="utf-8")
