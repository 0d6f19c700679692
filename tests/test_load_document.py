import json

from graph_projector.core.errors import DocumentLoadError
from graph_projector.core.io.load_document import dump_document, load_document


def test_load_yaml_success():
    doc = load_document("examples/people.yaml")
    assert isinstance(doc, list)
    assert doc[0]["name"] == "Ada"


def test_load_json_success():
    doc = load_document("examples/scores.json")
    assert [r["x"] for r in doc] == [3, 1, 2]


def test_load_missing_file():
    try:
        load_document("examples/does-not-exist.yaml")
        assert False, "expected DocumentLoadError"
    except DocumentLoadError as e:
        assert e.code == "E_FILE_NOT_FOUND"


def test_load_unsupported_format(tmp_path):
    p = tmp_path / "doc.txt"
    p.write_text("hello", encoding="utf-8")
    try:
        load_document(str(p))
        assert False, "expected DocumentLoadError"
    except DocumentLoadError as e:
        assert e.code == "E_UNSUPPORTED_FORMAT"


def test_load_broken_json(tmp_path):
    p = tmp_path / "doc.json"
    p.write_text("{nope", encoding="utf-8")
    try:
        load_document(str(p))
        assert False, "expected DocumentLoadError"
    except DocumentLoadError as e:
        assert e.code == "E_JSON_PARSE"


def test_dump_creates_parent_dirs(tmp_path):
    out = tmp_path / "nested" / "out.json"
    dump_document({"a": [1, 2]}, str(out))
    assert json.loads(out.read_text(encoding="utf-8")) == {"a": [1, 2]}
