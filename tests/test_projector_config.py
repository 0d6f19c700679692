from fractions import Fraction
from pathlib import Path

from graph_projector.core.config.projector_config import (
    ProjectorConfigError,
    ProjectorSettings,
    build_registry,
    load_config_file,
    load_settings,
    parse_settings,
)


def test_load_example_config():
    settings = load_config_file("examples/projector.yaml")
    assert settings.expand_blind_objects is False
    assert settings.max_depth == 16
    assert settings.blacklist == (Fraction,)


def test_build_registry_applies_settings_on_top_of_defaults():
    registry = build_registry(load_config_file("examples/projector.yaml"))
    assert registry.max_depth == 16
    assert registry.is_blacklisted(Fraction)
    assert registry.is_blacklisted(str)


def test_missing_config_means_defaults():
    assert load_settings(None) == ProjectorSettings()
    assert parse_settings(None) == ProjectorSettings()


def test_colon_import_paths(tmp_path: Path):
    p = tmp_path / "cfg.yaml"
    p.write_text("blacklist: ['collections:OrderedDict']\n", encoding="utf-8")
    settings = load_config_file(p)
    assert settings.blacklist[0].__name__ == "OrderedDict"


def test_invalid_configs_are_rejected():
    bad = [
        ["not", "a", "mapping"],
        {"max_depth": 0},
        {"max_depth": True},
        {"expand_blind_objects": "yes"},
        {"blacklist": "decimal.Decimal"},
        {"blacklist": ["nosuchmodule.Thing"]},
        {"blacklist": ["os.path.join"]},
        {"colour": "blue"},
    ]
    for raw in bad:
        try:
            parse_settings(raw)
            assert False, f"expected ProjectorConfigError for {raw!r}"
        except ProjectorConfigError:
            pass


def test_invalid_yaml(tmp_path: Path):
    p = tmp_path / "cfg.yaml"
    p.write_text("max_depth: [1, 2\n", encoding="utf-8")
    try:
        load_config_file(p)
        assert False, "expected ProjectorConfigError"
    except ProjectorConfigError as e:
        assert "YAML" in str(e)
