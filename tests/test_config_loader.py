from __future__ import annotations

import pytest

from core import config_loader
from core.config_loader import get_config, get_nested, reload_config


@pytest.fixture(autouse=True)
def _clear_cache(monkeypatch):
    monkeypatch.setattr(config_loader, "_CONFIG_CACHE", None)
    for var in config_loader.ENV_TO_CFG:
        monkeypatch.delenv(var, raising=False)


def test_default_config_has_required_keys():
    cfg = get_config()
    assert get_nested(cfg, "strategies", "noflat", "period") == 20
    assert get_nested(cfg, "pipeline", "buffer_capacity") >= 1


def test_env_overrides_are_typed(monkeypatch):
    monkeypatch.setenv("NOFLAT_THRESHOLD", "2.5")
    monkeypatch.setenv("DELAY_PERIOD", "4")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = reload_config()

    assert cfg["strategies"]["noflat"]["threshold"] == 2.5
    assert cfg["strategies"]["delay"]["period"] == 4
    assert cfg["environment"]["log_level"] == "DEBUG"


def test_invalid_env_value_keeps_yaml(monkeypatch):
    monkeypatch.setenv("BBW_PERIOD", "abc")
    assert reload_config()["strategies"]["bbw"]["period"] == 20


def test_cache_is_reused():
    assert get_config() is get_config()


def test_missing_keys_raise(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("environment:\n  log_level: INFO\n")

    with pytest.raises(ValueError, match="pipeline.buffer_capacity"):
        get_config(path, use_cache=False)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_config(tmp_path / "nope.yaml", use_cache=False)


def test_get_nested_default():
    assert get_nested({"a": {"b": 1}}, "a", "c", default="x") == "x"
