from __future__ import annotations

import pytest

from pathkit.config import Settings, load_settings, settings
from pathkit.config.defaults import _env, _env_float, _env_int


def test_defaults():
    cfg = load_settings()
    assert cfg == Settings()
    assert cfg.max_symlinks == 40
    assert cfg.max_depth == 512
    assert cfg.log_level == "warning"
    assert cfg.log_dir is None
    assert cfg.native_tool is None
    assert cfg.native_timeout == 10.0
    assert not cfg.native_disabled


def test_module_level_settings_instance():
    assert isinstance(settings, Settings)


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PK_MAX_SYMLINKS", "8")
    monkeypatch.setenv("PK_MAX_DEPTH", "64")
    monkeypatch.setenv("PK_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("PK_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("PK_NATIVE_TOOL", "readlink")
    monkeypatch.setenv("PK_NATIVE_TIMEOUT", "1.5")

    cfg = load_settings()
    assert cfg.max_symlinks == 8
    assert cfg.max_depth == 64
    assert cfg.log_level == "debug"
    assert cfg.log_dir == str(tmp_path)
    assert cfg.native_tool == "readlink"
    assert cfg.native_timeout == 1.5


@pytest.mark.parametrize("raw", ["abc", "", "-3"])
def test_invalid_bounds_fall_back_to_defaults(monkeypatch, raw):
    monkeypatch.setenv("PK_MAX_SYMLINKS", raw)
    monkeypatch.setenv("PK_MAX_DEPTH", raw)
    cfg = load_settings()
    assert cfg.max_symlinks == 40
    assert cfg.max_depth == 512


def test_native_disabled(monkeypatch):
    monkeypatch.setenv("PK_NATIVE_TOOL", "None")
    assert load_settings().native_disabled


def test_blank_optional_values_are_unset(monkeypatch):
    monkeypatch.setenv("PK_LOG_DIR", "  ")
    monkeypatch.setenv("PK_NATIVE_TOOL", "")
    cfg = load_settings()
    assert cfg.log_dir is None
    assert cfg.native_tool is None


def test_env_helpers_require_prefix():
    with pytest.raises(ValueError):
        _env("MAX_DEPTH", "1")
    with pytest.raises(ValueError):
        _env_int("PATHKIT_MAX_DEPTH", 1)


def test_env_float_fallback(monkeypatch):
    monkeypatch.setenv("PK_NATIVE_TIMEOUT", "soon")
    assert _env_float("PK_NATIVE_TIMEOUT", 4.0) == 4.0


def test_settings_are_frozen():
    with pytest.raises(Exception):
        settings.max_depth = 1  # type: ignore[misc]


def test_zero_symlink_bound_is_kept(monkeypatch):
    monkeypatch.setenv("PK_MAX_SYMLINKS", "0")
    monkeypatch.setenv("PK_MAX_DEPTH", "0")
    cfg = load_settings()
    assert cfg.max_symlinks == 0
    assert cfg.max_depth == 512
