"""Tests for configuration module."""

import json
from pathlib import Path

import pytest

from keymenu.utils.config import Config
from keymenu.utils.exceptions import ConfigError


def test_config_default_values(mock_keymenu_dir):
    """Config should have sensible defaults."""
    config = Config(mock_keymenu_dir)

    assert config.escape_timeout_ms == 50
    assert config.escape_timeout == 0.05
    assert config.marker == "> "
    assert config.selected_style == "bold white on blue"
    assert config.hint_style == "color(187)"
    assert config.show_legend is True
    assert config.clear_on_exit is True
    assert config.suspend_during_action is True
    assert config.debug is False


def test_config_loads_from_file(mock_keymenu_dir):
    """Config should load values from config.json."""
    (mock_keymenu_dir / "config.json").write_text(
        json.dumps({"escape_timeout_ms": 25, "marker": "→ ", "show_legend": False})
    )

    config = Config(mock_keymenu_dir)

    assert config.escape_timeout_ms == 25
    assert config.marker == "→ "
    assert config.show_legend is False


def test_config_ignores_malformed_file(mock_keymenu_dir):
    (mock_keymenu_dir / "config.json").write_text("{not json")

    config = Config(mock_keymenu_dir)

    assert config.escape_timeout_ms == 50


def test_config_save(mock_keymenu_dir):
    """Config should save changes to file."""
    config = Config(mock_keymenu_dir)
    config.hint_style = "italic"
    config.save()

    data = json.loads((mock_keymenu_dir / "config.json").read_text())
    assert data["hint_style"] == "italic"
    assert Config(mock_keymenu_dir).hint_style == "italic"


def test_config_get_keymenu_dir_from_env(temp_dir, monkeypatch):
    """Config should use KEYMENU_DIR env var if set."""
    custom_dir = temp_dir / "custom"
    custom_dir.mkdir()
    monkeypatch.setenv("KEYMENU_DIR", str(custom_dir))

    from keymenu.utils.config import get_keymenu_dir

    assert get_keymenu_dir() == custom_dir


def test_config_default_keymenu_dir(monkeypatch):
    """Config should default to ~/.config/keymenu (XDG-compliant)."""
    monkeypatch.delenv("KEYMENU_DIR", raising=False)

    from keymenu.utils.config import get_keymenu_dir

    assert get_keymenu_dir() == Path.home() / ".config" / "keymenu"


def test_env_override_int(mock_keymenu_dir, monkeypatch):
    monkeypatch.setenv("KEYMENU_ESCAPE_TIMEOUT_MS", "80")
    assert Config(mock_keymenu_dir).escape_timeout_ms == 80


def test_env_override_bool(mock_keymenu_dir, monkeypatch):
    monkeypatch.setenv("KEYMENU_SHOW_LEGEND", "no")
    monkeypatch.setenv("KEYMENU_DEBUG", "1")

    config = Config(mock_keymenu_dir)

    assert config.show_legend is False
    assert config.debug is True


def test_env_override_invalid_int_ignored(mock_keymenu_dir, monkeypatch):
    monkeypatch.setenv("KEYMENU_ESCAPE_TIMEOUT_MS", "soon")
    assert Config(mock_keymenu_dir).escape_timeout_ms == 50


def test_config_env_section_applied(mock_keymenu_dir, monkeypatch):
    """Persisted env entries apply, shell env vars win."""
    (mock_keymenu_dir / "config.json").write_text(
        json.dumps({"env": {"KEYMENU_MARKER": "* ", "HINT_STYLE": "dim"}})
    )
    monkeypatch.setenv("KEYMENU_MARKER", "# ")

    config = Config(mock_keymenu_dir)

    assert config.hint_style == "dim"
    assert config.marker == "# "


def test_invalid_escape_timeout(mock_keymenu_dir):
    config = Config(mock_keymenu_dir)
    config.escape_timeout_ms = "fast"
    with pytest.raises(ConfigError):
        config.escape_timeout


def test_toggles(mock_keymenu_dir):
    config = Config(mock_keymenu_dir)
    names = [name for name, _, _ in config.get_toggles()]
    assert "debug" in names
    assert "clear_on_exit" in names

    config.set_toggle("clear_on_exit", False)
    assert Config(mock_keymenu_dir).clear_on_exit is False


def test_set_toggle_ignores_unknown(mock_keymenu_dir):
    config = Config(mock_keymenu_dir)
    config.set_toggle("marker", False)
    assert config.marker == "> "
    assert not (mock_keymenu_dir / "config.json").exists()
