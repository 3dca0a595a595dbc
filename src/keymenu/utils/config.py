"""Configuration management."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from keymenu.utils.exceptions import ConfigError


def get_keymenu_dir() -> Path:
    """Get the keymenu data directory (XDG-compliant)."""
    if env_dir := os.environ.get("KEYMENU_DIR"):
        return Path(env_dir)
    return Path.home() / ".config" / "keymenu"


class Config:
    """Menu configuration."""

    # Toggleable settings with descriptions (attr_name -> description)
    TOGGLES: dict[str, str] = {
        "debug": "Log to ~/.config/keymenu/debug.log",
        "show_legend": "Show key legend under the menu",
        "clear_on_exit": "Erase the menu when it closes",
        "suspend_during_action": "Leave raw mode while an action runs",
    }

    def __init__(self, keymenu_dir: Optional[Path] = None):
        """Load config from directory."""
        self.keymenu_dir = keymenu_dir or get_keymenu_dir()
        self._config_file = self.keymenu_dir / "config.json"
        self._load()

    def _load(self):
        """Load config from file."""
        from keymenu.utils.constants import (
            DEFAULT_ESCAPE_TIMEOUT_MS,
            DEFAULT_HINT_STYLE,
            DEFAULT_MARKER,
            DEFAULT_NORMAL_STYLE,
            DEFAULT_SELECTED_STYLE,
            DEFAULT_TITLE_STYLE,
        )

        # Set defaults
        self.escape_timeout_ms = DEFAULT_ESCAPE_TIMEOUT_MS
        self.marker = DEFAULT_MARKER
        self.selected_style = DEFAULT_SELECTED_STYLE
        self.normal_style = DEFAULT_NORMAL_STYLE
        self.hint_style = DEFAULT_HINT_STYLE
        self.title_style = DEFAULT_TITLE_STYLE
        self.show_legend = True
        self.clear_on_exit = True
        self.suspend_during_action = True
        self.debug = False
        # Env var overrides persisted in config.json
        self.env: dict[str, str] = {}

        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
                self.escape_timeout_ms = data.get(
                    "escape_timeout_ms", DEFAULT_ESCAPE_TIMEOUT_MS
                )
                self.marker = data.get("marker", DEFAULT_MARKER)
                self.selected_style = data.get("selected_style", DEFAULT_SELECTED_STYLE)
                self.normal_style = data.get("normal_style", DEFAULT_NORMAL_STYLE)
                self.hint_style = data.get("hint_style", DEFAULT_HINT_STYLE)
                self.title_style = data.get("title_style", DEFAULT_TITLE_STYLE)
                self.show_legend = data.get("show_legend", True)
                self.clear_on_exit = data.get("clear_on_exit", True)
                self.suspend_during_action = data.get("suspend_during_action", True)
                self.debug = data.get("debug", False)
                self.env = data.get("env", {})
            except (json.JSONDecodeError, IOError):
                pass

        # Apply env section from config, then shell env vars override
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply env overrides: first from config.env, then from shell KEYMENU_* vars."""
        prefix = "KEYMENU_"

        def apply_env_dict(env_dict: dict[str, str]):
            for key, value in env_dict.items():
                # Support both KEYMENU_FOO and FOO formats in config.env
                if key.startswith(prefix):
                    attr_name = key[len(prefix) :].lower()
                else:
                    attr_name = key.lower()
                if attr_name in ("env", "keymenu_dir", "dir") or not hasattr(
                    self, attr_name
                ):
                    continue
                # Convert value based on current attribute type
                current = getattr(self, attr_name)
                if isinstance(current, bool):
                    setattr(self, attr_name, value.lower() in ("true", "1", "yes"))
                elif isinstance(current, int):
                    try:
                        setattr(self, attr_name, int(value))
                    except ValueError:
                        pass
                else:
                    setattr(self, attr_name, value)

        # First apply config.env (persisted overrides)
        apply_env_dict(self.env)

        # Then apply shell env vars (highest priority)
        shell_env = {k: v for k, v in os.environ.items() if k.startswith(prefix)}
        apply_env_dict(shell_env)

    def as_dict(self) -> dict[str, Any]:
        """Return the persisted settings."""
        return {
            "escape_timeout_ms": self.escape_timeout_ms,
            "marker": self.marker,
            "selected_style": self.selected_style,
            "normal_style": self.normal_style,
            "hint_style": self.hint_style,
            "title_style": self.title_style,
            "show_legend": self.show_legend,
            "clear_on_exit": self.clear_on_exit,
            "suspend_during_action": self.suspend_during_action,
            "debug": self.debug,
            "env": self.env,
        }

    def save(self):
        """Save config to file."""
        self.keymenu_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self.as_dict(), indent=2))

    @property
    def escape_timeout(self) -> float:
        """Escape disambiguation wait in seconds.

        Raises:
            ConfigError: If the configured value is negative or not a number.
        """
        value = self.escape_timeout_ms
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ConfigError(f"escape_timeout_ms must be a non-negative number: {value!r}")
        return value / 1000

    @property
    def log_path(self) -> Path:
        """Path to debug log file."""
        return self.keymenu_dir / "debug.log"

    def get_toggles(self) -> list[tuple[str, str, bool]]:
        """Get all toggleable settings with current values.

        Returns list of (attr_name, description, is_enabled).
        """
        result = []
        for attr, desc in self.TOGGLES.items():
            value = getattr(self, attr, False)
            result.append((attr, desc, bool(value)))
        return result

    def set_toggle(self, attr: str, enabled: bool):
        """Set a toggle value and persist it."""
        if attr not in self.TOGGLES:
            return
        setattr(self, attr, enabled)
        self.save()
