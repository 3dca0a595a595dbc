"""Menu option model."""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from keymenu.utils.exceptions import ConfigError
from keymenu.utils.text import has_control_chars

Action = Callable[[], object]


@dataclass(frozen=True)
class MenuOption:
    """A labeled entry and the action it runs when confirmed.

    Attributes:
        label: Display text, must be non-empty and a single line without
            control characters
        action: Called with no arguments when the option is confirmed;
            its return value is ignored
        hint: Optional secondary text shown under the option while selected
    """

    label: str
    action: Action
    hint: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label:
            raise ConfigError(f"option label must be a non-empty string: {self.label!r}")
        if not callable(self.action):
            raise ConfigError(f"action for option {self.label!r} is not callable")
        if has_control_chars(self.label):
            raise ConfigError(f"option label contains control characters: {self.label!r}")
        if self.hint is not None and not isinstance(self.hint, str):
            raise ConfigError(f"hint for option {self.label!r} must be a string")
        if self.hint is not None and has_control_chars(self.hint):
            raise ConfigError(f"hint for option {self.label!r} contains control characters")

    def with_hint(self, text: str) -> "MenuOption":
        """Return a copy of this option with the hint set."""
        return replace(self, hint=text)

    @classmethod
    def from_entry(cls, entry) -> "MenuOption":
        """Build an option from a MenuOption or a plain tuple.

        Accepts ``(label, action)`` and ``(label, hint, action)``.

        Raises:
            ConfigError: If the entry has another shape.
        """
        if isinstance(entry, cls):
            return entry
        if isinstance(entry, tuple):
            if len(entry) == 2:
                label, action = entry
                return cls(label, action)
            if len(entry) == 3:
                label, hint, action = entry
                return cls(label, action, hint)
        raise ConfigError(f"cannot build a menu option from {entry!r}")
