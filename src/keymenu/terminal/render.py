"""Menu drawing with rich."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from rich.console import Console
from rich.control import Control
from rich.errors import StyleSyntaxError
from rich.segment import ControlType
from rich.style import Style
from rich.text import Text

from keymenu.utils.constants import (
    DEFAULT_HINT_STYLE,
    DEFAULT_MARKER,
    DEFAULT_NORMAL_STYLE,
    DEFAULT_SELECTED_STYLE,
    DEFAULT_TITLE_STYLE,
    LEGEND,
)
from keymenu.utils.debug import debug_render
from keymenu.utils.exceptions import ConfigError
from keymenu.utils.text import has_control_chars

if TYPE_CHECKING:
    from keymenu.core.options import MenuOption
    from keymenu.utils.config import Config


def _parse_style(name: str, value: str) -> Style:
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string: {value!r}")
    try:
        return Style.parse(value)
    except StyleSyntaxError as e:
        raise ConfigError(f"invalid {name}: {value!r} ({e})") from e


@dataclass(frozen=True)
class MenuTheme:
    """Styles and marker used to draw a menu."""

    marker: str = DEFAULT_MARKER
    selected: Style = Style.parse(DEFAULT_SELECTED_STYLE)
    normal: Style = Style.parse(DEFAULT_NORMAL_STYLE)
    hint: Style = Style.parse(DEFAULT_HINT_STYLE)
    title: Style = Style.parse(DEFAULT_TITLE_STYLE)
    show_legend: bool = True

    @classmethod
    def from_config(cls, config: "Config") -> "MenuTheme":
        """Build a theme from config style strings.

        Raises:
            ConfigError: If the marker or a style is not a string, or a style
                cannot be parsed.
        """
        if not isinstance(config.marker, str) or has_control_chars(config.marker):
            raise ConfigError(f"marker must be a plain string: {config.marker!r}")
        return cls(
            marker=config.marker,
            selected=_parse_style("selected_style", config.selected_style),
            normal=_parse_style("normal_style", config.normal_style),
            hint=_parse_style("hint_style", config.hint_style),
            title=_parse_style("title_style", config.title_style),
            show_legend=config.show_legend,
        )


class MenuRenderer:
    """Draws a menu in place, replacing the previous drawing.

    Every line is printed unwrapped so the number of terminal rows the
    menu occupies is known; the next render erases exactly that many.
    """

    def __init__(self, console: Optional[Console] = None, theme: Optional[MenuTheme] = None):
        self.console = console or Console(highlight=False)
        self.theme = theme or MenuTheme()
        self.lines_drawn = 0

    def build_lines(
        self,
        options: Sequence["MenuOption"],
        selected_index: int,
        title: Optional[str] = None,
    ) -> list[Text]:
        """Build the lines of one frame, top to bottom."""
        theme = self.theme
        padding = " " * len(theme.marker)
        lines: list[Text] = []

        if title:
            lines.append(Text(title, style=theme.title))

        for i, option in enumerate(options):
            if i == selected_index:
                lines.append(Text(f"{theme.marker}{option.label}", style=theme.selected))
                if option.hint:
                    lines.append(Text(f"{padding}{option.hint}", style=theme.hint))
            else:
                lines.append(Text(f"{padding}{option.label}", style=theme.normal))

        if theme.show_legend:
            lines.append(Text(LEGEND, style="dim"))

        return lines

    def render(
        self,
        options: Sequence["MenuOption"],
        selected_index: int,
        title: Optional[str] = None,
    ) -> None:
        """Erase the previous frame and draw the menu."""
        lines = self.build_lines(options, selected_index, title)
        with self.console:
            self._erase()
            for line in lines:
                self.console.print(line, no_wrap=True, overflow="ellipsis", crop=True)
        self.lines_drawn = len(lines)
        debug_render("frame", selected=selected_index, lines=self.lines_drawn)

    def clear(self) -> None:
        """Erase the current frame without drawing a new one."""
        if not self.lines_drawn:
            return
        with self.console:
            self._erase()
        self.lines_drawn = 0

    def _erase(self) -> None:
        if not self.lines_drawn:
            return
        self.console.control(
            Control(
                ControlType.CARRIAGE_RETURN,
                *((ControlType.CURSOR_UP, 1), (ControlType.ERASE_IN_LINE, 2))
                * self.lines_drawn,
            )
        )
