"""Constants used throughout keymenu."""

# Bounded wait used to tell a lone Escape from an escape sequence (ms)
DEFAULT_ESCAPE_TIMEOUT_MS = 50

# Maximum bytes taken from the terminal in a single read
READ_CHUNK_SIZE = 1024

# Rendering defaults
DEFAULT_MARKER = "> "
DEFAULT_SELECTED_STYLE = "bold white on blue"
DEFAULT_NORMAL_STYLE = ""
DEFAULT_HINT_STYLE = "color(187)"
DEFAULT_TITLE_STYLE = "bold"

LEGEND = "↑↓ navigate • Enter select • Esc quit"


# ANSI control sequences written directly to the terminal
class Ansi:
    """Raw control sequences not routed through rich."""

    HIDE_CURSOR = "\033[?25l"
    SHOW_CURSOR = "\033[?25h"


# Raw input bytes
class Byte:
    """Input bytes the decoder cares about."""

    ESC = 0x1B
    CR = 0x0D
    LF = 0x0A
    CSI = 0x5B  # '[' after ESC
    SS3 = 0x4F  # 'O' after ESC
