"""Checks for text drawn on the menu."""


def has_control_chars(text: str) -> bool:
    """Whether ``text`` holds characters that move the cursor or start escapes.

    Newlines and carriage returns would make one menu line take several
    rows, and ESC would start an escape sequence of its own.
    """
    return any(ch < " " or ch == "\x7f" for ch in text)
