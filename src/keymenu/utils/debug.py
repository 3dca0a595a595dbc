"""Debug logging utility.

The menu owns the terminal while it is shown, so debug lines only go to the
log file. Errors are also echoed to stderr.
"""

import sys
from datetime import datetime

from keymenu.utils.config import Config, get_keymenu_dir

_config = None


def _get_config() -> Config:
    """Get cached config instance."""
    global _config
    if _config is None:
        _config = Config(get_keymenu_dir())
    return _config


def reload_config():
    """Reload config (call after debug mode changes)."""
    global _config
    _config = None


def _log_to_file(line: str):
    """Append line to debug log file."""
    try:
        log_path = _get_config().log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "a") as f:
            f.write(line + "\n")
    except OSError:
        pass


def debug(category: str, message: str, **kwargs):
    """Log debug message if debug mode is enabled.

    Args:
        category: Category like 'input', 'render', 'state', 'terminal'
        message: Debug message
        **kwargs: Additional key=value pairs to log
    """
    config = _get_config()
    if not config.debug:
        return

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    extras = " ".join(f"{k}={v}" for k, v in kwargs.items()) if kwargs else ""
    line = f"[keymenu:{category}] {timestamp} {message}"
    if extras:
        line += f" | {extras}"

    _log_to_file(line)


def debug_input(message: str, **kwargs):
    """Log input-decoder debug message."""
    debug("input", message, **kwargs)


def debug_render(message: str, **kwargs):
    """Log render debug message."""
    debug("render", message, **kwargs)


def debug_state(message: str, **kwargs):
    """Log state-machine debug message."""
    debug("state", message, **kwargs)


def debug_dispatch(message: str, **kwargs):
    """Log action-dispatch debug message."""
    debug("dispatch", message, **kwargs)


def debug_terminal(message: str, **kwargs):
    """Log terminal-mode debug message."""
    debug("terminal", message, **kwargs)


def log_error(category: str, message: str, exc: Exception = None):
    """Log error message ALWAYS (even if debug mode is off).

    Called after the terminal has been restored, so printing to stderr
    does not corrupt the menu.

    Args:
        category: Category like 'session', 'terminal'
        message: Error message
        exc: Optional exception to include traceback
    """
    import traceback

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    line = f"[keymenu:{category}] {timestamp} ERROR: {message}"

    if exc:
        tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
        line += "\n" + "".join(tb)

    _log_to_file(line)

    try:
        print(line, file=sys.stderr)
    except BrokenPipeError:
        pass  # Parent process closed stderr, continue silently
