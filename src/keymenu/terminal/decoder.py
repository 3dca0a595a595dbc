"""Raw terminal bytes to menu key events.

A lone Escape and the start of an arrow key both begin with ESC, so a
trailing ESC prefix is held back until more bytes arrive or a short
bounded wait expires. Everything complete in a buffered read is decoded
at once, so two arrow presses delivered in one read yield two events.
"""

import os
import select
from collections import deque
from enum import Enum
from typing import Optional

import readchar

from keymenu.terminal.mode import stdin_fd
from keymenu.utils.constants import DEFAULT_ESCAPE_TIMEOUT_MS, READ_CHUNK_SIZE, Byte
from keymenu.utils.debug import debug_input
from keymenu.utils.exceptions import TerminalError


class KeyEvent(Enum):
    """A decoded key press."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    UNRECOGNIZED = "unrecognized"


# Complete escape sequences with a meaning. SS3 arrows are what terminals
# send in application cursor mode.
SEQUENCES: dict[bytes, KeyEvent] = {
    readchar.key.UP.encode(): KeyEvent.MOVE_UP,
    readchar.key.DOWN.encode(): KeyEvent.MOVE_DOWN,
    b"\x1bOA": KeyEvent.MOVE_UP,
    b"\x1bOB": KeyEvent.MOVE_DOWN,
}

CONFIRM_BYTES = frozenset({ord(readchar.key.CR), ord(readchar.key.LF)})


def _scan_csi(buf: bytes, start: int) -> tuple[Optional[int], bool]:
    """Find the final byte of a CSI sequence whose parameters begin at ``start``.

    Returns:
        Tuple of (final_byte_index, malformed). ``final_byte_index`` is None
        when the buffer ends before the sequence does.
    """
    for i in range(start, len(buf)):
        byte = buf[i]
        if 0x40 <= byte <= 0x7E:
            return i, False
        if not 0x20 <= byte <= 0x3F:
            return i, True
    return None, False


class KeyDecoder:
    """Incremental decoder from terminal bytes to KeyEvents.

    Example:
        decoder = KeyDecoder()
        decoder.feed(b"\\x1b[A\\x1b")   # [MOVE_UP], ESC held as pending
        decoder.flush()                # [CANCEL] once the wait expired
    """

    def __init__(self):
        self._buffer = b""

    @property
    def pending(self) -> bytes:
        """Bytes of an escape sequence not yet resolved."""
        return self._buffer

    def feed(self, data: bytes) -> list[KeyEvent]:
        """Add bytes and return every complete event."""
        self._buffer += data
        return self._decode(final=False)

    def flush(self) -> list[KeyEvent]:
        """Resolve pending bytes after the escape wait expired."""
        return self._decode(final=True)

    def _decode(self, final: bool) -> list[KeyEvent]:
        events: list[KeyEvent] = []
        buf = self._buffer
        i = 0

        while i < len(buf):
            byte = buf[i]

            if byte != Byte.ESC:
                if byte in CONFIRM_BYTES:
                    events.append(KeyEvent.CONFIRM)
                else:
                    events.append(KeyEvent.UNRECOGNIZED)
                i += 1
                continue

            if i + 1 == len(buf):
                if not final:
                    break
                events.append(KeyEvent.CANCEL)
                i += 1
                continue

            introducer = buf[i + 1]

            if introducer == Byte.SS3:
                if i + 2 == len(buf):
                    if not final:
                        break
                    events.extend([KeyEvent.CANCEL, KeyEvent.UNRECOGNIZED])
                    i += 2
                    continue
                sequence = buf[i : i + 3]
                events.append(SEQUENCES.get(sequence, KeyEvent.UNRECOGNIZED))
                i += 3
                continue

            if introducer == Byte.CSI:
                end, malformed = _scan_csi(buf, i + 2)
                if end is None:
                    if not final:
                        break
                    if i + 2 == len(buf):
                        events.extend([KeyEvent.CANCEL, KeyEvent.UNRECOGNIZED])
                    else:
                        events.append(KeyEvent.UNRECOGNIZED)
                    i = len(buf)
                    continue
                if malformed:
                    # ESC and '[' were not a sequence; decode the breaking byte anew
                    events.extend([KeyEvent.CANCEL, KeyEvent.UNRECOGNIZED])
                    i += 2
                    continue
                sequence = buf[i : end + 1]
                events.append(SEQUENCES.get(sequence, KeyEvent.UNRECOGNIZED))
                i = end + 1
                continue

            # ESC followed by an unrelated byte: Escape, then that byte on its own
            events.append(KeyEvent.CANCEL)
            i += 1

        self._buffer = buf[i:]
        return events


class KeyReader:
    """Blocking stream of KeyEvents read from a terminal fd.

    Each ``read_event()`` call returns exactly one event; events decoded
    from the same read are queued. Iterating yields events forever and
    cannot be restarted.
    """

    def __init__(
        self,
        fd: Optional[int] = None,
        escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT_MS / 1000,
    ):
        self.fd = stdin_fd() if fd is None else fd
        self.escape_timeout = escape_timeout
        self._decoder = KeyDecoder()
        self._queue: deque[KeyEvent] = deque()

    def read_event(self) -> KeyEvent:
        """Block until the next key event is available.

        Raises:
            TerminalError: If the input is closed or cannot be read.
        """
        while not self._queue:
            self._fill()
        event = self._queue.popleft()
        debug_input("event", event=event.name)
        return event

    def _fill(self) -> None:
        if self._decoder.pending:
            try:
                ready, _, _ = select.select([self.fd], [], [], self.escape_timeout)
            except (OSError, ValueError) as e:
                raise TerminalError(f"cannot poll terminal input: {e}") from e
            if not ready:
                debug_input("escape wait expired", pending=self._decoder.pending)
                self._queue.extend(self._decoder.flush())
                return

        try:
            data = os.read(self.fd, READ_CHUNK_SIZE)
        except OSError as e:
            raise TerminalError(f"cannot read terminal input: {e}") from e

        if not data:
            # End of input: resolve what is pending before giving up
            remaining = self._decoder.flush()
            if not remaining:
                raise TerminalError("terminal input closed")
            self._queue.extend(remaining)
            return

        debug_input("read", data=data)
        self._queue.extend(self._decoder.feed(data))

    def __iter__(self) -> "KeyReader":
        return self

    def __next__(self) -> KeyEvent:
        return self.read_event()
