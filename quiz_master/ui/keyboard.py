"""Non-blocking single-key input for the question countdown."""

from __future__ import annotations

from contextlib import contextmanager
import os
import sys
import time
from typing import Iterator, TextIO

if os.name == "nt":
    import msvcrt
else:
    import select
    import termios
    import tty

_WINDOWS_POLL_SECONDS = 0.02
# Prefix bytes of Windows function/arrow key sequences.
_WINDOWS_EXTENDED_PREFIXES = ("\x00", "\xe0")


class TerminalKeyboard:
    """Reads single key presses with a timeout.

    On POSIX the terminal is switched to cbreak mode inside :meth:`capture`
    so keys arrive without Enter; :meth:`released` temporarily restores line
    mode for prompts that read whole lines.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdin
        self._saved_attributes: list | None = None

    def read_key(self, timeout: float) -> str | None:
        if os.name == "nt":
            return self._read_key_windows(timeout)
        return self._read_key_posix(timeout)

    @contextmanager
    def capture(self) -> Iterator["TerminalKeyboard"]:
        self._enter_cbreak()
        try:
            yield self
        finally:
            self._restore()

    @contextmanager
    def released(self) -> Iterator[None]:
        was_captured = self._saved_attributes is not None
        self._restore()
        try:
            yield
        finally:
            if was_captured:
                self._enter_cbreak()

    def _is_terminal(self) -> bool:
        try:
            return self._stream.isatty()
        except ValueError:
            return False

    def _enter_cbreak(self) -> None:
        if os.name == "nt" or not self._is_terminal() or self._saved_attributes is not None:
            return
        fd = self._stream.fileno()
        self._saved_attributes = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def _restore(self) -> None:
        if self._saved_attributes is None:
            return
        termios.tcsetattr(self._stream.fileno(), termios.TCSADRAIN, self._saved_attributes)
        self._saved_attributes = None

    def _read_key_posix(self, timeout: float) -> str | None:
        fd = self._stream.fileno()
        readable, _, _ = select.select([fd], [], [], max(0.0, timeout))
        if not readable:
            return None
        data = os.read(fd, 1)
        if not data:
            # End of input: behave like an idle keyboard.
            time.sleep(max(0.0, timeout))
            return None
        return data.decode("utf-8", errors="ignore") or None

    def _read_key_windows(self, timeout: float) -> str | None:
        deadline = time.monotonic() + max(0.0, timeout)
        while True:
            if msvcrt.kbhit():
                key = msvcrt.getwch()
                if key in _WINDOWS_EXTENDED_PREFIXES:
                    if msvcrt.kbhit():
                        msvcrt.getwch()
                    return None
                return key
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            time.sleep(min(_WINDOWS_POLL_SECONDS, remaining))
