"""Scoped access to the controlling terminal for key input.

A TerminalSession owns one input file descriptor for its lifetime: the
process stdin when that is a TTY, otherwise a freshly opened /dev/tty.
Entering the session switches the descriptor to raw mode; leaving it
restores the saved mode and closes any descriptor the session opened.

Example:
    with TerminalSession.open() as term:
        key = term.read_key()
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
from typing import TextIO

import readchar

logger = logging.getLogger(__name__)

TTY_DEVICE = "/dev/tty"

# How long to wait for the rest of an escape sequence before treating
# ESC as a standalone key press.
ESCAPE_TIMEOUT = 0.05


class NonInteractiveError(RuntimeError):
    """No interactive terminal is available for key input."""


class TerminalSession:
    """Exclusive raw-mode use of a terminal input descriptor.

    Args:
        fd: Terminal file descriptor to read keys from.
        owns_fd: Whether the session opened ``fd`` itself and must close it.
    """

    def __init__(self, fd: int, owns_fd: bool = False):
        self.fd = fd
        self.owns_fd = owns_fd
        self._saved_attrs: list | None = None
        self._closed = False

    @classmethod
    def open(cls, stdin: TextIO | None = None, device: str = TTY_DEVICE) -> TerminalSession:
        """Acquire an interactive input source.

        Prefers ``stdin`` (default ``sys.stdin``) when it is a TTY and falls
        back to opening ``device`` directly.

        Raises:
            NonInteractiveError: If neither source is an interactive terminal.
        """
        stream = sys.stdin if stdin is None else stdin
        try:
            if stream is not None and stream.isatty():
                return cls(stream.fileno())
        except (AttributeError, ValueError, OSError):
            pass

        try:
            fd = os.open(device, os.O_RDONLY | os.O_NOCTTY)
        except OSError as exc:
            raise NonInteractiveError(f"Cannot open {device}: {exc}") from exc

        if not os.isatty(fd):
            os.close(fd)
            raise NonInteractiveError(f"{device} is not a terminal")

        logger.debug("stdin is not a TTY; reading keys from %s", device)
        return cls(fd, owns_fd=True)

    @property
    def in_raw_mode(self) -> bool:
        return self._saved_attrs is not None

    def enter_raw_mode(self) -> None:
        """Deliver keystrokes immediately, without echo or signal keys.

        Output post-processing is left alone so newlines written to the
        same terminal still return the carriage.
        """
        attrs = termios.tcgetattr(self.fd)
        raw = termios.tcgetattr(self.fd)
        raw[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
        raw[6][termios.VMIN] = 1
        raw[6][termios.VTIME] = 0
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        self._saved_attrs = attrs

    def restore(self) -> None:
        """Put the terminal back into the mode it had before raw mode."""
        if self._saved_attrs is None:
            return
        attrs, self._saved_attrs = self._saved_attrs, None
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, attrs)
        except (termios.error, OSError) as exc:
            logger.debug("Failed to restore terminal mode: %s", exc)

    def close(self) -> None:
        """Restore the terminal mode and release an owned descriptor."""
        if self._closed:
            return
        self._closed = True
        try:
            self.restore()
        finally:
            if self.owns_fd:
                try:
                    os.close(self.fd)
                except OSError as exc:
                    logger.debug("Failed to close %s: %s", TTY_DEVICE, exc)

    def __enter__(self) -> TerminalSession:
        try:
            self.enter_raw_mode()
        except (termios.error, OSError) as exc:
            self.close()
            raise NonInteractiveError(f"Cannot switch terminal to raw mode: {exc}") from exc
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _pending(self, timeout: float) -> bool:
        ready, _, _ = select.select([self.fd], [], [], timeout)
        return bool(ready)

    def _read_char(self) -> str:
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("Terminal input closed")
        lead = data[0]
        if lead >= 0xF0:
            extra = 3
        elif lead >= 0xE0:
            extra = 2
        elif lead >= 0xC0:
            extra = 1
        else:
            extra = 0
        if extra:
            data += os.read(self.fd, extra)
        return data.decode("utf-8", errors="replace")

    def read_key(self) -> str:
        """Block until one key press arrives and return its sequence.

        Multi-byte escape sequences (arrow keys) come back whole so they
        compare equal to ``readchar.key`` names.
        """
        ch = self._read_char()
        if ch != readchar.key.ESC:
            return ch

        seq = ch
        if not self._pending(ESCAPE_TIMEOUT):
            return seq
        nxt = self._read_char()
        seq += nxt
        if nxt not in ("[", "O"):
            return seq
        while self._pending(ESCAPE_TIMEOUT):
            c = self._read_char()
            seq += c
            # CSI/SS3 sequences end with a byte in 0x40..0x7E
            if "\x40" <= c <= "\x7e":
                break
        return seq
