"""Terminal control helpers for the finder session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
Also answers cursor-position queries used to anchor the inline view.
"""

from __future__ import annotations

import contextlib
import os
import re
import select
import shutil
import termios
import tty

from .input.reader import _PENDING_BYTES

CURSOR_REPORT_TIMEOUT_MS = 200
_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")
_MAX_REPORT_BYTES = 64


class TerminalController:
    """Manage terminal mode transitions for one finder session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._fullscreen = False

    def enable_tui_mode(self, fullscreen: bool = True) -> None:
        """Enter raw mode with a hidden cursor, on the alternate screen if ``fullscreen``."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._fullscreen = fullscreen
        if fullscreen:
            # Enter alternate screen, clear it, and hide cursor.
            self.write("\x1b[?1049h\x1b[2J\x1b[?25l")
        else:
            self.write("\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty attributes."""
        if self._fullscreen:
            self.write("\x1b[?25h\x1b[?1049l")
        else:
            self.write("\x1b[?25h")
        self._fullscreen = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self, fullscreen: bool = True):
        try:
            self.enable_tui_mode(fullscreen)
            yield
        finally:
            self.disable_tui_mode()

    def size(self) -> os.terminal_size:
        """Return the terminal size for the output descriptor, or a fallback."""
        try:
            return os.get_terminal_size(self.stdout_fd)
        except OSError:
            return shutil.get_terminal_size((80, 24))

    def write(self, text: str) -> None:
        data = text.encode("utf-8")
        while data:
            written = os.write(self.stdout_fd, data)
            data = data[written:]

    def query_cursor_row(self, timeout_ms: int = CURSOR_REPORT_TIMEOUT_MS) -> int | None:
        """Ask the terminal for the cursor row (0-based) via a position report.

        Must be called in raw mode. Keystrokes that arrive ahead of the report
        are queued for the key reader. Returns ``None`` when no report arrives.
        """
        self.write("\x1b[6n")
        received = b""
        while len(received) < _MAX_REPORT_BYTES:
            ready, _, _ = select.select([self.stdin_fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                break
            chunk = os.read(self.stdin_fd, 1)
            if not chunk:
                break
            received += chunk
            if chunk != b"R":
                continue
            match = _CURSOR_REPORT_RE.search(received)
            if match is None:
                continue
            _PENDING_BYTES.extend(bytes([b]) for b in received[: match.start()])
            return max(0, int(match.group(1)) - 1)

        _PENDING_BYTES.extend(bytes([b]) for b in received)
        return None

    def move_to_row(self, row: int) -> None:
        self.write(f"\x1b[{row + 1};1H")

    def clear_rows(self, start_row: int, count: int) -> None:
        """Blank ``count`` rows starting at 0-based ``start_row`` and park the cursor there."""
        parts = [f"\x1b[{start_row + offset + 1};1H\x1b[2K" for offset in range(max(0, count))]
        parts.append(f"\x1b[{start_row + 1};1H")
        self.write("".join(parts))
