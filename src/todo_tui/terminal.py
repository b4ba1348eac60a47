"""The terminal handle: exclusive, scoped ownership of the screen and keyboard.

``Terminal`` is acquired once per session and passed explicitly to the
interaction loop. Acquisition switches to the alternate screen and hides
the cursor (through ``rich.live.Live``) and puts the keyboard in cbreak
mode; release restores both. Release is idempotent, so every exit path can
call it safely.
"""

import logging
import os
import select
import sys
from typing import Callable, List, Optional, TextIO, Tuple

import readchar
from rich.console import Console, RenderableType
from rich.live import Live

from .keys import ESC

logger = logging.getLogger(__name__)

# how long to wait after Esc for the rest of an escape sequence
ESCAPE_TIMEOUT = 0.05


class TerminalUnavailableError(Exception):
    """Raised when stdin/stdout are not an interactive terminal."""


class KeyReader:
    """Reads one key press at a time from a file descriptor.

    A lone Esc comes back as ``"\\x1b"``. Escape sequences (arrows, Delete)
    come back whole in the form ``readchar.key`` uses. Esc followed by any
    other byte is two separate key presses.
    """

    def __init__(self, fd: int, timeout: float = ESCAPE_TIMEOUT):
        self.fd = fd
        self.timeout = timeout
        self._pushed: List[bytes] = []

    def _ready(self) -> bool:
        readable, _, _ = select.select([self.fd], [], [], self.timeout)
        return bool(readable)

    def _read_byte(self) -> bytes:
        if self._pushed:
            return self._pushed.pop()
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("keyboard input closed")
        return data

    def _peek_byte(self) -> Optional[bytes]:
        if self._pushed:
            return self._pushed.pop()
        if not self._ready():
            return None
        return self._read_byte()

    def _read_char(self, first: bytes) -> str:
        """Complete a UTF-8 character from its lead byte."""
        lead = first[0]
        if lead >= 0xF0:
            extra = 3
        elif lead >= 0xE0:
            extra = 2
        elif lead >= 0xC0:
            extra = 1
        else:
            extra = 0
        data = first
        for _ in range(extra):
            data += self._read_byte()
        return data.decode("utf-8", errors="replace")

    def _read_sequence(self, introducer: bytes) -> str:
        if introducer == b"O":
            # SS3 cursor keys, sent by terminals in application mode
            final = self._read_byte()
            return ESC + "[" + final.decode("ascii", errors="replace")
        sequence = b""
        while True:
            byte = self._read_byte()
            sequence += byte
            if 0x40 <= byte[0] <= 0x7E:
                break
        return ESC + "[" + sequence.decode("ascii", errors="replace")

    def read_key(self) -> str:
        first = self._read_byte()
        if first == b"\x03":
            raise KeyboardInterrupt
        if first != ESC.encode():
            return self._read_char(first)

        following = self._peek_byte()
        if following is None:
            return ESC
        if following in (b"[", b"O"):
            return self._read_sequence(following)
        self._pushed.append(following)
        return ESC

    __call__ = read_key


class CbreakMode:
    """Puts a tty in cbreak mode (no line buffering, no echo) until restored."""

    def __init__(self, fd: int):
        self.fd = fd
        self._saved = None

    def enter(self) -> None:
        import termios
        import tty

        self._saved = termios.tcgetattr(self.fd)
        tty.setcbreak(self.fd, termios.TCSADRAIN)

    def restore(self) -> None:
        if self._saved is None:
            return
        import termios

        saved, self._saved = self._saved, None
        termios.tcsetattr(self.fd, termios.TCSADRAIN, saved)


class Terminal:
    """Owns the display and key input for the lifetime of one session."""

    def __init__(
        self,
        console: Optional[Console] = None,
        stdin: Optional[TextIO] = None,
        read_key: Optional[Callable[[], str]] = None,
        screen: bool = True,
    ):
        self.console = console or Console()
        self.stdin = stdin or sys.stdin
        self.screen = screen
        self._read_key = read_key
        self._live: Optional[Live] = None
        self._cbreak: Optional[CbreakMode] = None

    @property
    def acquired(self) -> bool:
        return self._live is not None

    def _check_interactive(self) -> None:
        try:
            stdin_tty = self.stdin.isatty()
        except (AttributeError, ValueError):
            stdin_tty = False
        if not stdin_tty:
            raise TerminalUnavailableError("standard input is not an interactive terminal")
        if not self.console.is_terminal:
            raise TerminalUnavailableError("standard output is not an interactive terminal")

    def _open_keyboard(self) -> None:
        if self._read_key is not None:
            return
        if sys.platform == "win32":
            self._read_key = readchar.readkey
            return
        fd = self.stdin.fileno()
        self._cbreak = CbreakMode(fd)
        self._cbreak.enter()
        self._read_key = KeyReader(fd)

    def acquire(self) -> "Terminal":
        if self.acquired:
            return self
        self._check_interactive()
        self._open_keyboard()
        live = Live(
            console=self.console,
            auto_refresh=False,
            screen=self.screen,
            transient=True,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        try:
            live.start()
        except Exception:
            self._close_keyboard()
            raise
        self._live = live
        logger.debug(f"Terminal acquired (size={self.console.size.width}x{self.console.size.height})")
        return self

    def _close_keyboard(self) -> None:
        if self._cbreak is None:
            return
        cbreak, self._cbreak = self._cbreak, None
        cbreak.restore()
        self._read_key = None

    def release(self) -> None:
        if self._live is None:
            return
        live, self._live = self._live, None
        try:
            live.stop()
        finally:
            self._close_keyboard()
        logger.debug("Terminal released")

    def size(self) -> Tuple[int, int]:
        """Current (width, height) of the console."""
        width, height = self.console.size
        return width, height

    def draw(self, renderable: RenderableType) -> None:
        """Replace the whole screen with ``renderable``."""
        if self._live is None:
            raise RuntimeError("draw() called on a terminal that is not acquired")
        self._live.update(renderable, refresh=True)

    def next_event(self) -> str:
        """Block until a key is pressed and return it.

        Ctrl-C surfaces as KeyboardInterrupt.
        """
        if self._read_key is None:
            raise RuntimeError("next_event() called on a terminal that is not acquired")
        return self._read_key()

    def __enter__(self) -> "Terminal":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
