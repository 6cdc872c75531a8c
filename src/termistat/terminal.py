"""Non-blocking keyboard input for the refresh loop."""

import fcntl
import logging
import os
import sys
import termios

logger = logging.getLogger(__name__)

EXIT_KEYS = (b"\n", b"\r")


class RawInput:
    """
    Scoped raw, non-blocking input mode on a file descriptor.

    Entering the context disables line buffering and echo and makes reads
    non-blocking; leaving it restores the exact settings captured on first
    enable, on every exit path.
    """

    def __init__(self, fd: int | None = None) -> None:
        """
        Initialize RawInput.

        Args:
            fd: File descriptor to watch. Defaults to stdin.
        """
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._saved_attrs: list | None = None
        self._saved_flags: int | None = None
        self._enabled = False

    @property
    def enabled(self) -> bool:
        """Check if raw mode is currently applied."""
        return self._enabled

    def enable_raw_mode(self) -> None:
        """
        Apply raw, non-blocking input; settings are captured only once.

        A TTY gets non-blocking reads from VMIN=0/VTIME=0. Its file status
        flags stay untouched: stdout shares the same open file description
        and must keep blocking writes. Other descriptors (pipes) get
        O_NONBLOCK.
        """
        try:
            if self._saved_attrs is None and self._saved_flags is None:
                if os.isatty(self._fd):
                    self._saved_attrs = termios.tcgetattr(self._fd)
                else:
                    self._saved_flags = fcntl.fcntl(self._fd, fcntl.F_GETFL)
        except (OSError, termios.error):
            logger.debug("Could not read settings of fd %d", self._fd, exc_info=True)
            return

        self._enabled = True
        try:
            if self._saved_attrs is not None:
                attrs = termios.tcgetattr(self._fd)
                attrs[3] &= ~(termios.ICANON | termios.ECHO)  # lflag
                attrs[6][termios.VMIN] = 0
                attrs[6][termios.VTIME] = 0
                termios.tcsetattr(self._fd, termios.TCSANOW, attrs)
            else:
                fcntl.fcntl(self._fd, fcntl.F_SETFL, self._saved_flags | os.O_NONBLOCK)
        except (OSError, termios.error):
            # Polling a blocking descriptor would stall the refresh loop
            logger.debug("Could not switch fd %d to raw mode", self._fd, exc_info=True)
            self.disable_raw_mode()

    def disable_raw_mode(self) -> None:
        """Restore the captured settings. Safe to call at any time."""
        if not self._enabled:
            return

        try:
            if self._saved_attrs is not None:
                termios.tcsetattr(self._fd, termios.TCSANOW, self._saved_attrs)
            if self._saved_flags is not None:
                fcntl.fcntl(self._fd, fcntl.F_SETFL, self._saved_flags)
        finally:
            self._enabled = False

    def poll_for_exit(self) -> bool:
        """Read one pending byte, if any, and report whether it was Enter."""
        if not self._enabled:
            return False

        try:
            data = os.read(self._fd, 1)
        except (BlockingIOError, InterruptedError):
            return False
        # A TTY in VMIN=0 mode returns b"" when nothing is pending
        return data in EXIT_KEYS

    def __enter__(self) -> "RawInput":
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disable_raw_mode()
