"""
Signal Handler - foreground-only mode and the shell's own dispositions

SIGINT  (^C): ignored by the shell. Foreground children reset it to the
              default, background children inherit the ignore.
SIGTSTP (^Z): toggles foreground-only mode. While the mode is on, a
              requested '&' is ignored and the command runs in the foreground.

The handler only flips one flag and writes one literal message with
os.write(). It never calls into the parser, the spawner or logging.
Python runs handlers on the main thread between bytecodes, so the flag flip
cannot interleave with a read of the flag in the middle of an expression.
"""
import os
import signal
from typing import Dict, Optional

from .constants import ENTER_FOREGROUND_ONLY, EXIT_FOREGROUND_ONLY

STDOUT_FILENO = 1


class ForegroundOnlyMode:
    """Single boolean flag shared by the signal path and the main loop"""

    def __init__(self, active: bool = False):
        self._active = active

    @property
    def active(self) -> bool:
        return self._active

    def toggle(self) -> bool:
        """Flip the mode and return the new value"""
        self._active = not self._active
        return self._active

    def __bool__(self) -> bool:
        return self._active

    def __repr__(self) -> str:
        return f"ForegroundOnlyMode(active={self._active})"


class SignalHandler:
    """Installs and restores the shell's signal dispositions"""

    def __init__(self, mode: ForegroundOnlyMode, output_fd: int = STDOUT_FILENO):
        self.mode = mode
        self.output_fd = output_fd
        self._previous: Dict[int, object] = {}

    def install(self) -> None:
        self._previous[signal.SIGINT] = signal.signal(signal.SIGINT, signal.SIG_IGN)
        self._previous[signal.SIGTSTP] = signal.signal(signal.SIGTSTP, self.handle_sigtstp)

    def restore(self) -> None:
        """Put back whatever was installed before install()"""
        for signum, previous in self._previous.items():
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()

    def handle_sigtstp(self, signum: int, frame: Optional[object]) -> None:
        if self.mode.toggle():
            message = ENTER_FOREGROUND_ONLY
        else:
            message = EXIT_FOREGROUND_ONLY
        os.write(self.output_fd, message)
