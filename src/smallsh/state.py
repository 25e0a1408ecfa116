"""
ShellState - explicit per-interpreter state

Threaded through Shell and Builtins instead of living in module globals.

    pid             shell process id, read once at startup, never changes
    last_status     status of the last foreground command / built-in / reaped job
    foreground_only flag object, flipped only by SignalHandler
"""
import os
from dataclasses import dataclass, field

from .signals import ForegroundOnlyMode
from .status import SUCCESS, TerminationStatus


@dataclass
class ShellState:
    pid: int = field(default_factory=os.getpid)
    last_status: TerminationStatus = SUCCESS
    foreground_only: ForegroundOnlyMode = field(default_factory=ForegroundOnlyMode)

    def run_in_background(self, requested: bool) -> bool:
        """Effective background flag for a command that asked for requested"""
        return requested and not self.foreground_only.active
