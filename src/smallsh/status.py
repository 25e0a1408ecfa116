"""
Status Reporter - termination status of a finished command

A TerminationStatus holds EXACTLY ONE of:
    exit_code  - the process exited normally (or a built-in finished)
    signal     - the process was terminated by a signal

    >>> format_status(TerminationStatus.exited(0))
    'exit value 0'
    >>> format_status(TerminationStatus.signaled(15))
    'terminated by signal 15'
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TerminationStatus:
    """Decoded wait status (exit code XOR terminating signal)"""

    exit_code: Optional[int] = None
    signal: Optional[int] = None

    def __post_init__(self):
        if (self.exit_code is None) == (self.signal is None):
            raise ValueError("TerminationStatus needs exactly one of exit_code or signal")

    @classmethod
    def exited(cls, code: int) -> 'TerminationStatus':
        return cls(exit_code=code)

    @classmethod
    def signaled(cls, signum: int) -> 'TerminationStatus':
        return cls(signal=signum)

    @classmethod
    def from_wait_status(cls, raw: int) -> 'TerminationStatus':
        """Decode the status integer returned by os.waitpid()"""
        if os.WIFSIGNALED(raw):
            return cls.signaled(os.WTERMSIG(raw))
        if os.WIFEXITED(raw):
            return cls.exited(os.WEXITSTATUS(raw))
        raise ValueError(f"wait status {raw:#x} is neither an exit nor a termination")

    @property
    def was_signaled(self) -> bool:
        return self.signal is not None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


# Starting status before any command has run
SUCCESS = TerminationStatus.exited(0)
# Status recorded by a failed built-in (cd to a bad directory)
FAILURE = TerminationStatus.exited(1)


def format_status(status: TerminationStatus) -> str:
    if status.was_signaled:
        return f"terminated by signal {status.signal}"
    return f"exit value {status.exit_code}"
