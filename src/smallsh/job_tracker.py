"""
Background Job Tracker - outstanding background pids and reaping

ARCHITECTURE:
- Owned by the Shell main loop (never touched from signal handlers)
- reap()     → once per loop iteration, BEFORE the prompt, never blocks
- reap_all() → once at exit, blocks until every job has finished

ORDERING:
Pids are kept in insertion order. Reaping removes finished entries and keeps
the relative order of the others. Adding a pid twice is ignored.

REPORTING:
Every finished job is written to the output stream as
    background pid <pid> is done: <exit value N | terminated by signal N>
and returned to the caller so the Shell can record its status.
"""
import logging
import os
from typing import Callable, List, Optional, TextIO, Tuple

from .constants import BACKGROUND_DONE
from .status import TerminationStatus, format_status

# (pid, raw_status) like os.waitpid
WaitFunction = Callable[[int, int], Tuple[int, int]]


class BackgroundJobTracker:
    """
    Ordered set of background process ids.

    The waitpid function is injectable so reap logic can be exercised without
    real children.
    """

    def __init__(self, output: TextIO,
                 waitpid: Optional[WaitFunction] = None,
                 logger: Optional[logging.Logger] = None):
        self.output = output
        self._waitpid = waitpid or os.waitpid
        self.logger = logger or logging.getLogger('BackgroundJobTracker')
        self._pids: List[int] = []

    def __len__(self) -> int:
        return len(self._pids)

    def __contains__(self, pid: int) -> bool:
        return pid in self._pids

    @property
    def pids(self) -> List[int]:
        return list(self._pids)

    def add(self, pid: int) -> None:
        if pid in self._pids:
            self.logger.warning(f"pid {pid} is already tracked")
            return
        self._pids.append(pid)
        self.logger.debug(f"Tracking background pid {pid} ({len(self._pids)} outstanding)")

    def reap(self) -> List[Tuple[int, TerminationStatus]]:
        """Non-blocking pass: report and drop every finished job"""
        return self._reap(os.WNOHANG)

    def reap_all(self) -> List[Tuple[int, TerminationStatus]]:
        """Blocking pass: wait for every tracked job (exit time)"""
        if self._pids:
            self.logger.info(f"Waiting for {len(self._pids)} background job(s)")
        return self._reap(0)

    def _reap(self, options: int) -> List[Tuple[int, TerminationStatus]]:
        finished = []
        remaining = []

        for pid in self._pids:
            try:
                child, raw = self._waitpid(pid, options)
            except ChildProcessError:
                # Already collected elsewhere; nothing left to report
                self.logger.warning(f"Background pid {pid} is no longer a child, dropping it")
                continue

            if child == 0:
                remaining.append(pid)
                continue

            status = TerminationStatus.from_wait_status(raw)
            self._report(pid, status)
            finished.append((pid, status))

        self._pids = remaining
        return finished

    def _report(self, pid: int, status: TerminationStatus) -> None:
        self.output.write(BACKGROUND_DONE.format(pid=pid, status=format_status(status)) + '\n')
        self.output.flush()
        self.logger.debug(f"Reaped background pid {pid}: {format_status(status)}")
