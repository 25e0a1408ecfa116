"""
Process Spawner - fork/exec for external commands

ARCHITECTURE:
    Shell._run_external(command)
        ↓
    ProcessSpawner.spawn(command, background)
        ├─ parent: returns child pid
        └─ child:  signal disposition → RedirectionSetup.apply() → execvp()
                   (never returns; any failure ends the CHILD with status 1)

RESPONSIBILITIES:
- Create the child process (fork failure → SpawnError, fatal to the shell)
- Child signal disposition:
    SIGINT   default in the foreground, still ignored in the background
    SIGTSTP  ignored (only the shell reacts to it)
    SIGPIPE  default (Python ignores it at startup)
- Apply redirections and replace the program image
- Blocking wait for one child (wait())

NOT RESPONSIBLE FOR:
- Foreground-only mode (Shell passes the effective background flag)
- Tracking background jobs (BackgroundJobTracker)
- Printing status (status.format_status)

IMPORTANT: code that runs in the child must leave via os._exec*/os._exit,
never by raising into the caller, or the child would continue running the
shell loop as a second interpreter.
"""
import logging
import os
import signal
import sys
from typing import Optional

from .command import Command
from .constants import EXIT_FAILURE
from .exceptions import ChildSetupError, ExecError, SpawnError
from .redirection import RedirectionSetup
from .status import TerminationStatus


class ProcessSpawner:
    """Starts external programs as child processes"""

    def __init__(self, redirection: Optional[RedirectionSetup] = None,
                 logger: Optional[logging.Logger] = None):
        self.redirection = redirection or RedirectionSetup()
        self.logger = logger or logging.getLogger('ProcessSpawner')

    def spawn(self, command: Command, background: bool) -> int:
        """
        Fork a child that runs command.

        Args:
            command: Non built-in command with at least one argv entry
            background: Effective background flag

        Returns:
            pid of the child (in the parent; the child never returns)

        Raises:
            SpawnError: fork() failed
        """
        # Buffered output written before fork would otherwise be flushed twice
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            raise SpawnError(command.name, e.strerror or str(e)) from e

        if pid == 0:
            self._run_child(command, background)

        self.logger.debug(
            f"Spawned pid {pid} for {command} ({'background' if background else 'foreground'})"
        )
        return pid

    def wait(self, pid: int) -> TerminationStatus:
        """Block until child pid terminates and return its status"""
        _, raw = os.waitpid(pid, 0)
        status = TerminationStatus.from_wait_status(raw)
        self.logger.debug(f"pid {pid} finished: {status}")
        return status

    # ========================================================================
    # CHILD SIDE
    # ========================================================================

    def _run_child(self, command: Command, background: bool) -> None:
        try:
            self._prepare_signals(background)
            self.redirection.apply(command, background)
            self._exec(command)
        except ChildSetupError as e:
            self._child_fail(str(e))
        except BaseException as e:
            self._child_fail(f"{command.name}: {e}")

    @staticmethod
    def _prepare_signals(background: bool) -> None:
        if not background:
            signal.signal(signal.SIGINT, signal.SIG_DFL)
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)

    @staticmethod
    def _exec(command: Command) -> None:
        try:
            os.execvp(command.name, command.argv)
        except OSError as e:
            raise ExecError(command.name, e.strerror or str(e)) from e

    @staticmethod
    def _child_fail(message: str) -> None:
        try:
            os.write(2, f"{message}\n".encode(errors='replace'))
        finally:
            os._exit(EXIT_FAILURE)
