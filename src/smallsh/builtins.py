"""
Built-in commands: exit, cd, status

Built-ins run inside the shell process and are dispatched before any
ProcessSpawner call. Redirections and '&' on a built-in are ignored, as are
extra arguments.

    exit            wait for all background jobs, then stop the loop
    cd [path]       chdir to path, or to $HOME when no path is given
    status          print the last recorded status (does not change it)

cd failures raise ChangeDirectoryError; the Shell reports them and records
the failure status.
"""
import logging
import os
from typing import Optional, TextIO

from .command import Command
from .constants import BUILTIN_CD, BUILTIN_EXIT, BUILTIN_STATUS
from .exceptions import ChangeDirectoryError
from .job_tracker import BackgroundJobTracker
from .state import ShellState
from .status import SUCCESS, format_status


class Builtins:
    """Executes built-in commands against a ShellState"""

    def __init__(self, state: ShellState, jobs: BackgroundJobTracker,
                 output: TextIO, logger: Optional[logging.Logger] = None):
        self.state = state
        self.jobs = jobs
        self.output = output
        self.logger = logger or logging.getLogger('Builtins')

        self._handlers = {
            BUILTIN_EXIT: self.exit,
            BUILTIN_CD: self.cd,
            BUILTIN_STATUS: self.status,
        }

    def dispatch(self, command: Command) -> bool:
        """
        Run a built-in command.

        Returns:
            False when the shell loop must stop (exit), True otherwise

        Raises:
            ChangeDirectoryError: cd target is not reachable
        """
        handler = self._handlers[command.name]
        self.logger.debug(f"Built-in: {command}")
        return handler(command)

    def exit(self, command: Command) -> bool:
        for _, status in self.jobs.reap_all():
            self.state.last_status = status
        return False

    def cd(self, command: Command) -> bool:
        if command.args:
            target = command.args[0]
        else:
            target = os.environ.get('HOME') or os.path.expanduser('~')

        try:
            os.chdir(target)
        except OSError as e:
            raise ChangeDirectoryError(target, e.strerror or str(e)) from e

        self.state.last_status = SUCCESS
        self.logger.debug(f"Working directory is now {os.getcwd()}")
        return True

    def status(self, command: Command) -> bool:
        self.output.write(format_status(self.state.last_status) + '\n')
        self.output.flush()
        return True
