"""
Redirection Setup - rebind stdin/stdout of a child before exec

ARCHITECTURE:
Runs ONLY in the forked child, between fork() and exec(). Called by
ProcessSpawner; never touches the shell's own descriptors.

RESPONSIBILITIES:
- Background job without '<': stdin from the null device (never steal the
  terminal)
- '<' target: open read-only and dup onto fd 0
- '>' target: open write-only, create/truncate, mode 0644, dup onto fd 1
- Mark the originally opened descriptor close-on-exec

NOT RESPONSIBLE FOR:
- Deciding what a failure means (raises RedirectionError; the spawner
  turns it into a child exit status of 1)

DESCRIPTOR HANDLING:
    fd = os.open(path)        # non-inheritable by default in Python
    os.dup2(fd, 0 or 1)       # the copy on 0/1 survives exec
    os.set_inheritable(fd, False)
The original fd is only released by the exec itself.
"""
import logging
import os
from typing import Optional

from .command import Command
from .constants import OUTPUT_FILE_MODE
from .exceptions import RedirectionError

STDIN_FILENO = 0
STDOUT_FILENO = 1


class RedirectionSetup:
    """Applies a Command's redirections to the current process"""

    def __init__(self, null_device: str = os.devnull,
                 logger: Optional[logging.Logger] = None):
        self.null_device = null_device
        self.logger = logger or logging.getLogger('RedirectionSetup')

    def apply(self, command: Command, background: bool) -> None:
        """
        Rebind fd 0 and/or fd 1 for command.

        Args:
            command: Parsed command (input_file / output_file)
            background: True if the command really runs in the background
                (already adjusted for foreground-only mode)

        Raises:
            RedirectionError: a target could not be opened or duplicated
        """
        if background and command.input_file is None:
            self._redirect(self.null_device, os.O_RDONLY, STDIN_FILENO, 'input')
        elif command.input_file is not None:
            self._redirect(command.input_file, os.O_RDONLY, STDIN_FILENO, 'input')

        if command.output_file is not None:
            self._redirect(
                command.output_file,
                os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
                STDOUT_FILENO,
                'output',
            )

    def _redirect(self, path: str, flags: int, target_fd: int, direction: str) -> None:
        try:
            fd = os.open(path, flags, OUTPUT_FILE_MODE)
        except OSError as e:
            raise RedirectionError(path, direction, e.strerror or str(e)) from e

        try:
            os.dup2(fd, target_fd)
        except OSError as e:
            raise RedirectionError(path, direction, e.strerror or str(e)) from e

        # fd can already be the target slot when 0/1 was closed
        if fd != target_fd:
            os.set_inheritable(fd, False)
