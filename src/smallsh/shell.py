"""
Shell - main loop orchestrator

ARCHITECTURE:
This is the TOP-LEVEL component. It owns the ShellState and the background
job set and delegates everything else:

    Shell.run()
       ↓ (each iteration)
    ├── BackgroundJobTracker.reap()      ← report finished jobs FIRST
    ├── prompt + readline
    └── execute_line(line)
           ├── tokenizer.is_ignorable()  ← '#' comments, blank lines
           ├── CommandBuilder.parse_line()
           ├── Builtins.dispatch()       ← exit / cd / status
           └── ProcessSpawner.spawn()    ← everything else
                  ├── background → BackgroundJobTracker.add()
                  └── foreground → ProcessSpawner.wait() → last_status

ERROR POLICY (the only place that decides severity):
- FatalShellError (fork failure, $$ overflow): message on stderr, loop
  stops, run() returns 1
- CommandLimitError: reported, line dropped, status unchanged
- BuiltinError: reported, status set to the failure marker
- ChildSetupError never reaches this layer (handled in the child)

END OF INPUT behaves like the exit built-in.
"""
import logging
import sys
from typing import Optional, TextIO

from .builtins import Builtins
from .command import Command
from .command_builder import CommandBuilder
from .config import ShellConfig
from .constants import BACKGROUND_STARTED, EXIT_FAILURE, EXIT_OK
from .exceptions import BuiltinError, CommandLimitError, FatalShellError
from .expander import TokenExpander
from .job_tracker import BackgroundJobTracker
from .process_spawner import ProcessSpawner
from .redirection import RedirectionSetup
from .state import ShellState
from .status import FAILURE, format_status
from .tokenizer import is_ignorable


class Shell:
    """
    Line-oriented command interpreter.

    Streams are injectable for testing; by default the shell talks to the
    process's stdin/stdout/stderr. Children always inherit the real fds 0-2.
    """

    def __init__(self, config: Optional[ShellConfig] = None,
                 state: Optional[ShellState] = None,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None,
                 spawner: Optional[ProcessSpawner] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config or ShellConfig()
        self.state = state or ShellState()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.logger = logger or logging.getLogger('Shell')

        self.expander = TokenExpander(self.state.pid, capacity=self.config.token_capacity)
        self.builder = CommandBuilder(
            self.expander,
            max_arguments=self.config.max_arguments,
            max_line_length=self.config.max_line_length,
        )
        self.spawner = spawner or ProcessSpawner(RedirectionSetup(self.config.null_device))
        self.jobs = BackgroundJobTracker(self.stdout)
        self.builtins = Builtins(self.state, self.jobs, self.stdout)

        self._seen_foreground_only = self.state.foreground_only.active

        self.logger.info(f"Shell initialized (pid {self.state.pid})")

    # ========================================================================
    # MAIN LOOP
    # ========================================================================

    def run(self) -> int:
        """Run until exit, end of input or a fatal error; return the exit code"""
        try:
            while True:
                self.reap_background()
                self._note_mode_change()

                line = self.read_line()
                if line is None:
                    self.logger.info("End of input, exiting")
                    self.builtins.exit(Command(['exit']))
                    return EXIT_OK

                if not self.execute_line(line):
                    return EXIT_OK

        except FatalShellError as e:
            self.logger.critical(f"Fatal error: {e}")
            self._error(f"ERROR: {e}")
            return EXIT_FAILURE

    def read_line(self) -> Optional[str]:
        """Print the prompt and read one line; None at end of input"""
        self.stdout.write(self.config.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if line == '':
            return None
        return line

    def reap_background(self) -> None:
        for _, status in self.jobs.reap():
            self.state.last_status = status

    # ========================================================================
    # ONE LINE
    # ========================================================================

    def execute_line(self, line: str) -> bool:
        """
        Process one input line.

        Returns:
            False if the shell must stop (exit built-in), True otherwise

        Raises:
            FatalShellError: fork failure or PID expansion overflow
        """
        if is_ignorable(line):
            return True

        try:
            command = self.builder.parse_line(line)
        except CommandLimitError as e:
            self.logger.warning(f"Rejected line: {e}")
            self._error(f"ERROR: {e}")
            return True

        if command.is_empty():
            self.logger.debug(f"No program in {command}, nothing to run")
            return True

        if command.is_builtin():
            return self._run_builtin(command)

        self._run_external(command)
        return True

    def _run_builtin(self, command: Command) -> bool:
        try:
            return self.builtins.dispatch(command)
        except BuiltinError as e:
            self.logger.info(str(e))
            self._error(str(e))
            self.state.last_status = FAILURE
            return True

    def _run_external(self, command: Command) -> None:
        background = self.state.run_in_background(command.background)
        if command.background and not background:
            self.logger.debug(f"Foreground-only mode: running {command} in the foreground")

        pid = self.spawner.spawn(command, background)

        if background:
            self.jobs.add(pid)
            self._write(BACKGROUND_STARTED.format(pid=pid))
            return

        status = self.spawner.wait(pid)
        self.state.last_status = status
        if status.was_signaled:
            self._write(format_status(status))

    # ========================================================================
    # OUTPUT HELPERS
    # ========================================================================

    def _note_mode_change(self) -> None:
        active = self.state.foreground_only.active
        if active != self._seen_foreground_only:
            self.logger.info(f"Foreground-only mode {'on' if active else 'off'}")
            self._seen_foreground_only = active

    def _write(self, message: str) -> None:
        self.stdout.write(message + '\n')
        self.stdout.flush()

    def _error(self, message: str) -> None:
        self.stderr.write(message + '\n')
        self.stderr.flush()
