"""
smallsh - a small POSIX command interpreter

Main components:
- Shell: Main loop orchestrator
- CommandBuilder: Token classification into Command objects
- TokenExpander: $$ to shell PID expansion
- ProcessSpawner: fork/exec of external programs
- RedirectionSetup: stdin/stdout rebinding in children
- BackgroundJobTracker: Background pid tracking and reaping
- SignalHandler: SIGINT ignore, SIGTSTP foreground-only toggle
"""

from .command import Command
from .command_builder import CommandBuilder
from .config import ShellConfig
from .expander import TokenExpander
from .job_tracker import BackgroundJobTracker
from .process_spawner import ProcessSpawner
from .redirection import RedirectionSetup
from .shell import Shell
from .signals import ForegroundOnlyMode, SignalHandler
from .state import ShellState
from .status import TerminationStatus, format_status

__version__ = '1.0.0'

__all__ = [
    'Shell',
    'ShellConfig',
    'ShellState',
    'Command',
    'CommandBuilder',
    'TokenExpander',
    'ProcessSpawner',
    'RedirectionSetup',
    'BackgroundJobTracker',
    'ForegroundOnlyMode',
    'SignalHandler',
    'TerminationStatus',
    'format_status',
]
