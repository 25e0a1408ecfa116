"""
Exception hierarchy for smallsh

ARCHITECTURE:
Leaf components (expander, builder, spawner, redirection, built-ins) only
RAISE. The Shell main loop is the single place that decides what an error
means for the process:

    ShellError
    ├── FatalShellError         → stop the loop, shell exits with status 1
    │   ├── SpawnError          (fork() failed)
    │   └── ExpansionOverflow   ($$ expansion exceeded the token buffer)
    ├── ChildSetupError         → handled INSIDE the forked child, child exits 1
    │   ├── RedirectionError
    │   └── ExecError
    ├── CommandLimitError       → report, drop the line, keep going
    │   ├── LineTooLongError
    │   └── TooManyArgumentsError
    └── BuiltinError            → report, set failure status, keep going
        └── ChangeDirectoryError
"""


class ShellError(Exception):
    """Base class for every error raised by smallsh components"""


# ============================================================================
# FATAL TO THE SHELL
# ============================================================================

class FatalShellError(ShellError):
    """Error that terminates the whole interpreter"""


class SpawnError(FatalShellError):
    """Creating a new process failed"""

    def __init__(self, program: str, reason: str):
        self.program = program
        self.reason = reason
        super().__init__(f"fork() failure while starting '{program}': {reason}")


class ExpansionOverflow(FatalShellError):
    """PID expansion would overflow the per-token buffer"""

    def __init__(self, token: str, capacity: int):
        self.token = token
        self.capacity = capacity
        super().__init__(
            f"PID expansion of '{token}' would exceed {capacity} characters"
        )


# ============================================================================
# FATAL TO THE CHILD ONLY
# ============================================================================

class ChildSetupError(ShellError):
    """Error raised in a forked child before (or instead of) exec"""


class RedirectionError(ChildSetupError):
    """Opening or rebinding a redirection target failed"""

    def __init__(self, path: str, direction: str, reason: str):
        self.path = path
        self.direction = direction
        self.reason = reason
        super().__init__(f"cannot open {path} for {direction}: {reason}")


class ExecError(ChildSetupError):
    """The program could not be located or executed"""

    def __init__(self, program: str, reason: str):
        self.program = program
        self.reason = reason
        super().__init__(f"{program}: command not recognized or cannot be executed")


# ============================================================================
# RECOVERABLE
# ============================================================================

class CommandLimitError(ShellError):
    """The command line exceeds one of the fixed grammar limits"""


class LineTooLongError(CommandLimitError):

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"command line too long ({length} > {limit} characters)")


class TooManyArgumentsError(CommandLimitError):

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"too many arguments ({count} > {limit})")


class BuiltinError(ShellError):
    """A built-in command failed without affecting the shell"""


class ChangeDirectoryError(BuiltinError):

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cd: {path}: {reason}")
