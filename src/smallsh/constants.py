"""
Constants and fixed messages for the smallsh interpreter
"""

# ============================================================================
# COMMAND LINE LIMITS
# ============================================================================
# The grammar is word based and unquoted, so limits are simple counts.
MAX_LINE_LENGTH = 2048      # Characters in one command line
MAX_ARGUMENTS = 512         # Words kept as program arguments
TOKEN_CAPACITY = 256        # Characters in one token after $$ expansion

# Characters that separate words (same set the classic strtok() delimiter uses)
TOKEN_DELIMITERS = ' \t\r\n\a'


# ============================================================================
# GRAMMAR SYMBOLS
# ============================================================================
PID_MARKER = '$$'           # Replaced by the shell's own process id
COMMENT_PREFIX = '#'
REDIRECT_IN = '<'
REDIRECT_OUT = '>'
BACKGROUND = '&'


# ============================================================================
# BUILT-IN COMMANDS
# ============================================================================
BUILTIN_EXIT = 'exit'
BUILTIN_CD = 'cd'
BUILTIN_STATUS = 'status'

BUILTIN_COMMANDS = {
    BUILTIN_EXIT,
    BUILTIN_CD,
    BUILTIN_STATUS,
}


# ============================================================================
# USER-FACING TEXT
# ============================================================================
PROMPT = ': '

# Written from the SIGTSTP handler with os.write(), keep them plain bytes
ENTER_FOREGROUND_ONLY = b'\nEntering foreground-only mode (& is now ignored)\n'
EXIT_FOREGROUND_ONLY = b'\nExiting foreground-only mode\n'

BACKGROUND_STARTED = 'background pid is {pid}'
BACKGROUND_DONE = 'background pid {pid} is done: {status}'

# Output file permissions: rw-r--r--
OUTPUT_FILE_MODE = 0o644

# Exit codes of the shell process itself and of children that fail before exec
EXIT_OK = 0
EXIT_FAILURE = 1
