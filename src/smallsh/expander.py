"""
Token Expander - $$ to shell PID substitution

RESPONSIBILITIES:
- Replace every '$$' in a token with the decimal PID of the shell
- Enforce the fixed per-token capacity (ExpansionOverflow)

NOT RESPONSIBLE FOR:
- Environment variables, $?, ${...} (not part of the grammar)
- Deciding what an overflow means (Shell treats it as fatal)

SCAN RULES:
Markers are matched left to right and never overlap:
    'pid$$$$log' (pid 4567)  → 'pid45674567log'
    'a$$$b'      (pid 4567)  → 'a4567$b'
"""
import logging
from typing import Optional

from .constants import PID_MARKER, TOKEN_CAPACITY
from .exceptions import ExpansionOverflow


class TokenExpander:
    """Expands the PID marker inside single tokens"""

    def __init__(self, pid: int, capacity: int = TOKEN_CAPACITY,
                 logger: Optional[logging.Logger] = None):
        """
        Args:
            pid: Shell process id (substitution value, never changes)
            capacity: Buffer size of one expanded token, terminator included
            logger: Logger instance
        """
        self.pid = pid
        self.pid_text = str(pid)
        self.capacity = capacity
        self.logger = logger or logging.getLogger('TokenExpander')

    def expand(self, token: str) -> str:
        """
        Return token with each '$$' replaced by the shell pid.

        Raises:
            ExpansionOverflow: an expansion would not fit in the token buffer.
                Only checked at expansion points, so tokens without markers
                pass through unchanged whatever their length.
        """
        if PID_MARKER not in token:
            return token

        parts = []
        length = 0
        i = 0
        while i < len(token):
            if token.startswith(PID_MARKER, i):
                # Room is needed for the pid plus the buffer terminator
                if length + len(self.pid_text) >= self.capacity:
                    raise ExpansionOverflow(token, self.capacity)
                parts.append(self.pid_text)
                length += len(self.pid_text)
                i += len(PID_MARKER)
            else:
                parts.append(token[i])
                length += 1
                i += 1

        expanded = ''.join(parts)
        self.logger.debug(f"Expanded {token!r} -> {expanded!r}")
        return expanded
