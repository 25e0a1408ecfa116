"""
Shell configuration

Centralized tunables for one interpreter instance. Defaults come from
constants.py; logging destination can be changed through the environment
(SMALLSH_LOG_LEVEL, SMALLSH_LOG_FILE) or the command line.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import MAX_ARGUMENTS, MAX_LINE_LENGTH, PROMPT, TOKEN_CAPACITY

ENV_LOG_LEVEL = 'SMALLSH_LOG_LEVEL'
ENV_LOG_FILE = 'SMALLSH_LOG_FILE'


@dataclass
class ShellConfig:
    """
    Configuration for Shell and its components.

    Limits are enforced by the parser (line length, argument count) and the
    token expander (token capacity). null_device is where background jobs
    without an input file read from.
    """
    # Interaction
    prompt: str = PROMPT

    # Grammar limits
    max_line_length: int = MAX_LINE_LENGTH
    max_arguments: int = MAX_ARGUMENTS
    token_capacity: int = TOKEN_CAPACITY

    # Child process setup
    null_device: str = os.devnull

    # Logging
    log_level: str = 'WARNING'
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ShellConfig':
        """Build a config, letting SMALLSH_* variables override logging settings"""
        environ = os.environ if environ is None else environ
        config = cls()

        level = environ.get(ENV_LOG_LEVEL)
        if level:
            config.log_level = level.upper()

        log_file = environ.get(ENV_LOG_FILE)
        if log_file:
            config.log_file = log_file

        return config
