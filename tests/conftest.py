"""Pytest configuration: make the src/ layout importable without installing.

Also provides fixtures shared by the shell-level tests.
"""

import io
import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC_DIR = os.path.join(PROJECT_ROOT, 'src')

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from smallsh.shell import Shell  # noqa: E402
from smallsh.state import ShellState  # noqa: E402


@pytest.fixture
def make_shell():
    """Build a Shell whose own messages go to StringIO buffers"""
    def _make(input_text='', config=None, state=None, spawner=None):
        stdout = io.StringIO()
        stderr = io.StringIO()
        shell = Shell(
            config=config,
            state=state or ShellState(),
            stdin=io.StringIO(input_text),
            stdout=stdout,
            stderr=stderr,
            spawner=spawner,
        )
        return shell, stdout, stderr
    return _make
