"""
Command dataclass

ARCHITECTURE:
- Plain data structure produced by CommandBuilder for ONE input line
- Consumed once by Shell dispatch (built-in or ProcessSpawner)
- Discarded after the line is processed

DATA FLOW:
line → tokenize() → CommandBuilder.build() → Command →
    Builtins.dispatch()  OR  ProcessSpawner.spawn() → RedirectionSetup.apply()

USAGE PATTERN:
command = builder.build(tokenize("sort < in.txt > out.txt &"))
# command.argv = ['sort']
# command.input_file = 'in.txt'
# command.output_file = 'out.txt'
# command.background = True

NOTE: background records what the user REQUESTED. Whether the command really
runs in the background is decided at dispatch time (foreground-only mode).
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import BUILTIN_COMMANDS


@dataclass
class Command:
    """One parsed command line"""

    argv: List[str] = field(default_factory=list)   # argv[0] is the program name
    input_file: Optional[str] = None                # Target of '<'
    output_file: Optional[str] = None               # Target of '>'
    background: bool = False                        # A standalone '&' was seen

    def __str__(self) -> str:
        parts = list(self.argv)
        if self.input_file is not None:
            parts.append(f"< {self.input_file}")
        if self.output_file is not None:
            parts.append(f"> {self.output_file}")
        if self.background:
            parts.append("&")
        return f"Command[{' '.join(parts)}]"

    @property
    def name(self) -> Optional[str]:
        return self.argv[0] if self.argv else None

    @property
    def args(self) -> List[str]:
        """Arguments after the program name"""
        return self.argv[1:]

    def is_empty(self) -> bool:
        return not self.argv

    def is_builtin(self) -> bool:
        return self.name in BUILTIN_COMMANDS
