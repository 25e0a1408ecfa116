"""
Command Builder - classify tokens into a Command

ARCHITECTURE:
    line → tokenize() → CommandBuilder.build() → Command

CLASSIFICATION (in token order):
    '<'  first time          → next token is input_file
    '>'  first time          → next token is output_file
    '&'  anywhere            → background = True
    anything else            → argv (after $$ expansion)

A second '<' or '>' is an ordinary argument. No syntax validation is done:
a trailing '<' or '>' simply leaves the target unset.

NOTE on '&': the documented grammar says '&' only counts as the LAST word,
but every standalone '&' sets the flag. That looser behavior is kept on
purpose (see DESIGN.md, open questions).
"""
import logging
from typing import Iterable, Optional

from .command import Command
from .constants import BACKGROUND, MAX_ARGUMENTS, MAX_LINE_LENGTH, REDIRECT_IN, REDIRECT_OUT
from .exceptions import LineTooLongError, TooManyArgumentsError
from .expander import TokenExpander
from .tokenizer import tokenize


class CommandBuilder:
    """Builds Command objects from token streams"""

    def __init__(self, expander: TokenExpander,
                 max_arguments: int = MAX_ARGUMENTS,
                 max_line_length: int = MAX_LINE_LENGTH,
                 logger: Optional[logging.Logger] = None):
        self.expander = expander
        self.max_arguments = max_arguments
        self.max_line_length = max_line_length
        self.logger = logger or logging.getLogger('CommandBuilder')

    def build(self, tokens: Iterable[str]) -> Command:
        """
        Consume tokens and return the Command they describe.

        Raises:
            TooManyArgumentsError: more than max_arguments words in argv
            ExpansionOverflow: a word does not fit after $$ expansion
        """
        command = Command()
        stream = iter(tokens)

        for token in stream:
            if token == REDIRECT_IN and command.input_file is None:
                target = next(stream, None)
                if target is not None:
                    command.input_file = self.expander.expand(target)
                else:
                    self.logger.debug("'<' at end of line, no input file recorded")

            elif token == REDIRECT_OUT and command.output_file is None:
                target = next(stream, None)
                if target is not None:
                    command.output_file = self.expander.expand(target)
                else:
                    self.logger.debug("'>' at end of line, no output file recorded")

            elif token == BACKGROUND:
                command.background = True

            else:
                if len(command.argv) >= self.max_arguments:
                    raise TooManyArgumentsError(len(command.argv) + 1, self.max_arguments)
                command.argv.append(self.expander.expand(token))

        return command

    def parse_line(self, line: str) -> Command:
        """
        Tokenize and build one raw input line.

        Raises:
            LineTooLongError: line (without its newline) exceeds max_line_length
        """
        text = line.rstrip('\n')
        if len(text) > self.max_line_length:
            raise LineTooLongError(len(text), self.max_line_length)

        command = self.build(tokenize(text))
        self.logger.debug(f"Parsed {text!r} -> {command}")
        return command
