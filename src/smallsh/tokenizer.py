"""
Tokenizer - split one command line into words

The grammar has no quoting or escaping: a token is any run of
characters other than whitespace and BEL. Operators (<, >, &) are only
recognized when they stand alone as words, so the tokenizer does not need
to know about them.

    >>> list(tokenize("ls -la > out.txt &"))
    ['ls', '-la', '>', 'out.txt', '&']
"""
import re
from typing import Iterator

from .constants import COMMENT_PREFIX, TOKEN_DELIMITERS

# Whitespace plus the classic delimiter set (BEL is not whitespace to re)
_WORD_RE = re.compile(r'[^\s' + re.escape(TOKEN_DELIMITERS) + r']+')


def tokenize(line: str) -> Iterator[str]:
    """Yield delimiter-separated words of line, lazily"""
    for match in _WORD_RE.finditer(line):
        yield match.group(0)


def is_comment(line: str) -> bool:
    # Only a '#' in the very first column makes a comment
    return line.startswith(COMMENT_PREFIX)


def is_blank(line: str) -> bool:
    return _WORD_RE.search(line) is None


def is_ignorable(line: str) -> bool:
    """True for lines the shell re-prompts on without doing anything"""
    return is_comment(line) or is_blank(line)
