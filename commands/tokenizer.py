"""
ToyKV Command Tokenizer
=======================
Splits one raw input line into whitespace-delimited tokens.

Features:
- Any run of spaces/tabs separates tokens
- Leading/trailing whitespace ignored
- Column tracking for diagnostics
- No quoting: a token is any run of non-whitespace characters
"""

import re
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Token:
    """Immutable token with position info."""
    value: str
    col: int

    def __repr__(self) -> str:
        return f"Token('{self.value}', col {self.col})"


class Tokenizer:
    """
    Lexer for the command language. Call .tokenize(line) to get tokens.
    """

    WORD = re.compile(r'\S+')

    def tokenize(self, line: str) -> List[Token]:
        """Tokenize one line. A blank line yields an empty list."""
        return [Token(m.group(0), m.start() + 1)
                for m in self.WORD.finditer(line)]


def split_words(line: str) -> List[str]:
    """Token values only."""
    return [tok.value for tok in Tokenizer().tokenize(line)]
