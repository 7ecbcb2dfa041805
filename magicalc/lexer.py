"""
Definition Lexer
================
Splits definition-file text on whitespace and classifies every word.
There is no lexical error: a word that matches nothing else is a NAME.
"""
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator

from .magic import MagicType


class TokenType(Enum):
    """All token types in a definition file."""
    # Keywords
    REGISTER    = auto()   # register
    RANK        = auto()   # rank
    TYPE        = auto()   # type
    ALWAYS_DEF  = auto()   # always_def
    TABLE_ADDON = auto()   # table_addon
    RACE_MULT   = auto()   # race_mult
    LBRACE      = auto()   # {
    RBRACE      = auto()   # }

    # Values
    BOOLEAN     = auto()   # true, false
    INTEGER     = auto()   # 42, -3
    FLOAT       = auto()   # 1.5, 2e3
    IDENTIFIER  = auto()   # ORDER, CHAOS

    # Anything else
    NAME        = auto()


@dataclass(frozen=True)
class Token:
    """A single classified word from a definition file."""
    type: TokenType
    value: Any
    word: str
    line: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, L{self.line})"


KEYWORDS = {
    "register": TokenType.REGISTER,
    "rank": TokenType.RANK,
    "type": TokenType.TYPE,
    "always_def": TokenType.ALWAYS_DEF,
    "table_addon": TokenType.TABLE_ADDON,
    "race_mult": TokenType.RACE_MULT,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

IDENTIFIERS = {
    "ORDER": MagicType.ORDER,
    "CHAOS": MagicType.CHAOS,
}

BOOLEANS = {
    "true": True,
    "false": False,
}

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?"
    r"|\.[0-9]+(?:[eE][+-]?[0-9]+)?"
    r"|inf|infinity|nan)",
    re.IGNORECASE,
)


def classify(word: str, line: int = 1) -> Token:
    """Classify one whitespace-free word. Priority follows declaration order above."""
    if word in KEYWORDS:
        return Token(KEYWORDS[word], word, word, line)
    if word in IDENTIFIERS:
        return Token(TokenType.IDENTIFIER, IDENTIFIERS[word], word, line)
    if word in BOOLEANS:
        return Token(TokenType.BOOLEAN, BOOLEANS[word], word, line)
    if _INTEGER_RE.fullmatch(word):
        number = int(word)
        if INT_MIN <= number <= INT_MAX:
            return Token(TokenType.INTEGER, number, word, line)
    if _FLOAT_RE.fullmatch(word):
        return Token(TokenType.FLOAT, float(word), word, line)
    return Token(TokenType.NAME, word, word, line)


class Lexer:
    """
    Tokenizes a definition file.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str):
        self.source = source

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source into a list of tokens."""
        return list(self._iter_tokens())

    def _iter_tokens(self) -> Iterator[Token]:
        """Generate tokens one at a time, tracking the source line."""
        for line_no, line in enumerate(self.source.splitlines(), start=1):
            for word in line.split():
                yield classify(word, line_no)
