"""
Definition Interpreter
======================
Compiles the token stream produced by the Lexer into an ordered list of
Magic records.

Grammar (whitespace separated, braces accepted but not enforced):
    register <name>
      [rank <int 0-5>]
      [type ORDER|CHAOS]
      [always_def true|false]
      [table_addon <int>]
      [race_mult <float>]

Attribute keywords apply to the most recently registered spell; the last
write wins. The first error aborts the whole compile.
"""
from dataclasses import replace
from enum import Enum, auto

from .lexer import Lexer, Token, TokenType
from .magic import Magic, MagicError, MagicRank


class ParseErrorKind(Enum):
    OUT_OF_BOUNDS               = auto()
    EXPECTED_NAME               = auto()
    EXPECTED_INT                = auto()
    EXPECTED_FLOAT              = auto()
    EXPECTED_BOOL               = auto()
    EXPECTED_CUSTOM_IDENTIFIER  = auto()
    NO_REGISTERED_MAGIC         = auto()


class ParseError(MagicError):
    """Compile-time error in a definition file."""

    def __init__(self, kind: ParseErrorKind, message: str, line: int | None = None):
        self.kind = kind
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


# Attribute keyword → (expected value type, error kind, human name, Magic field)
ATTRIBUTES: dict[TokenType, tuple[TokenType, ParseErrorKind, str, str]] = {
    TokenType.RANK:        (TokenType.INTEGER,    ParseErrorKind.EXPECTED_INT,  "Int",         "rank"),
    TokenType.TYPE:        (TokenType.IDENTIFIER, ParseErrorKind.EXPECTED_CUSTOM_IDENTIFIER, "ORDER/CHAOS", "type"),
    TokenType.ALWAYS_DEF:  (TokenType.BOOLEAN,    ParseErrorKind.EXPECTED_BOOL, "Bool",        "always_def"),
    TokenType.TABLE_ADDON: (TokenType.INTEGER,    ParseErrorKind.EXPECTED_INT,  "Int",         "table_addon"),
    TokenType.RACE_MULT:   (TokenType.FLOAT,      ParseErrorKind.EXPECTED_FLOAT, "Float",      "race_mult"),
}


class Interpreter:
    """
    Single-pass definition compiler.

    Usage:
        tokens = Lexer(source).tokenize()
        magics = Interpreter(tokens).interpret()
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0
        self.magics: list[Magic] = []
        self.current: Magic | None = None  # Spell being edited, not yet flushed

    def interpret(self) -> list[Magic]:
        """Compile every token. Returns the spells in order of appearance."""
        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            match token.type:
                case TokenType.REGISTER:
                    self._register(token)
                case (TokenType.RANK | TokenType.TYPE | TokenType.ALWAYS_DEF
                      | TokenType.TABLE_ADDON | TokenType.RACE_MULT):
                    self._set_attribute(token)
                case _:
                    # Braces, stray values and names carry no meaning yet
                    self.pos += 1
        self._flush()
        return self.magics

    # ─────────────────────────────────────────────────────────
    #  Keyword Handlers
    # ─────────────────────────────────────────────────────────

    def _register(self, token: Token):
        name = self._operand(token)
        if name.type != TokenType.NAME:
            raise ParseError(
                ParseErrorKind.EXPECTED_NAME,
                f"Expected Name after 'register' but found '{name.word}'",
                name.line,
            )
        self._flush()
        self.current = Magic(name=name.value)
        self.pos += 2

    def _set_attribute(self, token: Token):
        expected, kind, label, field_name = ATTRIBUTES[token.type]
        if self.current is None:
            raise ParseError(
                ParseErrorKind.NO_REGISTERED_MAGIC,
                f"'{token.word}' used before any 'register'",
                token.line,
            )
        value = self._operand(token)
        if value.type != expected:
            raise ParseError(
                kind,
                f"Expected {label} after '{token.word}' but found '{value.word}'",
                value.line,
            )
        converted = value.value
        if token.type == TokenType.RANK:
            converted = MagicRank.from_int(converted)
        self.current = replace(self.current, **{field_name: converted})
        self.pos += 2

    # ─────────────────────────────────────────────────────────
    #  Helpers
    # ─────────────────────────────────────────────────────────

    def _operand(self, token: Token) -> Token:
        """Return the token following a keyword."""
        if self.pos + 1 >= len(self.tokens):
            raise ParseError(
                ParseErrorKind.OUT_OF_BOUNDS,
                f"'{token.word}' expects a value but the file ends",
                token.line,
            )
        return self.tokens[self.pos + 1]

    def _flush(self):
        if self.current is not None:
            self.magics.append(self.current)
            self.current = None


def compile_source(source: str) -> list[Magic]:
    """Tokenize and compile definition text in one step."""
    return Interpreter(Lexer(source).tokenize()).interpret()
