"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenType(Enum):
    """Closed set of token tags; each value is the tag's name in JSON output."""

    # Structural keywords
    VAR = "Var"
    IF = "If"
    THEN = "Then"
    ELSE = "Else"
    WHILE = "While"
    DO = "Do"
    BEGIN = "Begin"
    END = "End"

    # Operator keywords
    AND = "And"
    OR = "Or"

    # Type keywords
    INTEGER = "Integer"
    LONGINT = "Longint"
    BOOL = "Bool"
    REAL = "Real"

    # Operators
    ADD = "Add"  # +
    SUB = "Sub"  # -
    MUL = "Mul"  # *
    DIV = "Div"  # /
    ASSIGN = "Assign"  # :=
    LT = "Lt"  # <
    GT = "Gt"  # >
    NE = "Ne"  # <>
    GE = "Ge"  # >=
    LE = "Le"  # <=
    EQ = "Eq"  # =
    COLON = "Colon"  # :
    LPAREN = "LParen"  # (
    RPAREN = "RParen"  # )

    # Punctuation
    COMMA = "Comma"  # ,
    SEMICOLON = "SemiColon"  # ;

    # Literal-carrying
    IDENTIFIER = "Ident"  # [a-z][a-z0-9]*, folded to lowercase
    INTEGER_LITERAL = "Int"  # [0-9]+, leading zeros stripped

    def is_type(self) -> bool:
        """Return True for the four type keywords."""
        return self in TYPE_KEYWORDS

    def has_payload(self) -> bool:
        return self in (TokenType.IDENTIFIER, TokenType.INTEGER_LITERAL)


KEYWORDS: dict[str, TokenType] = {
    "var": TokenType.VAR,
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "integer": TokenType.INTEGER,
    "longint": TokenType.LONGINT,
    "bool": TokenType.BOOL,
    "real": TokenType.REAL,
}

TYPE_KEYWORDS = frozenset(
    {TokenType.INTEGER, TokenType.LONGINT, TokenType.BOOL, TokenType.REAL}
)

# Single-character symbols that never start a longer operator.
SINGLE_SYMBOLS: dict[str, TokenType] = {
    "+": TokenType.ADD,
    "-": TokenType.SUB,
    "*": TokenType.MUL,
    "=": TokenType.EQ,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
}

# Two-character operators, keyed by their first character.
COMPOUND_SYMBOLS: dict[str, tuple[TokenType, dict[str, TokenType]]] = {
    ":": (TokenType.COLON, {"=": TokenType.ASSIGN}),
    "<": (TokenType.LT, {">": TokenType.NE, "=": TokenType.LE}),
    ">": (TokenType.GT, {"=": TokenType.GE}),
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A token tag plus its payload (only identifiers and integer literals carry one)."""

    type: TokenType
    value: str = ""

    def to_json(self) -> Any:
        if self.type.has_payload():
            return {self.type.value: self.value}
        return self.type.value


@dataclass(frozen=True, slots=True)
class PositionedToken:
    """A token and the offset of its first character in the source."""

    offset: int
    token: Token

    @property
    def type(self) -> TokenType:
        return self.token.type

    @property
    def value(self) -> str:
        return self.token.value

    def to_json(self) -> dict[str, Any]:
        return {"offset": self.offset, "token": self.token.to_json()}


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier or keyword (ASCII letter)."""
    return ch.isascii() and ch.isalpha()


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier (ASCII letter or digit)."""
    return ch.isascii() and ch.isalnum()


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in "0123456789" and ch != ""
