"""PL/0 lexer — converts source text into a stream of positioned tokens.

Lexing never stops on bad input. Problems are returned as diagnostics and
scanning resumes at the next character.
"""

from __future__ import annotations

from typing import NamedTuple

from pl0check.errors import Diagnostic, DiagnosticRecorder, Severity
from pl0check.tokens import (
    COMPOUND_SYMBOLS,
    KEYWORDS,
    SINGLE_SYMBOLS,
    PositionedToken,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
)


class Scan(NamedTuple):
    """Result of scanning one token: the token, the resume offset, and any diagnostics."""

    token: PositionedToken | None
    end: int
    diagnostics: tuple[Diagnostic, ...]


def scan_token(source: str, pos: int) -> Scan:
    """Scan the next token of *source* starting at *pos*.

    Pure: the caller decides whether to keep the diagnostics and the new
    position. Returns a ``None`` token only at end of input.
    """
    diagnostics: list[Diagnostic] = []
    n = len(source)

    while pos < n:
        ch = source[pos]

        if ch.isspace():
            pos += 1
            continue

        if ch == "/" and source.startswith("//", pos):
            newline = source.find("\n", pos)
            pos = n if newline < 0 else newline + 1
            continue

        start = pos

        if is_ident_start(ch):
            while pos < n and is_ident_char(source[pos]):
                pos += 1
            word = source[start:pos].lower()
            kind = KEYWORDS.get(word)
            token = Token(kind) if kind is not None else Token(TokenType.IDENTIFIER, word)
            return Scan(PositionedToken(start, token), pos, tuple(diagnostics))

        if is_digit(ch):
            while pos < n and is_digit(source[pos]):
                pos += 1
            digits = source[start:pos]
            if pos < n and is_ident_start(source[pos]):
                diagnostics.append(
                    Diagnostic(pos, Severity.ERROR, "unexpected character after number")
                )
            if len(digits) > 1 and digits.startswith("0"):
                diagnostics.append(
                    Diagnostic(start, Severity.WARNING, "number cannot start with 0")
                )
                digits = digits.lstrip("0") or "0"
            token = Token(TokenType.INTEGER_LITERAL, digits)
            return Scan(PositionedToken(start, token), pos, tuple(diagnostics))

        if ch in COMPOUND_SYMBOLS:
            kind, longer = COMPOUND_SYMBOLS[ch]
            pos += 1
            if pos < n and source[pos] in longer:
                kind = longer[source[pos]]
                pos += 1
            return Scan(PositionedToken(start, Token(kind)), pos, tuple(diagnostics))

        if ch == "/":
            return Scan(PositionedToken(start, Token(TokenType.DIV)), pos + 1, tuple(diagnostics))

        kind = SINGLE_SYMBOLS.get(ch)
        if kind is not None:
            return Scan(PositionedToken(start, Token(kind)), pos + 1, tuple(diagnostics))

        diagnostics.append(Diagnostic(start, Severity.ERROR, f"unexpected character {ch!r}"))
        pos += 1

    return Scan(None, pos, tuple(diagnostics))


class Lexer:
    """Cursor over a source buffer producing one token at a time."""

    def __init__(self, source: str, diagnostics: DiagnosticRecorder | None = None) -> None:
        self._source = source
        self._pos = 0
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticRecorder()

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def source(self) -> str:
        return self._source

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    # ------------------------------------------------------------------
    # Character primitives
    # ------------------------------------------------------------------

    def peek_char(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def consume_char(self) -> str:
        ch = self.peek_char()
        if ch:
            self._pos += 1
        return ch

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def next_token(self) -> PositionedToken | None:
        """Consume and return the next token, recording its diagnostics."""
        scan = scan_token(self._source, self._pos)
        for diagnostic in scan.diagnostics:
            self.diagnostics.record(diagnostic)
        self._pos = scan.end
        return scan.token

    def peek_token(self) -> PositionedToken | None:
        """Return the next token without consuming it or recording anything."""
        return scan_token(self._source, self._pos).token

    def peek_type(self) -> TokenType | None:
        tok = self.peek_token()
        return tok.type if tok is not None else None

    def __iter__(self):
        while (tok := self.next_token()) is not None:
            yield tok


def tokenize(source: str, diagnostics: DiagnosticRecorder | None = None) -> list[PositionedToken]:
    """Convenience function: lex the whole source and return the token list."""
    return list(Lexer(source, diagnostics))
