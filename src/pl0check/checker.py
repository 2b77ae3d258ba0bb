"""Structural checker — validates the var block and begin/end nesting.

The checker pulls tokens from the lexer on demand, echoes every consumed
token to an output list, and records diagnostics instead of raising so that
one run reports as many problems as possible.
"""

from __future__ import annotations

from dataclasses import dataclass

from pl0check.errors import DiagnosticRecorder
from pl0check.lexer import Lexer
from pl0check.tokens import PositionedToken, TokenType


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of a run. ``tokens`` is None whenever an error was recorded."""

    tokens: tuple[PositionedToken, ...] | None
    declarations: dict[str, TokenType | None]
    diagnostics: DiagnosticRecorder

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_errors()


class Checker:
    """Two-phase state machine: declarations, then the begin/end body."""

    def __init__(self, source: str, diagnostics: DiagnosticRecorder | None = None) -> None:
        self._source = source
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticRecorder()
        self._lexer = Lexer(source, self.diagnostics)
        self.tokens: list[PositionedToken] = []
        self.declarations: dict[str, TokenType | None] = {}
        self.depth = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> PositionedToken | None:
        return self._lexer.peek_token()

    def _at(self, *types: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type in types

    def _peek_offset(self) -> int:
        tok = self._peek()
        return tok.offset if tok is not None else len(self._source)

    def _advance(self) -> PositionedToken | None:
        tok = self._lexer.next_token()
        if tok is not None:
            self.tokens.append(tok)
        return tok

    def _expect(self, tt: TokenType, message: str) -> PositionedToken | None:
        """Consume a token of type *tt*, or record *message* and consume nothing."""
        if self._at(tt):
            return self._advance()
        self.diagnostics.error(self._peek_offset(), message)
        return None

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def run(self) -> CheckResult:
        self._check_declarations()
        self._check_body()
        tokens = None if self.diagnostics.has_errors() else tuple(self.tokens)
        return CheckResult(tokens, dict(self.declarations), self.diagnostics)

    # ------------------------------------------------------------------
    # Phase 1: var block
    # ------------------------------------------------------------------

    def _check_declarations(self) -> None:
        if self._at(TokenType.VAR):
            self._advance()
        elif not self._at(TokenType.BEGIN):
            self.diagnostics.error(self._peek_offset(), "expected var")

        while self._at(TokenType.IDENTIFIER):
            self._declaration_line()

    def _declaration_line(self) -> None:
        """Check ``a, b, c: type;`` and add every name to the declarations."""
        names = [self._declare(self._advance())]

        while self._at(TokenType.COMMA, TokenType.IDENTIFIER):
            if self._at(TokenType.IDENTIFIER):
                self.diagnostics.error(self._peek_offset(), "missing comma")
                names.append(self._declare(self._advance()))
                continue
            self._advance()  # comma
            if self._at(TokenType.IDENTIFIER):
                names.append(self._declare(self._advance()))
            else:
                self.diagnostics.error(self._peek_offset(), "expected identifier")

        self._expect(TokenType.COLON, "expected colon")

        declared_type: TokenType | None = None
        tok = self._peek()
        if tok is not None and tok.type.is_type():
            declared_type = self._advance().type
        else:
            self.diagnostics.error(self._peek_offset(), "expected type")

        self._expect(TokenType.SEMICOLON, "expected semicolon")

        for name in names:
            if name is not None and self.declarations[name] is None:
                self.declarations[name] = declared_type

    def _declare(self, tok: PositionedToken | None) -> str | None:
        """Add an identifier to the declarations; return it if newly added."""
        assert tok is not None and tok.type is TokenType.IDENTIFIER
        name = tok.value
        if name in self.declarations:
            self.diagnostics.error(tok.offset, f"duplicate identifier: {name}")
            return None
        self.declarations[name] = None
        return name

    # ------------------------------------------------------------------
    # Phase 2: begin ... end
    # ------------------------------------------------------------------

    def _check_body(self) -> None:
        if not self._at(TokenType.BEGIN):
            self.diagnostics.error(self._peek_offset(), "expected begin")

        while (tok := self._advance()) is not None:
            if tok.type is TokenType.BEGIN:
                self.depth += 1
            elif tok.type is TokenType.END:
                if self.depth <= 0:
                    self.diagnostics.error(tok.offset, "unexpected end")
                else:
                    self.depth -= 1
            elif tok.type is TokenType.IDENTIFIER and tok.value not in self.declarations:
                self.diagnostics.error(tok.offset, f"undeclared identifier: {tok.value}")

        if self.depth > 0:
            self.diagnostics.error(len(self._source), "missing end")


def check(source: str) -> CheckResult:
    """Lex and structurally check *source* in one pass."""
    return Checker(source).run()
