"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from pl0check.checker import CheckResult, check
from pl0check.errors import Diagnostic, DiagnosticRecorder
from pl0check.lexer import tokenize
from pl0check.tokens import PositionedToken, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns (tokens, recorder)."""

    def _lex(source: str) -> tuple[list[PositionedToken], DiagnosticRecorder]:
        recorder = DiagnosticRecorder()
        return tokenize(source, recorder), recorder

    return _lex


@pytest.fixture
def run_check():
    """Return a helper that runs the structural checker on source."""

    def _check(source: str) -> CheckResult:
        return check(source)

    return _check


def assert_types(tokens: list[PositionedToken], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[PositionedToken], expected: list[str]) -> None:
    """Assert that the token payloads match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def messages(diagnostics: list[Diagnostic] | tuple[Diagnostic, ...]) -> list[str]:
    """Return the message text of each diagnostic, in order."""
    return [d.message for d in diagnostics]


def error_messages(result: CheckResult) -> list[str]:
    """Return error messages of a check result in offset order."""
    return [d.message for d in result.diagnostics.sorted() if d.is_error]
