"""PL/0 front-end checker: lexer plus declaration and block structure validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pl0check.checker import CheckResult

__version__ = "0.1.0"


def check(source: str) -> CheckResult:
    """Lex and check PL/0 source, returning tokens or diagnostics."""
    from pl0check.checker import check as _check

    return _check(source)
