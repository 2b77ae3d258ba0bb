"""--debug token and declaration dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from pl0check.lines import LineIndex
from pl0check.tokens import PositionedToken, TokenType


def dump_tokens(
    tokens: list[PositionedToken] | tuple[PositionedToken, ...],
    source: str,
    *,
    file: TextIO = sys.stderr,
) -> None:
    """Print one line per consumed token: line:col, tag, and payload."""
    index = LineIndex(source)
    file.write(f"Tokens ({len(tokens)})\n")
    for tok in tokens:
        line, col = index.line_col(tok.offset)
        loc = f"{line}:{col}"
        if tok.type.has_payload():
            file.write(f"  {loc:<8} {tok.type.name} {tok.value!r}\n")
        else:
            file.write(f"  {loc:<8} {tok.type.name}\n")


def dump_declarations(
    declarations: dict[str, TokenType | None], *, file: TextIO = sys.stderr
) -> None:
    file.write(f"Declarations ({len(declarations)})\n")
    for name, declared_type in declarations.items():
        type_name = declared_type.name.lower() if declared_type is not None else "?"
        file.write(f"  {name}: {type_name}\n")
