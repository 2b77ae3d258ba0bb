"""Offset to line/column mapping for diagnostic rendering."""

from __future__ import annotations

from bisect import bisect_right

from pl0check.tokens import Position


class LineIndex:
    """Immutable index of line start offsets over a source text.

    The text is normalized to end with a newline. Line 1 starts at offset 0
    and every newline starts a new line just past it.
    """

    __slots__ = ("_text", "_starts")

    def __init__(self, text: str) -> None:
        if not text.endswith("\n"):
            text += "\n"
        self._text = text
        starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                starts.append(i + 1)
        self._starts = tuple(starts)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_col(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of *offset*.

        Offsets at or past the end of the text clamp to the last line,
        column 1. An offset equal to a line start belongs to that line.
        """
        if offset >= len(self._text):
            return len(self._starts), 1
        line = bisect_right(self._starts, offset)
        return line, offset - self._starts[line - 1] + 1

    def position(self, offset: int) -> Position:
        line, col = self.line_col(offset)
        return Position(line, col, offset)

    def get_line(self, line: int) -> str | None:
        """Return the text of 1-based *line* including its newline, or None."""
        if line < 1 or line >= len(self._starts):
            return None
        return self._text[self._starts[line - 1] : self._starts[line]]
