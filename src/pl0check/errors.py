"""Diagnostics with formatted source context."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from pl0check.lines import LineIndex


class Severity(Enum):
    ERROR = "Error"
    WARNING = "Warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A message attached to a character offset in the source."""

    offset: int
    severity: Severity
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def format(self, index: LineIndex, filename: str = "input.pl0") -> str:
        line, col = index.line_col(self.offset)
        source_line = (index.get_line(line) or "").rstrip()
        pad = " " * (col - 1)
        return (
            f"[{filename}:{line}:{col}] {self.severity.value}: {self.message}\n"
            f"    {source_line}\n"
            f"    {pad}^"
        )


class DiagnosticRecorder:
    """Ordered store of every error and warning produced during one run."""

    def __init__(self) -> None:
        self._errors: list[Diagnostic] = []
        self._warnings: list[Diagnostic] = []

    def error(self, offset: int, message: str) -> None:
        self._errors.append(Diagnostic(offset, Severity.ERROR, message))

    def warning(self, offset: int, message: str) -> None:
        self._warnings.append(Diagnostic(offset, Severity.WARNING, message))

    def record(self, diagnostic: Diagnostic) -> None:
        if diagnostic.is_error:
            self._errors.append(diagnostic)
        else:
            self._warnings.append(diagnostic)

    def has_errors(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(self._errors)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(self._warnings)

    def __len__(self) -> int:
        return len(self._errors) + len(self._warnings)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.sorted())

    def sorted(self, *, include_warnings: bool = True) -> list[Diagnostic]:
        """Merge errors and warnings in offset order.

        Sorting is stable, so at equal offsets errors precede warnings and
        each keeps its recording order.
        """
        merged = self._errors + (self._warnings if include_warnings else [])
        return sorted(merged, key=lambda d: d.offset)

    def render(
        self, source: str, filename: str = "input.pl0", *, include_warnings: bool = True
    ) -> list[str]:
        """Format every diagnostic against *source*, in offset order."""
        index = LineIndex(source)
        return [
            d.format(index, filename) for d in self.sorted(include_warnings=include_warnings)
        ]

    def summary(self) -> str:
        n_err = len(self._errors)
        n_warn = len(self._warnings)
        return (
            f"{n_err} error{'s' if n_err != 1 else ''}, "
            f"{n_warn} warning{'s' if n_warn != 1 else ''}"
        )
