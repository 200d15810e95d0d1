"""
Error taxonomy for the compaction pipeline.

Every error here is fatal for the run: nothing is retried and no row is
skipped. Callers (CLI, web routes) decide how to report them.
"""

from __future__ import annotations

from typing import List, Optional, Sequence


class CompactorError(Exception):
    """Base class for all pipeline errors."""


class SchemaError(CompactorError):
    """The tabular source lacks required columns, or carries one of them twice."""

    def __init__(
        self,
        missing: Sequence[str],
        message: Optional[str] = None,
        *,
        duplicated: Sequence[str] = (),
    ) -> None:
        self.missing: List[str] = list(missing)
        self.duplicated: List[str] = list(duplicated)
        if message is None:
            parts = []
            if self.missing:
                parts.append("Missing required column(s): " + ", ".join(self.missing))
            if self.duplicated:
                parts.append("Duplicated required column(s): " + ", ".join(self.duplicated))
            message = "; ".join(parts)
        super().__init__(message)


class SourceReadError(CompactorError):
    """The log file could not be decoded or tokenized as CSV."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class ParseError(CompactorError):
    """A required cell could not be parsed into its typed value."""

    def __init__(self, row: int, column: str, value: object, reason: str = "") -> None:
        self.row = row
        self.column = column
        self.value = value
        msg = f"Row {row}: cannot parse {column!r} value {value!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class ValidationError(CompactorError, ValueError):
    """A filter option is malformed (raised before any record is processed)."""
