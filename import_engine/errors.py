"""
import_engine.errors - Exception hierarchy for bulk imports.

Fatal errors propagate immediately and stop the batch.  Row validation
problems are collected and raised once, at the end, as
ImportValidationError.
"""

from __future__ import annotations


class ImportEngineError(Exception):
    """Base class for every import failure."""


class HeaderMismatchError(ImportEngineError):
    """The sheet has columns outside the accepted vocabulary."""

    def __init__(self, unknown: list[str]):
        self.unknown = unknown
        super().__init__(
            "CSV columns do not match the expected format: "
            + ", ".join(unknown)
        )


class SheetFormatError(ImportEngineError):
    """A cell could not be converted to its column's type."""

    def __init__(self, row: int, column: str, value: str, expected: str):
        self.row = row
        self.column = column
        super().__init__(f"Row {row}: {column} {value!r} is not a valid {expected}")


class ImportValidationError(ImportEngineError):
    """One or more rows failed validation and were skipped."""

    def __init__(self, report):
        self.report = report
        lines = "\n".join(e["reason"] for e in report.errors)
        super().__init__(f"Errors detected in CSV:\n{lines}")


class CatalogLookupError(ImportEngineError, LookupError):
    """Existing labels or locations could not be loaded."""


class MaterializationError(ImportEngineError):
    """The store rejected creating a label or location."""


class PersistenceError(ImportEngineError):
    """The store rejected creating, fetching or updating an item."""


class ConsistencyError(ImportEngineError):
    """An internal invariant was violated; the batch state is not trustworthy."""


class ImportCancelled(ImportEngineError):
    """The caller asked the import to stop between rows."""

    def __init__(self, completed: int):
        self.completed = completed
        super().__init__(f"Import cancelled after {completed} rows")
