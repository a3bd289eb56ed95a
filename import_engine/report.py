"""
import_engine.report - Structured result of an import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_rows: int = 0
    completed: int = 0
    skipped: int = 0
    created: int = 0
    updated: int = 0
    labels_created: int = 0
    locations_created: int = 0
    errors: list[dict] = field(default_factory=list)   # [{row, reason}]

    def add_error(self, row: int, reason: str):
        self.errors.append({"row": row, "reason": reason})
        self.skipped += 1

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "completed": self.completed,
            "skipped": self.skipped,
            "created": self.created,
            "updated": self.updated,
            "labels_created": self.labels_created,
            "locations_created": self.locations_created,
            "errors": self.errors,
        }
