"""
import_engine.row_processor - Per-row validation, structure creation
and identity resolution.

RowProcessor is stateful for the length of one import: it owns the
CatalogIndex snapshot and the asset-ID high-water mark, and mutates
both as rows go by so rows later in the batch reuse what earlier rows
created.
"""

from __future__ import annotations

import logging
from typing import Sequence

from import_engine.errors import ConsistencyError, MaterializationError, PersistenceError
from import_engine.indexes import CatalogIndex
from import_engine.paths import serialize_location
from import_engine.rows import ImportRow

logger = logging.getLogger(__name__)


def validate_row(row: ImportRow, row_num: int) -> tuple[bool, str]:
    """
    Reject rows with negative quantity or prices.  Returns (ok, message);
    the message holds one line per offending field.  NaN and infinity
    never get here: the sheet reader rejects them as format errors.
    """
    problems = []
    if row.quantity < 0:
        problems.append(f"Negative quantity at row {row_num}")
    if row.purchase_price < 0:
        problems.append(f"Negative purchase price at row {row_num}")
    if row.sold_price < 0:
        problems.append(f"Negative sold price at row {row_num}")
    return not problems, "\n".join(problems)


class RowProcessor:
    """
    Label/location materialisation and identity resolution for one
    group, against one repository, for one import run.
    """

    def __init__(
        self,
        repo,
        group_id: str,
        index: CatalogIndex,
        *,
        high_water: int = 0,
        auto_increment: bool = False,
    ):
        self.repo = repo
        self.group_id = group_id
        self.index = index
        self.high_water = high_water
        self.auto_increment = auto_increment
        self.labels_created = 0
        self.locations_created = 0

    # ── Labels ─────────────────────────────────────────────────────────

    def ensure_labels(self, names: Sequence[str]) -> list[str]:
        """
        Map label names to ids, creating unknown labels.  Order is kept
        and repeated names yield repeated ids.
        """
        ids = []
        for name in names:
            label_id = self.index.labels.get(name)
            if label_id is None:
                try:
                    label = self.repo.create_label(self.group_id, name)
                except Exception as exc:
                    raise MaterializationError(f"Could not create label {name!r}: {exc}") from exc
                label_id = label["id"]
                self.index.labels[name] = label_id
                self.labels_created += 1
                logger.debug(f"Created label {name!r} ({label_id})")
            ids.append(label_id)
        return ids

    # ── Locations ──────────────────────────────────────────────────────

    def ensure_location(self, segments: Sequence[str]) -> str | None:
        """
        Return the id of the location at *segments*, creating every
        missing ancestor root → leaf.  An empty path means no location.
        """
        if not segments:
            return None

        key = serialize_location(segments)
        location_id = self.index.paths.get(key)
        if location_id is not None:
            return location_id

        parent_id = None
        for depth in range(1, len(segments) + 1):
            prefix = serialize_location(segments[:depth])
            existing = self.index.paths.get(prefix)
            if existing is not None:
                parent_id = existing
                continue

            name = segments[depth - 1]
            try:
                loc = self.repo.create_location(self.group_id, name, parent_id)
            except Exception as exc:
                raise MaterializationError(f"Could not create location {prefix!r}: {exc}") from exc

            self.index.paths[prefix] = loc["id"]
            self.locations_created += 1
            logger.debug(f"Created location {prefix!r} ({loc['id']})")
            parent_id = loc["id"]

        location_id = self.index.paths.get(key)
        if location_id is None:
            raise ConsistencyError(f"Location {key!r} missing from index after creation")
        return location_id

    # ── Identity ───────────────────────────────────────────────────────

    def resolve_identity(self, row: ImportRow) -> bool:
        """True when the row's import ref names an item that already exists."""
        if not row.import_ref:
            return False
        try:
            return bool(self.repo.item_exists_by_ref(self.group_id, row.import_ref))
        except Exception as exc:
            raise PersistenceError(
                f"Error checking for existing item with ref {row.import_ref!r}: {exc}"
            ) from exc

    def allocate_asset_id(self, row: ImportRow) -> int:
        """
        Hand out high_water + 1 to rows without an asset ID when
        auto-increment is on.  Explicit IDs pass through untouched.
        """
        if self.auto_increment and not row.asset_id:
            self.high_water += 1
            return self.high_water
        return row.asset_id
