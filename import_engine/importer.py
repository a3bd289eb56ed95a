"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → header check → index snapshot → per-row
validate / materialise / resolve / upsert, and produces either the
number of completed rows or an exception.

Rules applied per row:
  1. Rows with negative quantity or prices are skipped; their messages
     are raised together once the batch has finished.
  2. Labels and locations are created if they do not exist.
  3. A row whose import ref matches an existing item updates it,
     otherwise a new item is created.
  4. Either way the item is then rewritten with every field of the row.

Store failures stop the batch immediately.  Rows completed before the
failure stay committed.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

import config
from db.engine import get_session
from import_engine.csv_parser import read_sheet
from import_engine.errors import (
    ConsistencyError, HeaderMismatchError, ImportCancelled,
    ImportValidationError, PersistenceError,
)
from import_engine.field_map import unknown_headers
from import_engine.indexes import build_indexes
from import_engine.report import ImportReport
from import_engine.row_processor import RowProcessor, validate_row
from import_engine.rows import ImportRow, Sheet
from services.groups_service import GroupsService
from services.repository import SqlCatalogRepository

logger = logging.getLogger(__name__)


class ItemImporter:
    """
    Runs one import of a parsed sheet into one group.

    *repo* is anything exposing the catalog repository calls
    (see services.repository.SqlCatalogRepository).
    """

    def __init__(self, repo, group_id: str, *, auto_increment_asset_id: bool = True):
        self.repo = repo
        self.group_id = group_id
        self.auto_increment_asset_id = auto_increment_asset_id
        self.report = ImportReport()

    def run(
        self,
        sheet: Sheet,
        *,
        should_cancel: Optional[Callable[[], bool]] = None,
        after_row: Optional[Callable[[], None]] = None,
    ) -> int:
        """
        Import every row of *sheet* and return how many were upserted.

        *should_cancel* is polled before each row; *after_row* runs after
        each upserted row (the SQL entry point commits there).
        """
        unknown = unknown_headers(sheet.headers)
        if unknown:
            raise HeaderMismatchError(unknown)

        index = build_indexes(self.repo, self.group_id)

        high_water = 0
        if self.auto_increment_asset_id:
            try:
                high_water = int(self.repo.get_highest_asset_id(self.group_id))
            except Exception as exc:
                raise PersistenceError(f"Could not read highest asset ID: {exc}") from exc

        processor = RowProcessor(
            self.repo, self.group_id, index,
            high_water=high_water,
            auto_increment=self.auto_increment_asset_id,
        )

        logger.info(f"Importing {len(sheet.rows)} rows into group {self.group_id}")
        self._run_rows(processor, sheet.rows, should_cancel, after_row)

        self.report.labels_created = processor.labels_created
        self.report.locations_created = processor.locations_created
        logger.info(
            f"Import finished: {self.report.completed} completed, "
            f"{self.report.skipped} skipped / {self.report.total_rows} rows"
        )

        if not self.report.ok:
            raise ImportValidationError(self.report)
        return self.report.completed

    # ── Private helpers ────────────────────────────────────────────────

    def _run_rows(self, processor: RowProcessor, rows: Iterable[ImportRow], should_cancel, after_row):
        for row in rows:
            if should_cancel is not None and should_cancel():
                logger.warning(f"Import cancelled before row {row.row_num}")
                raise ImportCancelled(self.report.completed)

            self.report.total_rows += 1

            ok, message = validate_row(row, row.row_num)
            if not ok:
                logger.warning(f"Skipping row {row.row_num}: {message}")
                self.report.add_error(row.row_num, message)
                continue

            self._upsert(processor, row)
            self.report.completed += 1
            if after_row is not None:
                after_row()

    def _upsert(self, processor: RowProcessor, row: ImportRow) -> dict:
        label_ids = processor.ensure_labels(row.labels)
        location_id = processor.ensure_location(row.location)
        exists = processor.resolve_identity(row)
        asset_id = processor.allocate_asset_id(row)
        verb = "fetch" if exists else "create"

        try:
            if exists:
                item = self.repo.get_item_by_ref(self.group_id, row.import_ref)
                self.report.updated += 1
            else:
                item = self.repo.create_item(self.group_id, {
                    "import_ref": row.import_ref,
                    "name": row.name,
                    "description": row.description,
                    "asset_id": asset_id,
                    "location_id": location_id,
                    "label_ids": label_ids,
                })
                self.report.created += 1
        except Exception as exc:
            raise PersistenceError(f"Row {row.row_num}: could not {verb} item: {exc}") from exc

        if not item or not item.get("id"):
            raise ConsistencyError(f"Row {row.row_num}: item has no id after {verb}")

        update = self._full_update(row, item["id"], asset_id, location_id, label_ids)
        try:
            return self.repo.update_item(self.group_id, update)
        except Exception as exc:
            raise PersistenceError(f"Row {row.row_num}: could not update item: {exc}") from exc

    @staticmethod
    def _full_update(row: ImportRow, item_id: str, asset_id: int, location_id, label_ids) -> dict:
        return {
            "id": item_id,
            "label_ids": label_ids,
            "location_id": location_id,

            "name": row.name,
            "description": row.description,
            "asset_id": asset_id,
            "insured": row.insured,
            "quantity": row.quantity,
            "archived": row.archived,

            "purchase_price": row.purchase_price,
            "purchase_from": row.purchase_from,
            "purchase_time": row.purchase_time,

            "manufacturer": row.manufacturer,
            "model_number": row.model_number,
            "serial_number": row.serial_number,

            "lifetime_warranty": row.lifetime_warranty,
            "warranty_expires": row.warranty_expires,
            "warranty_details": row.warranty_details,

            "sold_to": row.sold_to,
            "sold_time": row.sold_time,
            "sold_price": row.sold_price,
            "sold_notes": row.sold_notes,

            "notes": row.notes,
            "fields": [
                {"name": f.name, "type": "text", "text_value": f.value}
                for f in row.fields
            ],
        }


def run_import(
    file_content: str | bytes,
    *,
    group: str | None = None,
    auto_increment_asset_id: bool | None = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> int:
    """
    Import a CSV/TSV blob into the database.

    Parameters
    ----------
    file_content : raw sheet (bytes or str)
    group : group name; defaults to config.DEFAULT_GROUP
    auto_increment_asset_id : defaults to config.AUTO_INCREMENT_ASSET_ID
    should_cancel : polled between rows

    Returns the number of rows upserted.  Each row is committed as soon
    as it completes, so on any exception earlier rows remain stored.
    """
    sheet = read_sheet(file_content)
    unknown = unknown_headers(sheet.headers)
    if unknown:
        raise HeaderMismatchError(unknown)

    if auto_increment_asset_id is None:
        auto_increment_asset_id = config.AUTO_INCREMENT_ASSET_ID

    session = get_session()
    try:
        group_obj = GroupsService.get_or_create(session, group or config.DEFAULT_GROUP)
        session.commit()
        group_id, group_name = group_obj.id, group_obj.name

        importer = ItemImporter(
            SqlCatalogRepository(session), group_id,
            auto_increment_asset_id=auto_increment_asset_id,
        )
        try:
            return importer.run(sheet, should_cancel=should_cancel, after_row=session.commit)
        except ImportValidationError:
            raise
        except Exception:
            session.rollback()
            logger.error(f"Import into group {group_name!r} aborted", exc_info=True)
            raise
    finally:
        session.close()
