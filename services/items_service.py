"""
services.items_service - CRUD and maintenance operations on Item records.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and lets the
caller batch multiple operations in one transaction.

Create/update payloads are plain dicts keyed by Item attribute name,
plus ``label_ids`` (list of label ids) and ``fields`` (list of
``{"name", "type", "text_value"}`` dicts).
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from db.models import Item, ItemField
from services.labels_service import LabelsService
from services.locations_service import LocationsService
from services.sequence_service import highest_asset_id, next_asset_id

logger = logging.getLogger(__name__)

# Every attribute a full update rewrites
UPDATABLE_ATTRS = (
    "name", "description", "asset_id", "quantity", "insured", "archived",
    "purchase_price", "purchase_from", "purchase_time",
    "manufacturer", "model_number", "serial_number",
    "lifetime_warranty", "warranty_expires", "warranty_details",
    "sold_to", "sold_price", "sold_time", "sold_notes",
    "notes",
)


class ItemsService:

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get(session: Session, group_id: str, item_id: str) -> Item | None:
        item = session.get(Item, item_id)
        if item is None or item.group_id != group_id:
            return None
        return item

    @staticmethod
    def get_all(session: Session, group_id: str) -> list[Item]:
        return (
            session.query(Item)
            .filter(Item.group_id == group_id)
            .order_by(Item.asset_id, Item.name)
            .all()
        )

    @staticmethod
    def check_ref(session: Session, group_id: str, ref: str) -> bool:
        """True when an item with import reference *ref* exists in the group."""
        return session.query(
            session.query(Item)
            .filter(Item.group_id == group_id, Item.import_ref == ref)
            .exists()
        ).scalar()

    @staticmethod
    def get_by_ref(session: Session, group_id: str, ref: str) -> Item:
        """Return the item holding *ref*.  Raises LookupError when absent."""
        item = (
            session.query(Item)
            .filter(Item.group_id == group_id, Item.import_ref == ref)
            .order_by(Item.created_at)
            .first()
        )
        if item is None:
            raise LookupError(f"no item with import ref {ref!r}")
        return item

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create(session: Session, group_id: str, data: dict) -> Item:
        """
        Create an item from the identity subset of *data*:
        name, description, asset_id, import_ref, location_id, label_ids.
        """
        location_id = data.get("location_id") or None
        if location_id and LocationsService.get(session, group_id, location_id) is None:
            raise ValueError(f"location {location_id} not found")

        item = Item(
            group_id=group_id,
            name=str(data.get("name", "")).strip(),
            description=str(data.get("description", "")).strip(),
            asset_id=int(data.get("asset_id") or 0),
            import_ref=str(data.get("import_ref", "")).strip(),
            location_id=location_id,
        )
        item.labels = LabelsService.get_many(session, group_id, data.get("label_ids", ()))

        session.add(item)
        session.flush()
        return item

    @staticmethod
    def create_with_asset_id(
        session: Session,
        group_id: str,
        data: dict,
        auto_increment: bool,
    ) -> Item:
        """Create one item, numbering it after the current highest asset ID."""
        if auto_increment:
            data = dict(data, asset_id=next_asset_id(session, group_id))
        return ItemsService.create(session, group_id, data)

    # ── Update ─────────────────────────────────────────────────────────

    @staticmethod
    def update(session: Session, group_id: str, data: dict) -> Item:
        """
        Full rewrite of an existing item: every attribute in UPDATABLE_ATTRS,
        the location, the label set and the custom-field list.
        Missing keys reset to the column default.
        """
        item = ItemsService.get(session, group_id, data.get("id") or "")
        if item is None:
            raise LookupError(f"item {data.get('id')!r} not found")

        for attr in UPDATABLE_ATTRS:
            column = Item.__table__.columns[attr]
            default = column.default.arg if column.default is not None else None
            setattr(item, attr, data.get(attr, default))

        location_id = data.get("location_id") or None
        if location_id and LocationsService.get(session, group_id, location_id) is None:
            raise ValueError(f"location {location_id} not found")
        item.location_id = location_id

        item.labels = LabelsService.get_many(session, group_id, data.get("label_ids", ()))

        item.fields.clear()
        for f in data.get("fields", ()):
            item.fields.append(ItemField(
                name=f["name"],
                type=f.get("type", "text"),
                text_value=f.get("text_value", ""),
            ))

        session.flush()
        return item

    # ── Maintenance ────────────────────────────────────────────────────

    @staticmethod
    def ensure_asset_ids(session: Session, group_id: str) -> int:
        """
        Number every item whose asset ID is unset, continuing after the
        current highest.  Returns how many items were numbered.
        """
        items = (
            session.query(Item)
            .filter(Item.group_id == group_id, Item.asset_id == 0)
            .order_by(Item.created_at)
            .all()
        )

        highest = highest_asset_id(session, group_id)
        for item in items:
            highest += 1
            item.asset_id = highest

        session.flush()
        logger.info(f"Assigned {len(items)} asset IDs in group {group_id}")
        return len(items)

    @staticmethod
    def ensure_import_refs(session: Session, group_id: str) -> int:
        """Give every item without an import reference a fresh short one."""
        items = (
            session.query(Item)
            .filter(Item.group_id == group_id,
                    (Item.import_ref == "") | (Item.import_ref.is_(None)))
            .all()
        )

        for item in items:
            item.import_ref = uuid.uuid4().hex[:8]

        session.flush()
        logger.info(f"Assigned {len(items)} import refs in group {group_id}")
        return len(items)
