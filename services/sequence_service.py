"""
services.sequence_service - Asset ID sequence allocation.

Isolated so both the single-item "create" flow and the import engine
read the high-water mark the same way.
"""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from db.models import Item


def highest_asset_id(session: Session, group_id: str) -> int:
    """Return the largest asset ID in the group, 0 when none is set."""
    db_max = session.query(func.max(Item.asset_id)).filter(
        Item.group_id == group_id,
    ).scalar()
    return int(db_max) if db_max else 0


def next_asset_id(session: Session, group_id: str) -> int:
    """Return the asset ID the next auto-numbered item should receive."""
    return highest_asset_id(session, group_id) + 1


def format_asset_id(asset_id: int) -> str:
    """Render an asset ID as the printed ``000-123`` form."""
    text = f"{asset_id:06d}"
    return f"{text[:3]}-{text[3:]}"
