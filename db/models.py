"""
db.models - SQLAlchemy ORM declarations.

Tables
------
groups       - tenant boundary.  Every other row belongs to exactly one group.
locations    - strict tree via parent_id (roots have none).
labels       - free tags, unique by name inside a group by convention.
items        - one row per physical thing.  asset_id is the human-facing
               sequential number (0 = unset), import_ref the idempotency
               key used by bulk imports.
item_fields  - custom name/value pairs attached to an item.
item_labels  - item <-> label association.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, Date, DateTime, Float, ForeignKey, Index, Integer,
    String, Table, Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _new_id() -> str:
    return str(uuid.uuid4())


def _now():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


item_labels = Table(
    "item_labels",
    Base.metadata,
    Column("item_id", String(36),
           ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
    Column("label_id", String(36),
           ForeignKey("labels.id", ondelete="CASCADE"), primary_key=True),
)


class Group(Base):
    __tablename__ = "groups"

    id   = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), unique=True, nullable=False, index=True)

    created_at = Column(DateTime, default=_now)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


class Location(Base):
    __tablename__ = "locations"

    id        = Column(String(36), primary_key=True, default=_new_id)
    group_id  = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    parent_id = Column(String(36), ForeignKey("locations.id", ondelete="CASCADE"),
                       nullable=True, index=True)
    name        = Column(String(200), nullable=False)
    description = Column(Text, default="")

    created_at = Column(DateTime, default=_now)

    parent   = relationship("Location", remote_side=[id], back_populates="children")
    children = relationship("Location", back_populates="parent",
                            order_by="Location.name")

    __table_args__ = (
        Index("ix_location_sibling", "group_id", "parent_id", "name"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
            "description": self.description or "",
        }


class Label(Base):
    __tablename__ = "labels"

    id       = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"),
                      nullable=False, index=True)
    name     = Column(String(200), nullable=False)

    created_at = Column(DateTime, default=_now)

    __table_args__ = (
        Index("ix_label_name", "group_id", "name"),
    )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


class Item(Base):
    __tablename__ = "items"

    id       = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"),
                      nullable=False, index=True)
    location_id = Column(String(36), ForeignKey("locations.id", ondelete="SET NULL"),
                         nullable=True, index=True)

    # ── Identity ───────────────────────────────────────────────────────
    name        = Column(String(255), nullable=False, default="")
    description = Column(Text, default="")
    asset_id    = Column(Integer, nullable=False, default=0, index=True)
    import_ref  = Column(String(100), default="", index=True)

    # ── State ──────────────────────────────────────────────────────────
    quantity = Column(Integer, default=1)
    insured  = Column(Boolean, default=False)
    archived = Column(Boolean, default=False)
    notes    = Column(Text, default="")

    # ── Purchase / sale ────────────────────────────────────────────────
    purchase_price = Column(Float, default=0.0)
    purchase_from  = Column(String(255), default="")
    purchase_time  = Column(Date, nullable=True)
    sold_to        = Column(String(255), default="")
    sold_price     = Column(Float, default=0.0)
    sold_time      = Column(Date, nullable=True)
    sold_notes     = Column(Text, default="")

    # ── Product / warranty ─────────────────────────────────────────────
    manufacturer      = Column(String(255), default="")
    model_number      = Column(String(255), default="")
    serial_number     = Column(String(255), default="")
    lifetime_warranty = Column(Boolean, default=False)
    warranty_expires  = Column(Date, nullable=True)
    warranty_details  = Column(Text, default="")

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    location = relationship("Location")
    labels   = relationship("Label", secondary=item_labels, lazy="selectin",
                            order_by="Label.name")
    fields   = relationship(
        "ItemField", back_populates="item",
        cascade="all, delete-orphan", lazy="selectin",
    )

    __table_args__ = (
        Index("ix_item_group_ref", "group_id", "import_ref"),
    )

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name or "",
            "description": self.description or "",
            "asset_id": self.asset_id or 0,
            "import_ref": self.import_ref or "",
            "location_id": self.location_id,
            "labels": [l.name for l in self.labels],
            "quantity": self.quantity,
            "insured": bool(self.insured),
            "archived": bool(self.archived),
            "notes": self.notes or "",
            "purchase_price": self.purchase_price or 0.0,
            "purchase_from": self.purchase_from or "",
            "purchase_time": self.purchase_time.isoformat() if self.purchase_time else "",
            "sold_to": self.sold_to or "",
            "sold_price": self.sold_price or 0.0,
            "sold_time": self.sold_time.isoformat() if self.sold_time else "",
            "sold_notes": self.sold_notes or "",
            "manufacturer": self.manufacturer or "",
            "model_number": self.model_number or "",
            "serial_number": self.serial_number or "",
            "lifetime_warranty": bool(self.lifetime_warranty),
            "warranty_expires": self.warranty_expires.isoformat() if self.warranty_expires else "",
            "warranty_details": self.warranty_details or "",
            "fields": {f.name: f.text_value for f in self.fields},
        }


class ItemField(Base):
    __tablename__ = "item_fields"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    item_id    = Column(String(36),
                        ForeignKey("items.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    name       = Column(String(200), nullable=False)
    type       = Column(String(20), nullable=False, default="text")
    text_value = Column(Text, nullable=False, default="")

    item = relationship("Item", back_populates="fields")

    __table_args__ = (
        Index("ix_item_field_lookup", "item_id", "name"),
    )
