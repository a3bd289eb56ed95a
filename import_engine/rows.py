"""
import_engine.rows - Typed sheet rows.

An ImportRow lives only for the duration of one import call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(slots=True)
class CustomField:
    name: str
    value: str


@dataclass(slots=True)
class ImportRow:
    """One parsed sheet row.  ``row_num`` counts data rows from 1."""

    row_num: int = 0

    # ── Reconciliation keys ────────────────────────────────────────────
    location: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    import_ref: str = ""
    asset_id: int = 0          # 0 = unset

    # ── Item attributes ────────────────────────────────────────────────
    name: str = ""
    description: str = ""
    quantity: int = 1
    insured: bool = False
    archived: bool = False
    notes: str = ""

    purchase_price: float = 0.0
    purchase_from: str = ""
    purchase_time: date | None = None

    manufacturer: str = ""
    model_number: str = ""
    serial_number: str = ""

    lifetime_warranty: bool = False
    warranty_expires: date | None = None
    warranty_details: str = ""

    sold_to: str = ""
    sold_price: float = 0.0
    sold_time: date | None = None
    sold_notes: str = ""

    fields: list[CustomField] = field(default_factory=list)


@dataclass(slots=True)
class Sheet:
    headers: list[str]
    rows: list[ImportRow]
