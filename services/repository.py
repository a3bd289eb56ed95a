"""
services.repository - Catalog repository used by the import engine.

Bundles the label, location and item services behind the nine calls
the engine makes, bound to one Session.  The engine only relies on
the method names, so tests can swap in any object with the same
surface.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from services.items_service import ItemsService
from services.labels_service import LabelsService
from services.locations_service import LocationsService
from services.sequence_service import highest_asset_id


class SqlCatalogRepository:

    def __init__(self, session: Session):
        self.session = session

    # ── Labels ─────────────────────────────────────────────────────────

    def get_all_labels(self, group_id: str) -> list[dict]:
        return [l.to_dict() for l in LabelsService.get_all(self.session, group_id)]

    def create_label(self, group_id: str, name: str) -> dict:
        return LabelsService.create(self.session, group_id, name).to_dict()

    # ── Locations ──────────────────────────────────────────────────────

    def get_location_tree(self, group_id: str) -> list[dict]:
        return LocationsService.tree(self.session, group_id)

    def create_location(self, group_id: str, name: str, parent_id: str | None = None) -> dict:
        return LocationsService.create(self.session, group_id, name, parent_id).to_dict()

    # ── Items ──────────────────────────────────────────────────────────

    def item_exists_by_ref(self, group_id: str, ref: str) -> bool:
        return ItemsService.check_ref(self.session, group_id, ref)

    def get_item_by_ref(self, group_id: str, ref: str) -> dict:
        return ItemsService.get_by_ref(self.session, group_id, ref).to_dict()

    def get_highest_asset_id(self, group_id: str) -> int:
        return highest_asset_id(self.session, group_id)

    def create_item(self, group_id: str, data: dict) -> dict:
        return ItemsService.create(self.session, group_id, data).to_dict()

    def update_item(self, group_id: str, data: dict) -> dict:
        return ItemsService.update(self.session, group_id, data).to_dict()
