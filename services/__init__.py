"""
services - Business-logic layer sitting between API/import engine and DB.
"""

from services.groups_service import GroupsService          # noqa: F401
from services.items_service import ItemsService            # noqa: F401
from services.labels_service import LabelsService          # noqa: F401
from services.locations_service import LocationsService    # noqa: F401
from services.repository import SqlCatalogRepository       # noqa: F401
from services.sequence_service import (                    # noqa: F401
    highest_asset_id,
    next_asset_id,
    format_asset_id,
)
