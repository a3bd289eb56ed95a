"""
services.locations_service - Location tree queries and creation.

Trees are returned as plain nested dicts:
    {"id", "name", "parent_id", "children": [...]}
so they serialise straight to JSON and the import engine does not
depend on ORM objects.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import Location


class LocationsService:

    @staticmethod
    def tree(session: Session, group_id: str) -> list[dict]:
        """
        Return the group's location forest, roots first, children
        sorted by name.  One query; the tree is assembled in memory.
        """
        rows = (
            session.query(Location)
            .filter(Location.group_id == group_id)
            .order_by(Location.name)
            .all()
        )

        nodes = {
            loc.id: {"id": loc.id, "name": loc.name,
                     "parent_id": loc.parent_id, "children": []}
            for loc in rows
        }

        roots: list[dict] = []
        for loc in rows:
            node = nodes[loc.id]
            parent = nodes.get(loc.parent_id) if loc.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent["children"].append(node)
        return roots

    @staticmethod
    def get(session: Session, group_id: str, location_id: str) -> Location | None:
        loc = session.get(Location, location_id)
        if loc is None or loc.group_id != group_id:
            return None
        return loc

    @staticmethod
    def create(
        session: Session,
        group_id: str,
        name: str,
        parent_id: str | None = None,
        description: str = "",
    ) -> Location:
        """Create a location.  *parent_id* must belong to the same group."""
        name = name.strip()
        if not name:
            raise ValueError("location name is empty")

        if parent_id and LocationsService.get(session, group_id, parent_id) is None:
            raise ValueError(f"parent location {parent_id} not found")

        loc = Location(group_id=group_id, name=name,
                       parent_id=parent_id or None, description=description)
        session.add(loc)
        session.flush()
        return loc
