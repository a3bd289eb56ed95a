"""
services.groups_service - Group (tenant scope) lookup.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import Group


class GroupsService:

    @staticmethod
    def get_by_name(session: Session, name: str) -> Group | None:
        return session.query(Group).filter(Group.name == name).one_or_none()

    @staticmethod
    def get_or_create(session: Session, name: str) -> Group:
        """Return the group called *name*, creating it on first use."""
        name = name.strip()
        if not name:
            raise ValueError("group name is empty")

        group = GroupsService.get_by_name(session, name)
        if group is None:
            group = Group(name=name)
            session.add(group)
            session.flush()
        return group
