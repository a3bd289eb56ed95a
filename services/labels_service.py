"""
services.labels_service - Label reads and creation.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import Label


class LabelsService:

    @staticmethod
    def get_all(session: Session, group_id: str) -> list[Label]:
        return (
            session.query(Label)
            .filter(Label.group_id == group_id)
            .order_by(Label.name)
            .all()
        )

    @staticmethod
    def get_many(session: Session, group_id: str, label_ids) -> list[Label]:
        """Fetch labels by id; unknown or foreign ids are dropped."""
        ids = set(label_ids)
        if not ids:
            return []
        return (
            session.query(Label)
            .filter(Label.group_id == group_id, Label.id.in_(ids))
            .all()
        )

    @staticmethod
    def create(session: Session, group_id: str, name: str) -> Label:
        name = name.strip()
        if not name:
            raise ValueError("label name is empty")

        label = Label(group_id=group_id, name=name)
        session.add(label)
        session.flush()
        return label
