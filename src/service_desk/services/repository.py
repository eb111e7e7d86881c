"""
Message repository - persistence operations used by the import pipeline.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from service_desk.models import MODEL_BY_KIND, Record, RecordKind


class MessageRepository:
    """Service for storing and looking up reviews and failure reports."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, kind: RecordKind, description: str) -> bool:
        """Check if a record of this kind with exactly this description exists."""
        model = MODEL_BY_KIND[kind]
        return (
            self.session.query(model.id)
            .filter(model.description == description)
            .first()
            is not None
        )

    def save_all(self, records: Iterable[Record]) -> list[Record]:
        """Persist records with a single commit and return them with ids assigned."""
        records = list(records)
        if not records:
            return records

        self.session.add_all(records)
        self.session.commit()
        for record in records:
            self.session.refresh(record)
        return records

    def list(
        self,
        kind: RecordKind,
        limit: Optional[int] = None,
    ) -> list[Record]:
        """List stored records of a kind, oldest first."""
        model = MODEL_BY_KIND[kind]
        query = self.session.query(model).order_by(model.id.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def count_by_status(self, kind: RecordKind) -> dict[str, int]:
        """Get counts of records of a kind grouped by status."""
        model = MODEL_BY_KIND[kind]
        results = (
            self.session.query(model.status, func.count(model.id))
            .group_by(model.status)
            .all()
        )
        return {status.value: count for status, count in results}
