"""
Review and FailureReport models.

Both record types are created from imported customer messages. They share
the description, phone and timestamp columns, and differ in how the due
date is interpreted: a review date for reviews, a service visit deadline
for failure reports.
"""

from datetime import date, datetime
from typing import Optional, Union

from sqlalchemy import Date, DateTime, Enum, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from service_desk.models.base import Base
from service_desk.models.enums import (
    FailureReportStatus,
    Priority,
    RecordKind,
    ReviewStatus,
)


def _isoformat(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value else None


class Review(Base):
    """
    Inspection visit requested in a customer message.

    A review is scheduled as soon as its review date is known; the ISO week
    of that date is stored alongside it for planning.
    """

    __tablename__ = "review"

    kind = RecordKind.REVIEW

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), default=RecordKind.REVIEW.value)

    # =========================================================================
    # SCHEDULING
    # =========================================================================
    review_date: Mapped[Optional[date]] = mapped_column(Date)
    week_of_year: Mapped[Optional[int]] = mapped_column(SmallInteger)
    status: Mapped[ReviewStatus] = mapped_column(
        Enum(ReviewStatus), default=ReviewStatus.NEW, index=True
    )
    next_service_advice: Mapped[Optional[str]] = mapped_column(String(255))

    # =========================================================================
    # CONTACT
    # =========================================================================
    client_phone: Mapped[Optional[str]] = mapped_column(String(35))  # E.164

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        """Return a JSON-serializable view used by the result reports."""
        return {
            "id": self.id,
            "description": self.description,
            "type": RecordKind.REVIEW.value,
            "reviewDate": _isoformat(self.review_date),
            "weekOfYear": self.week_of_year,
            "status": self.status.value if self.status else None,
            "nextServiceAdvice": self.next_service_advice,
            "clientPhone": self.client_phone,
            "createdAt": _isoformat(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, status={self.status.value if self.status else None}, review_date={self.review_date})>"


class FailureReport(Base):
    """
    Equipment or service failure reported in a customer message.

    Every failure report carries a priority derived from its description.
    A known service visit date turns the report into a deadline.
    """

    __tablename__ = "failure_report"

    kind = RecordKind.FAILURE_REPORT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), default=RecordKind.FAILURE_REPORT.value)

    # =========================================================================
    # HANDLING
    # =========================================================================
    date_of_service_visit: Mapped[Optional[date]] = mapped_column(Date)
    priority: Mapped[Priority] = mapped_column(
        Enum(Priority), default=Priority.NORMAL, index=True
    )
    status: Mapped[FailureReportStatus] = mapped_column(
        Enum(FailureReportStatus), default=FailureReportStatus.NEW, index=True
    )
    service_comments: Mapped[Optional[str]] = mapped_column(String(255))

    # =========================================================================
    # CONTACT
    # =========================================================================
    client_phone: Mapped[Optional[str]] = mapped_column(String(35))  # E.164

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        """Return a JSON-serializable view used by the result reports."""
        return {
            "id": self.id,
            "description": self.description,
            "type": RecordKind.FAILURE_REPORT.value,
            "dateOfServiceVisit": _isoformat(self.date_of_service_visit),
            "priority": self.priority.value if self.priority else None,
            "status": self.status.value if self.status else None,
            "serviceComments": self.service_comments,
            "clientPhone": self.client_phone,
            "createdAt": _isoformat(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<FailureReport(id={self.id}, priority={self.priority.value if self.priority else None}, status={self.status.value if self.status else None})>"


Record = Union[Review, FailureReport]

MODEL_BY_KIND: dict[RecordKind, type] = {
    RecordKind.REVIEW: Review,
    RecordKind.FAILURE_REPORT: FailureReport,
}


def create_record(kind: RecordKind, description: str) -> Record:
    """Build an empty, unsaved record of the given kind."""
    return MODEL_BY_KIND[kind](description=description, type=kind.value)
