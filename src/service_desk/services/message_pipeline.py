"""
Message pipeline - turns one raw customer message into a record or a rejection.

The pipeline enforces a strict order:
1) Reject messages without a description
2) Classify the message as a review or a failure report
3) Reject duplicates of already known descriptions
4) Normalize the due date into kind-specific fields
5) Normalize the phone number
6) Return the unsaved record

Nothing is persisted here; the batch importer saves created records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

from service_desk.exceptions import EmptyDescriptionError, MessageImportError
from service_desk.models import (
    FailureReport,
    FailureReportStatus,
    Record,
    RecordKind,
    Review,
    ReviewStatus,
    create_record,
)
from service_desk.services.classifier import classify_type, derive_priority
from service_desk.services.duplicates import DuplicateDetector
from service_desk.services.normalizers import FieldNormalizer

logger = logging.getLogger(__name__)

DUPLICATE_REASON = "already exists"


# =============================================================================
# INPUT AND OUTCOMES
# =============================================================================


@dataclass(frozen=True)
class RawMessage:
    """A customer message as received in an import batch."""

    number: Optional[int]
    description: str
    due_date: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawMessage":
        """Build a message from a decoded JSON object; unknown keys are ignored."""
        description = data.get("description")
        return cls(
            number=data.get("number"),
            description="" if description is None else str(description),
            due_date=data.get("dueDate"),
            phone=data.get("phone"),
        )


@dataclass
class Created:
    """The message produced a new, not yet persisted record."""

    number: Optional[int]
    record: Record


@dataclass(frozen=True)
class Duplicate:
    """The message repeats a description already stored for its kind."""

    number: Optional[int]
    reason: str
    kind: RecordKind


@dataclass(frozen=True)
class Error:
    """The message could not be turned into a record."""

    number: Optional[int]
    reason: str


Outcome = Union[Created, Duplicate, Error]


# =============================================================================
# PIPELINE
# =============================================================================


class MessagePipeline:
    """Classifies, deduplicates and normalizes single messages."""

    def __init__(
        self,
        duplicate_detector: DuplicateDetector,
        default_phone_region: str = "PL",
    ):
        self.duplicate_detector = duplicate_detector
        self.default_phone_region = default_phone_region

    def process(self, raw: RawMessage) -> Outcome:
        """Run one message through the pipeline and return its outcome."""
        try:
            return self._process(raw)
        except MessageImportError as e:
            logger.error(f"Message {raw.number} rejected: {e}")
            return Error(raw.number, e.reason)

    def _process(self, raw: RawMessage) -> Outcome:
        if not raw.description:
            raise EmptyDescriptionError(f"Message {raw.number} has an empty description")

        kind = classify_type(raw.description)

        if self.duplicate_detector.is_duplicate(kind, raw.description):
            logger.warning(
                f"Found duplicated message number {raw.number} by description ({kind.value})"
            )
            return Duplicate(raw.number, DUPLICATE_REASON, kind)

        record = create_record(kind, raw.description)
        due_date = FieldNormalizer.normalize_date(raw.due_date)

        if kind == RecordKind.REVIEW:
            self._apply_review_fields(record, due_date)
        else:
            self._apply_failure_report_fields(record, due_date)

        if raw.phone:
            record.client_phone = FieldNormalizer.normalize_phone(
                raw.phone, self.default_phone_region
            )

        self.duplicate_detector.remember(kind, raw.description)
        logger.debug(f"Message {raw.number} classified as {kind.value}")
        return Created(raw.number, record)

    @staticmethod
    def _apply_review_fields(review: Review, due_date: Optional[date]) -> None:
        """A review with a known date is scheduled for that date's ISO week."""
        if due_date:
            review.review_date = due_date
            review.week_of_year = due_date.isocalendar()[1]
            review.status = ReviewStatus.SCHEDULED
        else:
            review.status = ReviewStatus.NEW

    @staticmethod
    def _apply_failure_report_fields(
        report: FailureReport, due_date: Optional[date]
    ) -> None:
        """A failure report with a known visit date becomes a deadline."""
        if due_date:
            report.date_of_service_visit = due_date
            report.status = FailureReportStatus.DEADLINE
        else:
            report.status = FailureReportStatus.NEW
        report.priority = derive_priority(report.description)

