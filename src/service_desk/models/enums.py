"""
Enum definitions for the Service Desk system.

This module centralizes the record kinds, statuses and priorities so that
the classifier, the ORM models and the CLI agree on the stored values.
"""

import enum


class RecordKind(enum.Enum):
    """Kind of record a customer message is classified into."""

    REVIEW = "review"  # Scheduled or requested inspection visit
    FAILURE_REPORT = "failureReport"  # Equipment or service failure


class ReviewStatus(enum.Enum):
    """Status of a review record."""

    NEW = "new"  # No review date known yet
    SCHEDULED = "scheduled"  # Review date set


class FailureReportStatus(enum.Enum):
    """Status of a failure report record."""

    NEW = "new"  # No service visit date known yet
    DEADLINE = "deadline"  # Service visit date set


class Priority(enum.Enum):
    """Priority levels for failure reports."""

    CRITICAL = "critical"
    HIGH = "high"
    NORMAL = "normal"
