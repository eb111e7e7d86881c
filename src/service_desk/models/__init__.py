"""
Database models for Service Desk.

This module exports all models, enums, and database utilities.
"""

from service_desk.models.base import Base, engine, init_db, reset_db, session_scope

# Enums
from service_desk.models.enums import (
    FailureReportStatus,
    Priority,
    RecordKind,
    ReviewStatus,
)

# Message models
from service_desk.models.message import (
    MODEL_BY_KIND,
    FailureReport,
    Record,
    Review,
    create_record,
)

__all__ = [
    # Base and utilities
    "Base",
    "engine",
    "init_db",
    "reset_db",
    "session_scope",
    # Enums
    "FailureReportStatus",
    "Priority",
    "RecordKind",
    "ReviewStatus",
    # Message models
    "MODEL_BY_KIND",
    "FailureReport",
    "Record",
    "Review",
    "create_record",
]
