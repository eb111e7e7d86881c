"""
Service layer for Service Desk.
"""

from service_desk.services.classifier import classify_type, derive_priority
from service_desk.services.duplicates import DuplicateDetector
from service_desk.services.message_pipeline import (
    Created,
    Duplicate,
    Error,
    MessagePipeline,
    Outcome,
    RawMessage,
)
from service_desk.services.normalizers import FieldNormalizer
from service_desk.services.report_service import ReportService
from service_desk.services.repository import MessageRepository

__all__ = [
    # Classification and normalization
    "classify_type",
    "derive_priority",
    "FieldNormalizer",
    # Pipeline
    "DuplicateDetector",
    "MessagePipeline",
    "RawMessage",
    "Outcome",
    "Created",
    "Duplicate",
    "Error",
    # Persistence and reporting
    "MessageRepository",
    "ReportService",
]
