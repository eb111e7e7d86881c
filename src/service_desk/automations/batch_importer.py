"""
Batch import automation for customer messages.
Decodes a batch, runs every message through the pipeline and persists the
created records with a single commit.
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from sqlalchemy.orm import Session

from service_desk.config import get_settings
from service_desk.exceptions import BatchDecodeError
from service_desk.models import Record, RecordKind
from service_desk.services.duplicates import DuplicateDetector
from service_desk.services.message_pipeline import (
    Created,
    Duplicate,
    MessagePipeline,
    RawMessage,
)
from service_desk.services.repository import MessageRepository

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcomes of one import run, partitioned by category."""

    created: list[Record] = field(default_factory=list)
    duplicates: list[tuple[Optional[int], str]] = field(default_factory=list)
    errors: list[tuple[Optional[int], str]] = field(default_factory=list)
    duplicate_kinds: list[RecordKind] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of messages seen in the batch."""
        return len(self.created) + len(self.duplicates) + len(self.errors)

    def created_by_kind(self) -> dict[str, int]:
        """Count created records per record kind."""
        return dict(Counter(record.kind.value for record in self.created))

    def duplicates_by_kind(self) -> dict[str, int]:
        """Count duplicates per record kind."""
        return dict(Counter(kind.value for kind in self.duplicate_kinds))


def decode_batch(text: str) -> list[RawMessage]:
    """
    Decode a JSON batch into raw messages.

    The batch must be a JSON array of objects. Anything else rejects the whole
    batch before a single message is processed.

    Raises:
        BatchDecodeError: if the container is malformed
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise BatchDecodeError(f"Batch is not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise BatchDecodeError(
            f"Batch must be a JSON array, got {type(payload).__name__}"
        )

    messages = []
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            raise BatchDecodeError(
                f"Batch element {position} is not an object: {item!r}"
            )
        messages.append(RawMessage.from_dict(item))
    return messages


class BatchImporter:
    """
    Imports batches of customer messages.

    Flow:
    1. Decode the batch (JSON array of messages)
    2. For each message, in input order:
       a. Run it through the MessagePipeline
       b. Sort the outcome into created, duplicates or errors
    3. Save all created records with one commit
    """

    def __init__(
        self,
        session: Session,
        default_phone_region: Optional[str] = None,
    ):
        self.settings = get_settings()
        self.repository = MessageRepository(session)
        self.duplicate_detector = DuplicateDetector(self.repository)
        self.pipeline = MessagePipeline(
            self.duplicate_detector,
            default_phone_region=default_phone_region or self.settings.default_phone_region,
        )

    def import_batch(self, messages: Iterable[RawMessage]) -> BatchResult:
        """
        Process messages in order and persist the created records.

        A rejected message never stops the batch; it is recorded and the
        loop continues.

        Args:
            messages: Decoded raw messages

        Returns:
            BatchResult with created records (ids assigned), duplicates and errors
        """
        result = BatchResult()

        for message in messages:
            outcome = self.pipeline.process(message)
            if isinstance(outcome, Created):
                result.created.append(outcome.record)
            elif isinstance(outcome, Duplicate):
                result.duplicates.append((outcome.number, outcome.reason))
                result.duplicate_kinds.append(outcome.kind)
            else:
                result.errors.append((outcome.number, outcome.reason))

        self.repository.save_all(result.created)
        self.duplicate_detector.reset()

        logger.info(
            f"Imported {len(result.created)} message(s). "
            f"Duplicate(s): {len(result.duplicates)}. Error(s): {len(result.errors)}"
        )
        return result

    def import_json(self, text: str) -> BatchResult:
        """Decode a JSON batch and import it."""
        messages = decode_batch(text)
        logger.info(f"Started import of {len(messages)} message(s)")
        return self.import_batch(messages)

    def import_file(self, path: Union[str, Path]) -> BatchResult:
        """Read a UTF-8 JSON batch file and import it."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise BatchDecodeError(f"Cannot read batch file {path}: {e}") from e

        logger.info(f"Importing messages from {path}")
        return self.import_json(text)
