from __future__ import annotations

import json

import pytest

from service_desk.automations.batch_importer import BatchImporter, decode_batch
from service_desk.exceptions import BatchDecodeError
from service_desk.models import FailureReport, Priority, RecordKind, Review
from service_desk.services.repository import MessageRepository


def test_decode_batch_reads_messages_in_order(review_message: dict, failure_report_message: dict) -> None:
    messages = decode_batch(json.dumps([review_message, failure_report_message]))

    assert [message.number for message in messages] == [17, 15]
    assert messages[0].due_date == "2020-03-02 00:00:00"
    assert messages[1].phone == "888241636"


@pytest.mark.parametrize(
    "text",
    [
        "[{\"number\": 1, \"description\": ",
        "{\"number\": 1, \"description\": \"Nie działa piec\"}",
        "[{\"number\": 1, \"description\": \"Nie działa piec\"}, 42]",
        "",
    ],
)
def test_malformed_batch_raises(text: str) -> None:
    with pytest.raises(BatchDecodeError):
        decode_batch(text)


def test_malformed_batch_creates_nothing(session) -> None:
    importer = BatchImporter(session)

    with pytest.raises(BatchDecodeError):
        importer.import_json("[{\"number\": 1, \"description\": \"Nie działa piec\"},")

    assert session.query(Review).count() == 0
    assert session.query(FailureReport).count() == 0


def test_import_partitions_outcomes(session, review_message: dict, failure_report_message: dict) -> None:
    batch = [
        review_message,
        {"number": 3, "description": ""},
        failure_report_message,
        {"number": 16, "description": "Awaria chłodni", "phone": "not a phone"},
    ]

    result = BatchImporter(session).import_json(json.dumps(batch))

    assert len(result.created) == 2
    assert result.duplicates == []
    assert result.errors == [(3, "empty description"), (16, "invalid phone")]
    assert result.total == 4
    assert result.created_by_kind() == {"review": 1, "failureReport": 1}


def test_created_records_are_persisted(session, review_message: dict, failure_report_message: dict) -> None:
    result = BatchImporter(session).import_json(json.dumps([review_message, failure_report_message]))

    assert all(record.id is not None for record in result.created)
    assert all(record.created_at is not None for record in result.created)

    review = session.query(Review).one()
    assert review.week_of_year == 10
    report = session.query(FailureReport).one()
    assert report.priority == Priority.CRITICAL
    assert report.client_phone == "+48888241636"


def test_repeated_description_in_one_batch(session) -> None:
    batch = [
        {"number": 1, "description": "Nie działa piec"},
        {"number": 2, "description": "Nie działa piec"},
    ]

    result = BatchImporter(session).import_json(json.dumps(batch))

    assert len(result.created) == 1
    assert result.duplicates == [(2, "already exists")]
    assert session.query(FailureReport).count() == 1


def test_second_import_yields_only_duplicates(session, review_message: dict, failure_report_message: dict) -> None:
    text = json.dumps([review_message, failure_report_message])

    first = BatchImporter(session).import_json(text)
    second = BatchImporter(session).import_json(text)

    assert len(first.created) == 2
    assert second.created == []
    assert second.duplicates == [(17, "already exists"), (15, "already exists")]
    assert session.query(Review).count() == 1
    assert session.query(FailureReport).count() == 1


def test_import_file(session, tmp_path, failure_report_message: dict) -> None:
    path = tmp_path / "messages.json"
    path.write_text(json.dumps([failure_report_message], ensure_ascii=False), encoding="utf-8")

    result = BatchImporter(session).import_file(path)

    assert len(result.created) == 1


def test_missing_file_raises(session, tmp_path) -> None:
    with pytest.raises(BatchDecodeError):
        BatchImporter(session).import_file(tmp_path / "missing.json")


def test_default_phone_region_can_be_overridden(session) -> None:
    batch = [{"number": 1, "description": "Nie działa piec", "phone": "030 123456"}]

    result = BatchImporter(session, default_phone_region="DE").import_json(json.dumps(batch))

    assert result.created[0].client_phone == "+4930123456"


def test_repository_counts_by_status(session) -> None:
    batch = [
        {"number": 1, "description": "Przegląd wagi", "dueDate": "2024-05-06"},
        {"number": 2, "description": "Przegląd kasy"},
        {"number": 3, "description": "Nie działa piec", "dueDate": "2024-05-06"},
    ]
    BatchImporter(session).import_json(json.dumps(batch))

    repository = MessageRepository(session)
    assert repository.count_by_status(RecordKind.REVIEW) == {"scheduled": 1, "new": 1}
    assert repository.count_by_status(RecordKind.FAILURE_REPORT) == {"deadline": 1}
    assert [review.description for review in repository.list(RecordKind.REVIEW)] == [
        "Przegląd wagi",
        "Przegląd kasy",
    ]


def test_duplicates_are_counted_per_kind(session) -> None:
    batch = [
        {"number": 1, "description": "Przegląd wagi"},
        {"number": 2, "description": "Przegląd wagi"},
        {"number": 3, "description": "Nie działa piec"},
        {"number": 4, "description": "Nie działa piec"},
        {"number": 5, "description": "Nie działa piec"},
    ]

    result = BatchImporter(session).import_json(json.dumps(batch))

    assert result.duplicates_by_kind() == {"review": 1, "failureReport": 2}
