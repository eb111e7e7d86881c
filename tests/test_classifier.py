from __future__ import annotations

import pytest

from service_desk.models import Priority, RecordKind
from service_desk.services.classifier import (
    PRIORITY_KEYWORDS,
    REVIEW_MARKER,
    classify_type,
    derive_priority,
)


@pytest.mark.parametrize(
    "description",
    [
        "Proszę o przegląd klimatyzacji",
        "PRZEGLĄD okresowy wagi",
        "Kolejny Przegląd, bardzo pilne",
    ],
)
def test_review_marker_in_any_case_gives_review(description: str) -> None:
    assert classify_type(description) == RecordKind.REVIEW


@pytest.mark.parametrize(
    "description",
    [
        "Nie działa krajalnica",
        "przeglad bez polskich znaków",
        "",
    ],
)
def test_missing_review_marker_gives_failure_report(description: str) -> None:
    assert classify_type(description) == RecordKind.FAILURE_REPORT


def test_critical_keyword_wins_over_high() -> None:
    assert derive_priority("To jest pilne, wręcz bardzo pilne") == Priority.CRITICAL
    assert derive_priority("BARDZO PILNE") == Priority.CRITICAL


def test_high_keyword() -> None:
    assert derive_priority("Awaria wagi, pilne!") == Priority.HIGH


def test_no_keyword_falls_back_to_normal() -> None:
    assert derive_priority("Drzwi chłodni skrzypią") == Priority.NORMAL
    assert derive_priority("") == Priority.NORMAL


def test_priority_table_is_ordered_with_fallback_last() -> None:
    priorities = [priority for priority, _ in PRIORITY_KEYWORDS]
    assert priorities == [Priority.CRITICAL, Priority.HIGH, Priority.NORMAL]
    assert PRIORITY_KEYWORDS[-1][1] == ""
    assert REVIEW_MARKER == "przegląd"


def test_fallback_comes_from_priority_table() -> None:
    fallback_priority, fallback_keyword = PRIORITY_KEYWORDS[-1]

    assert fallback_keyword == ""
    assert derive_priority("Nic szczególnego") == fallback_priority
