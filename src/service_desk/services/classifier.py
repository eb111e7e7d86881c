"""
Keyword classification of customer messages.

The record kind is decided by the review marker; failure report priority is
decided by the first matching keyword of an ordered table.
"""

from service_desk.models.enums import Priority, RecordKind

REVIEW_MARKER = "przegląd"

# Order matters: "bardzo pilne" also contains "pilne", so critical is checked
# first. The empty keyword marks the fallback priority.
PRIORITY_KEYWORDS: tuple[tuple[Priority, str], ...] = (
    (Priority.CRITICAL, "bardzo pilne"),
    (Priority.HIGH, "pilne"),
    (Priority.NORMAL, ""),
)


def classify_type(description: str) -> RecordKind:
    """Return REVIEW if the description mentions the review marker."""
    if REVIEW_MARKER in description.lower():
        return RecordKind.REVIEW
    return RecordKind.FAILURE_REPORT


def derive_priority(description: str) -> Priority:
    """Return the priority of the first keyword found in the description."""
    lowered = description.lower()
    for priority, keyword in PRIORITY_KEYWORDS:
        if not keyword or keyword.lower() in lowered:
            return priority
