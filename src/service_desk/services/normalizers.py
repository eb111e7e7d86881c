"""
Field normalization for imported messages.

Dates are truncated to calendar days and phone numbers are converted to
E.164. Absent or blank values normalize to None and are never an error.
"""

import re
from datetime import date, datetime
from typing import Optional

import phonenumbers
from dateutil import parser as date_parser
from phonenumbers import NumberParseException

from service_desk.exceptions import InvalidDateError, InvalidPhoneError

# Numeric dates starting with the day: 02.03.2020, 02-03-2020. Slashes stay
# month-first: 03/02/2020.
DAY_FIRST_PATTERN = re.compile(r"^\d{1,2}[.-]\d{1,2}[.-]\d{2,4}\b")

# Two parses with different fallbacks agree only when the text names a
# year, a month and a day.
DATE_FALLBACKS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


class FieldNormalizer:
    """Normalize raw message fields to the stored representation."""

    @staticmethod
    def normalize_date(raw: Optional[str]) -> Optional[date]:
        """
        Parse a due date and drop any time of day.

        Handles:
        - 2020-03-02 -> 2020-03-02
        - 2020-03-02 14:30:00 -> 2020-03-02
        - March 2, 2020 -> 2020-03-02
        - 02.03.2020, 02-03-2020 -> 2020-03-02
        - 03/02/2020 -> 2020-03-02

        Raises:
            InvalidDateError: if the text is not a complete, valid calendar date
        """
        if raw is None or not str(raw).strip():
            return None

        text = str(raw).strip()
        dayfirst = bool(DAY_FIRST_PATTERN.match(text))
        try:
            parsed = {
                date_parser.parse(text, default=fallback, dayfirst=dayfirst).date()
                for fallback in DATE_FALLBACKS
            }
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(f"Cannot parse date {raw!r}: {e}") from e

        if len(parsed) > 1:
            raise InvalidDateError(f"Date {raw!r} is missing a year, month or day")
        return parsed.pop()

    @staticmethod
    def normalize_phone(raw: Optional[str], default_region: str) -> Optional[str]:
        """
        Parse a phone number and format it as E.164.

        Numbers without a country code are read in default_region:
        "888241636" with region "PL" -> "+48888241636"

        Raises:
            InvalidPhoneError: if the text is not a phone number
        """
        if raw is None or not str(raw).strip():
            return None

        try:
            parsed = phonenumbers.parse(str(raw).strip(), default_region)
        except NumberParseException as e:
            raise InvalidPhoneError(f"Cannot parse phone number {raw!r}: {e}") from e

        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
