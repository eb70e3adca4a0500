"""
Date normalization with century inference.

MRZ dates are six digits (YYMMDD). The century is resolved against a
reference date supplied by the caller, never against the wall clock.
"""

from __future__ import annotations

import logging
from calendar import isleap
from datetime import date
from enum import Enum
from typing import ClassVar

from mrz_engine.exceptions import InvalidCalendarDate, InvalidDateDigits
from mrz_engine.models.mrz_validation import MRZPosition

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_WINDOW_YEARS = 50


class DateKind(str, Enum):
    """Context used for century resolution."""

    BIRTH = "birth_date"
    EXPIRY = "expiry_date"


class MRZDateNormalizer:
    """Converts YYMMDD strings into calendar dates."""

    # Days in each month (non-leap year)
    DAYS_IN_MONTH: ClassVar[tuple[int, ...]] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

    @classmethod
    def normalize_date(
        cls,
        value: str,
        reference: date,
        kind: DateKind = DateKind.BIRTH,
        expiry_window_years: int = DEFAULT_EXPIRY_WINDOW_YEARS,
        position: MRZPosition | None = None,
    ) -> date:
        """
        Normalize a YYMMDD date string.

        Args:
            value: Date string in YYMMDD format
            reference: Date the century is resolved against ("today")
            kind: Birth dates resolve to the past, expiry dates lean forward
            expiry_window_years: Half-width of the expiry resolution window
            position: Position of the field, reported on errors

        Returns:
            The calendar date

        Raises:
            InvalidDateDigits: If the value is not six ASCII digits
            InvalidCalendarDate: If month or day do not exist
        """
        field_name = DateKind(kind).value
        if len(value) != 6 or not all("0" <= char <= "9" for char in value):
            raise InvalidDateDigits(value, field_name, position)

        year_2digit = int(value[:2])
        month = int(value[2:4])
        day = int(value[4:6])

        if month < 1 or month > 12:
            raise InvalidCalendarDate(value, f"month {month} must be 01-12", field_name, position)

        if kind == DateKind.BIRTH:
            full_year = cls.resolve_birth_year(year_2digit, reference)
        else:
            full_year = cls.resolve_expiry_year(year_2digit, reference, expiry_window_years)

        max_day = cls.max_day(month, full_year)
        if day < 1 or day > max_day:
            raise InvalidCalendarDate(
                value, f"day {day} not in 1-{max_day} for {full_year}-{month:02d}", field_name, position
            )

        return date(full_year, month, day)

    @staticmethod
    def resolve_birth_year(year_2digit: int, reference: date) -> int:
        """Most recent year ending in ``year_2digit`` that is not after the reference year."""
        century = (reference.year // 100) * 100
        if year_2digit > reference.year % 100:
            return century - 100 + year_2digit
        return century + year_2digit

    @staticmethod
    def resolve_expiry_year(year_2digit: int, reference: date, window_years: int) -> int:
        """
        Year ending in ``year_2digit`` inside a window around the reference year.

        The current-century candidate moves to the next century when it is more
        than ``window_years`` in the past, and to the previous century when it
        is ``window_years`` or more in the future.
        """
        full_year = (reference.year // 100) * 100 + year_2digit
        if full_year < reference.year - window_years:
            full_year += 100
            logger.debug("Expiry year %02d resolved to next century: %d", year_2digit, full_year)
        elif full_year >= reference.year + window_years:
            full_year -= 100
            logger.debug("Expiry year %02d resolved to previous century: %d", year_2digit, full_year)
        return full_year

    @classmethod
    def max_day(cls, month: int, year: int) -> int:
        """Get maximum day for a given month and year."""
        if month == 2 and isleap(year):
            return 29
        return cls.DAYS_IN_MONTH[month - 1]


def normalize_date(
    value: str,
    reference: date,
    kind: DateKind = DateKind.BIRTH,
    expiry_window_years: int = DEFAULT_EXPIRY_WINDOW_YEARS,
    position: MRZPosition | None = None,
) -> date:
    return MRZDateNormalizer.normalize_date(value, reference, kind, expiry_window_years, position)
