#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Calendar dates in the Danish DD-MM-YYYY convention.

CalendarDate is an immutable (year, month, day) value. Ordering and equality
are plain tuple comparisons, and day counts go through the proleptic
Gregorian ordinal, so no time zone or daylight saving time is involved.
"""

import re
from dataclasses import dataclass
from datetime import date, MINYEAR, MAXYEAR
from typing import Optional, Union

DATE_PATTERN = re.compile(r'^(\d{1,2})-(\d{1,2})-(\d{4})$', re.ASCII)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4 and not by 100, unless divisible by 400."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A single calendar day, validated on construction."""

    year: int
    month: int
    day: int

    def __post_init__(self):
        for name in ('year', 'month', 'day'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
        if not MINYEAR <= self.year <= MAXYEAR:
            raise ValueError(f"year {self.year} is out of range")
        if not 1 <= self.month <= 12:
            raise ValueError(f"month {self.month} is out of range")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ValueError(f"day {self.day} is out of range for {self.month:02d}-{self.year:04d}")

    @classmethod
    def from_date(cls, value: date) -> 'CalendarDate':
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> 'CalendarDate':
        return cls.from_date(date.fromordinal(ordinal))

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def ordinal(self) -> int:
        """Day number counted from 01-01-0001 (day 1)."""
        return self.to_date().toordinal()

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    def next_day(self) -> 'CalendarDate':
        return CalendarDate.from_ordinal(self.ordinal + 1)

    def half_year_end(self) -> 'CalendarDate':
        """30 June or 31 December of this date's half-year."""
        if self.month <= 6:
            return CalendarDate(self.year, 6, 30)
        return CalendarDate(self.year, 12, 31)

    def year_end(self) -> 'CalendarDate':
        return CalendarDate(self.year, 12, 31)

    def __str__(self) -> str:
        return format_date(self)


DateLike = Union[CalendarDate, date, str]


def parse_date(text) -> Optional[CalendarDate]:
    """
    Parse a DD-MM-YYYY date.

    Day and month may be one or two digits; the year must have four. Returns
    None for anything malformed, including days that do not exist in the
    given month (31-04-2023, 29-02-2023).
    """
    if not isinstance(text, str):
        return None

    match = DATE_PATTERN.match(text.strip())
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    try:
        return CalendarDate(year, month, day)
    except ValueError:
        return None


def format_date(value: CalendarDate) -> str:
    """Render as zero-padded DD-MM-YYYY."""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def to_calendar_date(value: DateLike) -> Optional[CalendarDate]:
    """Accept a CalendarDate, a datetime.date or DD-MM-YYYY text."""
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    return parse_date(value)


def days_between_inclusive(start: CalendarDate, end: CalendarDate) -> int:
    """
    Number of days from start to end, counting both.

    days_between_inclusive(d, d) == 1.

    Raises:
        ValueError: If end is before start.
    """
    if end < start:
        raise ValueError(f"end date {end} is before start date {start}")
    return end.ordinal - start.ordinal + 1
