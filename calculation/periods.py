# calculation/periods.py
"""
Splitting of an interest range into sub-ranges.

Reference rates are fixed per half-year (1 Jan - 30 Jun, 1 Jul - 31 Dec), and
the day-count denominator is fixed per calendar year, so a range is cut at
those boundaries before interest is accrued.
"""

from typing import Callable, List, Tuple

from calculation.dates import CalendarDate

DateRange = Tuple[CalendarDate, CalendarDate]


def _split(start: CalendarDate, end: CalendarDate,
           boundary: Callable[[CalendarDate], CalendarDate]) -> List[DateRange]:
    if end < start:
        raise ValueError(f"end date {end} is before start date {start}")

    ranges = []
    cursor = start
    while True:
        range_end = min(boundary(cursor), end)
        ranges.append((cursor, range_end))
        if range_end == end:
            break
        cursor = range_end.next_day()
    return ranges


def split_half_years(start: CalendarDate, end: CalendarDate) -> List[DateRange]:
    """
    Consecutive sub-ranges of [start, end], each inside one half-year.

    >>> split_half_years(CalendarDate(2023, 5, 1), CalendarDate(2023, 8, 31))
    [(CalendarDate(year=2023, month=5, day=1), CalendarDate(year=2023, month=6, day=30)), (CalendarDate(year=2023, month=7, day=1), CalendarDate(year=2023, month=8, day=31))]

    Raises:
        ValueError: If end is before start.
    """
    return _split(start, end, CalendarDate.half_year_end)


def split_calendar_years(start: CalendarDate, end: CalendarDate) -> List[DateRange]:
    """Consecutive sub-ranges of [start, end], each inside one calendar year."""
    return _split(start, end, CalendarDate.year_end)
