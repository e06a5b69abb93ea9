#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Calendar date tests
"""

import pytest
from datetime import date

from calculation.dates import (
    CalendarDate, parse_date, format_date, to_calendar_date,
    days_between_inclusive, days_in_year, days_in_month, is_leap_year
)


class TestLeapYears:

    @pytest.mark.parametrize("year, expected", [
        (2024, True), (2023, False), (2000, True), (1900, False), (2100, False), (1600, True)
    ])
    def test_is_leap_year(self, year, expected):
        assert is_leap_year(year) is expected
        assert days_in_year(year) == (366 if expected else 365)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2023, 4) == 30
        assert days_in_month(2023, 12) == 31


class TestCalendarDate:

    def test_ordering(self):
        assert CalendarDate(2023, 12, 31) < CalendarDate(2024, 1, 1)
        assert CalendarDate(2024, 1, 2) > CalendarDate(2024, 1, 1)
        assert CalendarDate(2024, 1, 1) == CalendarDate(2024, 1, 1)

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            CalendarDate(2023, 2, 29)
        with pytest.raises(ValueError):
            CalendarDate(2023, 13, 1)
        with pytest.raises(ValueError):
            CalendarDate(2023, 4, 31)
        with pytest.raises(TypeError):
            CalendarDate(2023, 1, "1")
        with pytest.raises(TypeError):
            CalendarDate(2023, True, 1)

    def test_next_day(self):
        assert CalendarDate(2023, 12, 31).next_day() == CalendarDate(2024, 1, 1)
        assert CalendarDate(2024, 2, 28).next_day() == CalendarDate(2024, 2, 29)
        assert CalendarDate(2023, 2, 28).next_day() == CalendarDate(2023, 3, 1)

    def test_half_year_end(self):
        assert CalendarDate(2023, 1, 1).half_year_end() == CalendarDate(2023, 6, 30)
        assert CalendarDate(2023, 6, 30).half_year_end() == CalendarDate(2023, 6, 30)
        assert CalendarDate(2023, 7, 1).half_year_end() == CalendarDate(2023, 12, 31)

    def test_date_conversion(self):
        value = CalendarDate(2024, 2, 29)
        assert value.to_date() == date(2024, 2, 29)
        assert CalendarDate.from_date(date(2024, 2, 29)) == value
        assert CalendarDate.from_ordinal(value.ordinal) == value
        assert value.is_leap_year

    def test_str(self):
        assert str(CalendarDate(2023, 1, 5)) == "05-01-2023"


class TestParseDate:

    def test_valid(self):
        assert parse_date("01-01-2023") == CalendarDate(2023, 1, 1)
        assert parse_date("29-02-2024") == CalendarDate(2024, 2, 29)
        assert parse_date("1-7-2023") == CalendarDate(2023, 7, 1)
        assert parse_date(" 31-12-2023 ") == CalendarDate(2023, 12, 31)

    @pytest.mark.parametrize("text", [
        "29-02-2023", "31-04-2023", "32-01-2023", "00-01-2023", "01-13-2023",
        "2023-01-01", "01/01/2023", "01-01-23", "", "abc", "01-01-2023x"
    ])
    def test_invalid(self, text):
        assert parse_date(text) is None

    def test_non_string(self):
        assert parse_date(None) is None
        assert parse_date(20230101) is None

    def test_format_round_trip(self):
        assert format_date(parse_date("5-3-2024")) == "05-03-2024"


class TestHelpers:

    def test_to_calendar_date(self):
        expected = CalendarDate(2023, 6, 30)
        assert to_calendar_date(expected) is expected
        assert to_calendar_date(date(2023, 6, 30)) == expected
        assert to_calendar_date("30-06-2023") == expected
        assert to_calendar_date("30-06-23") is None

    def test_days_between_inclusive(self):
        assert days_between_inclusive(CalendarDate(2023, 1, 1), CalendarDate(2023, 1, 1)) == 1
        assert days_between_inclusive(CalendarDate(2023, 1, 1), CalendarDate(2023, 6, 30)) == 181
        assert days_between_inclusive(CalendarDate(2024, 1, 1), CalendarDate(2024, 12, 31)) == 366

    def test_days_between_reversed(self):
        with pytest.raises(ValueError):
            days_between_inclusive(CalendarDate(2023, 1, 2), CalendarDate(2023, 1, 1))
