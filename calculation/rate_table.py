#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reference and surcharge rate tables.

The reference rate is Danmarks Nationalbank's lending rate, fixed for each
half-year (1 January and 1 July). The source data is kept newest first, the
way it is published and extended; RateTable always orders its entries
ascending and resolves a date to the latest entry not after it.
"""

import json
import logging
from bisect import bisect_right
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union, Mapping, Any

from calculation.dates import CalendarDate, parse_date
from utils.error_handler import RateCoverageError, ConfigurationError

logger = logging.getLogger(__name__)

# (effective date, rate), newest first
REFERENCE_RATE_SOURCE: Tuple[Tuple[str, str], ...] = (
    ('01-07-2025', '1,75 %'),
    ('01-01-2025', '2,75 %'),
    ('01-07-2024', '3,50 %'),
    ('01-01-2024', '3,75 %'),
    ('01-07-2023', '3,25 %'),
    ('01-01-2023', '1,90 %'),
    ('01-07-2022', '-0,45 %'),
    ('01-01-2022', '-0,45 %'),
    ('01-07-2021', '-0,35 %'),
    ('01-01-2021', '0,05 %'),
    ('01-07-2020', '0,05 %'),
    ('01-01-2020', '0,05 %'),
    ('01-07-2019', '0,05 %'),
    ('01-01-2019', '0,05 %'),
    ('01-07-2018', '0,05 %'),
    ('01-01-2018', '0,05 %'),
    ('01-07-2017', '0,05 %'),
    ('01-01-2017', '0,05 %'),
    ('01-07-2016', '0,05 %'),
    ('01-01-2016', '0,05 %'),
    ('01-07-2015', '0,05 %'),
    ('01-01-2015', '0,20 %'),
    ('01-07-2014', '0,20 %'),
    ('01-01-2014', '0,20 %'),
    ('01-07-2013', '0,20 %'),
    ('01-01-2013', '0,20 %'),
    ('01-07-2012', '0,45 %'),
    ('01-01-2012', '0,70 %'),
    ('01-07-2011', '1,30 %'),
    ('01-01-2011', '1,05 %'),
    ('01-07-2010', '1,05 %'),
    ('01-01-2010', '1,20 %'),
    ('01-07-2009', '1,55 %'),
    ('01-01-2009', '3,75 %'),
    ('01-07-2008', '4,35 %'),
    ('01-01-2008', '4,25 %'),
    ('01-07-2007', '4,25 %'),
    ('01-01-2007', '3,75 %'),
    ('01-07-2006', '3,00 %'),
    ('01-01-2006', '2,40 %'),
    ('01-07-2005', '2,15 %'),
    ('01-01-2005', '2,15 %'),
)

# Surcharge under the Interest Act, newest first
SURCHARGE_RATE_SOURCE: Tuple[Tuple[str, str], ...] = (
    ('01-03-2013', '8,00 %'),
    ('01-08-2002', '7,00 %'),
)


def parse_rate(text: Union[str, int, float, Decimal]) -> Decimal:
    """
    Convert a published rate such as "2,75 %" or "−0,45 %" to Decimal('2.75').

    Both the hyphen and the Unicode minus sign are accepted for negative rates.

    Raises:
        ValueError: If the text is not a rate.
    """
    if isinstance(text, bool):
        raise ValueError(f"invalid rate: {text!r}")
    if isinstance(text, (int, Decimal)):
        return Decimal(text)
    if isinstance(text, float):
        return Decimal(str(text))

    cleaned = ''.join(str(text).split()).replace('%', '').replace(',', '.').replace('−', '-')
    try:
        rate = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"invalid rate: {text!r}") from None
    if not rate.is_finite():
        raise ValueError(f"invalid rate: {text!r}")
    return rate


@dataclass(frozen=True)
class RateEntry:
    """A rate that takes effect on effective_date and holds until the next entry."""
    effective_date: CalendarDate
    rate: Decimal


class RateTable:
    """Immutable, chronologically ordered list of rate entries."""

    def __init__(self, entries: Iterable[RateEntry]):
        ordered = sorted(entries, key=lambda entry: entry.effective_date)
        if not ordered:
            raise ValueError("a rate table needs at least one entry")

        for previous, current in zip(ordered, ordered[1:]):
            if previous.effective_date == current.effective_date:
                raise ValueError(f"duplicate rate entry for {current.effective_date}")

        self._entries: Tuple[RateEntry, ...] = tuple(ordered)
        self._dates: Tuple[CalendarDate, ...] = tuple(entry.effective_date for entry in ordered)

    @classmethod
    def from_records(cls, records: Iterable[Union[Tuple[str, Any], Mapping[str, Any]]]) -> 'RateTable':
        """
        Build a table from (date text, rate) pairs or from mappings with
        'effective_date' and 'rate' keys. Order does not matter.

        Raises:
            ValueError: If a date or a rate cannot be parsed.
        """
        entries = []
        for record in records:
            if isinstance(record, dict):
                date_text, rate_text = record.get('effective_date'), record.get('rate')
            else:
                date_text, rate_text = record

            effective_date = parse_date(date_text)
            if effective_date is None:
                raise ValueError(f"invalid effective date: {date_text!r}")
            entries.append(RateEntry(effective_date, parse_rate(rate_text)))
        return cls(entries)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'RateTable':
        """
        Load a table from a JSON list of {"effective_date": "DD-MM-YYYY", "rate": "1,75 %"}.

        Raises:
            ConfigurationError: If the file is missing or malformed.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
            if not isinstance(records, list):
                raise ValueError("top-level JSON value must be a list")
            table = cls.from_records(records)
        except FileNotFoundError:
            raise ConfigurationError(
                f"Rate table file not found: {path}",
                user_message="The configured reference rate file does not exist.",
                context={"path": str(path)}
            ) from None
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Rate table file {path} is invalid: {e}",
                user_message="The configured reference rate file could not be read.",
                context={"path": str(path)}
            ) from e

        logger.info(f"Loaded {len(table)} rate entries from {path}")
        return table

    @property
    def entries(self) -> Tuple[RateEntry, ...]:
        """Entries, oldest first."""
        return self._entries

    @property
    def first_date(self) -> CalendarDate:
        return self._dates[0]

    @property
    def last_date(self) -> CalendarDate:
        return self._dates[-1]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RateEntry]:
        return iter(self._entries)

    def entry_on(self, query_date: CalendarDate) -> RateEntry:
        """
        The entry in force on query_date: the latest one not after it.

        Raises:
            RateCoverageError: If query_date precedes every entry.
        """
        index = bisect_right(self._dates, query_date) - 1
        if index < 0:
            raise RateCoverageError(query_date, self.first_date)
        return self._entries[index]

    def rate_on(self, query_date: CalendarDate) -> Decimal:
        return self.entry_on(query_date).rate

    def covered_until(self) -> CalendarDate:
        """End of the half-year opened by the newest entry.

        Rates for dates after this are extrapolated from the newest entry.
        """
        return self.last_date.half_year_end()


DEFAULT_REFERENCE_RATES = RateTable.from_records(REFERENCE_RATE_SOURCE)
DEFAULT_SURCHARGE_RATES = RateTable.from_records(SURCHARGE_RATE_SOURCE)
