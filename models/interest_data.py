#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Process interest result data models
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Any, Iterator, Tuple

from calculation.dates import CalendarDate, format_date, parse_date


def _date_from_text(text: str) -> CalendarDate:
    value = parse_date(text)
    if value is None:
        raise ValueError(f"invalid date: {text!r}")
    return value


@dataclass(frozen=True)
class Period:
    """One half-year line of an interest calculation.

    interest is unrounded; only the total of a calculation is rounded.
    """
    start_date: CalendarDate
    end_date: CalendarDate
    principal: Decimal
    reference_rate: Decimal
    surcharge_rate: Decimal
    total_rate: Decimal
    day_count: int
    interest: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_date': format_date(self.start_date),
            'end_date': format_date(self.end_date),
            'principal': str(self.principal),
            'reference_rate': str(self.reference_rate),
            'surcharge_rate': str(self.surcharge_rate),
            'total_rate': str(self.total_rate),
            'day_count': self.day_count,
            'interest': str(self.interest)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Period':
        return cls(
            start_date=_date_from_text(data['start_date']),
            end_date=_date_from_text(data['end_date']),
            principal=Decimal(data['principal']),
            reference_rate=Decimal(data['reference_rate']),
            surcharge_rate=Decimal(data['surcharge_rate']),
            total_rate=Decimal(data['total_rate']),
            day_count=int(data['day_count']),
            interest=Decimal(data['interest'])
        )


@dataclass(frozen=True)
class AccrualResult:
    """Complete result of a process interest calculation"""
    principal: Decimal
    start_date: CalendarDate
    end_date: CalendarDate
    surcharge_rate: Decimal
    periods: Tuple[Period, ...] = field(default_factory=tuple)
    total_interest: Decimal = field(default_factory=lambda: Decimal('0.00'))

    @property
    def unrounded_interest(self) -> Decimal:
        """Sum of the period interest before rounding"""
        return sum((period.interest for period in self.periods), Decimal('0'))

    @property
    def total_days(self) -> int:
        return sum(period.day_count for period in self.periods)

    @property
    def is_empty(self) -> bool:
        return not self.periods

    def __iter__(self) -> Iterator[Period]:
        return iter(self.periods)

    def __len__(self) -> int:
        return len(self.periods)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'principal': str(self.principal),
            'start_date': format_date(self.start_date),
            'end_date': format_date(self.end_date),
            'surcharge_rate': str(self.surcharge_rate),
            'total_interest': str(self.total_interest),
            'total_days': self.total_days,
            'periods': [period.to_dict() for period in self.periods]
        }
