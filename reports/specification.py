#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interest specification

Turns a calculation result into the rows and texts of a printable
specification: one line per half-year period, the total, the calculation
principles and, when the range runs past the published rates, a notice that
the rest of the calculation is hypothetical.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from calculation.dates import DateLike, format_date
from calculation.formatting import format_amount, format_currency, format_percent
from calculation.interest import AmountInput, ProcessInterestCalculator
from calculation.rate_table import RateTable, DEFAULT_REFERENCE_RATES
from calculation.rates import SURCHARGE_CUTOVER_DATE
from models.interest_data import AccrualResult, Period

logger = logging.getLogger(__name__)

COLUMN_HEADERS = ('Periode', 'Rentedage', 'Rentesats', 'Beregnet rente')
TOTAL_LABEL = 'Samlet rentebeløb'


@dataclass
class SpecificationRow:
    """One table line"""
    period_text: str
    day_count: int
    rate_text: str
    interest_text: str
    period: Period


@dataclass
class InterestSpecification:
    """Report content for one process interest calculation"""
    title: str
    principal_line: str
    period_line: str
    rows: List[SpecificationRow] = field(default_factory=list)
    total_interest: Decimal = field(default_factory=lambda: Decimal('0.00'))
    total_text: str = ''
    hypothetical_notice: Optional[str] = None
    principles: List[str] = field(default_factory=list)
    filename: str = ''

    @property
    def is_hypothetical(self) -> bool:
        return self.hypothetical_notice is not None

    def table(self) -> List[List[str]]:
        """Header, period lines and total as plain text cells"""
        lines = [list(COLUMN_HEADERS)]
        for row in self.rows:
            lines.append([row.period_text, str(row.day_count), row.rate_text, row.interest_text])
        lines.append([TOTAL_LABEL, '', '', self.total_text])
        return lines


def calculation_principles(result: AccrualResult) -> List[str]:
    if result.start_date < SURCHARGE_CUTOVER_DATE:
        due_text = 'før 1. marts 2013'
    else:
        due_text = 'fra 1. marts 2013'
    surcharge_text = f"{result.surcharge_rate.normalize():f} %".replace('.', ',')

    return [
        'Beregning sker på baggrund af 365 årlige rentedage (366 i skudår).',
        f'Forfaldsdato er {due_text}. Rentesats udgør derfor nationalbankens udlånsrente tillagt {surcharge_text}.',
        'Der beregnes ikke renters rente.',
    ]


def build_specification(result: AccrualResult, rate_table: Optional[RateTable] = None,
                        title: str = 'Procesrente',
                        warn_on_hypothetical_rates: bool = True) -> InterestSpecification:
    """Build the specification for a computed result."""
    rate_table = rate_table or DEFAULT_REFERENCE_RATES

    rows = [
        SpecificationRow(
            period_text=f"{format_date(period.start_date)} - {format_date(period.end_date)}",
            day_count=period.day_count,
            rate_text=format_percent(period.total_rate),
            interest_text=format_currency(period.interest),
            period=period
        )
        for period in result.periods
    ]

    notice = None
    covered_until = rate_table.covered_until()
    if warn_on_hypothetical_rates and result.end_date > covered_until:
        notice = (f"Der er kun fastsat procesrente frem til {format_date(covered_until)}. "
                  f"Beregning derefter er hypotetisk!")
        logger.info(f"Calculation runs past {covered_until}, marking it hypothetical")

    start_text = format_date(result.start_date)
    end_text = format_date(result.end_date)

    return InterestSpecification(
        title=title,
        principal_line=f"Hovedstol: {format_currency(result.principal)}",
        period_line=f"Periode: {start_text} - {end_text} (begge dage inkl.)",
        rows=rows,
        total_interest=result.total_interest,
        total_text=format_currency(result.total_interest),
        hypothetical_notice=notice,
        principles=calculation_principles(result),
        filename=f"{title} af {format_amount(result.principal)} kr. - {start_text} til {end_text}"
    )


def create_specification(amount: AmountInput, start_date: DateLike, end_date: DateLike,
                         calculator: Optional[ProcessInterestCalculator] = None,
                         **kwargs) -> Optional[InterestSpecification]:
    """Calculate and build the specification; None for invalid input."""
    calculator = calculator or ProcessInterestCalculator()
    result = calculator.calculate_accrual(amount, start_date, end_date)
    if result is None:
        return None
    return build_specification(result, calculator.reference_rates, **kwargs)
