# calculation/interest.py
"""
Process interest (procesrente) accrual.

Simple interest on a principal from the interest start date to the
calculation date, both inclusive. The range is cut into half-years; each
half-year uses the reference rate in force at its start plus the surcharge
fixed by the interest start date. Within a half-year, interest accrues per
calendar year as principal * rate/100 * days / days_in_year, so leap years
use 366 as denominator. No interest is charged on interest.

The per-period amounts are summed unrounded and the total is rounded once.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP, ROUND_HALF_EVEN, localcontext
from typing import List, Optional, Tuple, Union

from calculation.dates import CalendarDate, DateLike, days_between_inclusive, days_in_year, to_calendar_date
from calculation.formatting import parse_amount
from calculation.periods import split_calendar_years, split_half_years
from calculation.rate_table import RateTable
from calculation.rates import RateResolver
from models.interest_data import AccrualResult, Period

logger = logging.getLogger(__name__)

ROUNDING_METHODS = {
    'half_up': ROUND_HALF_UP,
    'half_even': ROUND_HALF_EVEN,
}

AmountInput = Union[str, Decimal, int, float]

# Largest principal accepted; larger amounts are invalid input
MAX_PRINCIPAL = Decimal('1E+15')


def accrue_simple_interest(
    principal: Decimal,
    annual_rate: Decimal,
    start_date: CalendarDate,
    end_date: CalendarDate
) -> Decimal:
    """
    Unrounded simple interest for [start_date, end_date] at a fixed rate.

    Args:
        principal: The principal amount.
        annual_rate: The annual rate in percent (Decimal('9.90') for 9.90 %).
        start_date: First interest day (inclusive).
        end_date: Last interest day (inclusive).

    Returns:
        The interest, summed over the calendar years the range touches.

    Raises:
        ValueError: If end_date is before start_date.
    """
    interest = Decimal('0')
    for year_start, year_end in split_calendar_years(start_date, end_date):
        days = days_between_inclusive(year_start, year_end)
        interest += principal * annual_rate * days / (Decimal(100) * days_in_year(year_start.year))
    return interest


class ProcessInterestCalculator:
    """Process interest engine bound to one rate table and rounding rule"""

    def __init__(self, reference_rates: Optional[RateTable] = None,
                 decimal_places: int = 2, rounding_method: str = 'half_up',
                 surcharge_rates: Optional[RateTable] = None):
        if rounding_method not in ROUNDING_METHODS:
            raise ValueError(f"unknown rounding method: {rounding_method!r}")
        if decimal_places < 0:
            raise ValueError("decimal_places must be zero or positive")

        self.resolver = RateResolver(reference_rates, surcharge_rates)
        self.rounding = ROUNDING_METHODS[rounding_method]
        self.quantum = Decimal(1).scaleb(-decimal_places)

    @classmethod
    def from_config(cls, calculation_config) -> 'ProcessInterestCalculator':
        """Build from a CalculationConfig, loading the rate file if one is set."""
        reference_rates = None
        if calculation_config.reference_rate_file:
            reference_rates = RateTable.from_json(calculation_config.reference_rate_file)
        return cls(
            reference_rates=reference_rates,
            decimal_places=calculation_config.decimal_places,
            rounding_method=calculation_config.rounding_method
        )

    @property
    def reference_rates(self) -> RateTable:
        return self.resolver.reference_rates

    def round(self, amount: Decimal) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, amount.adjusted() - self.quantum.adjusted() + 2)
            return amount.quantize(self.quantum, rounding=self.rounding)

    def build_periods(self, principal: Decimal, start_date: CalendarDate,
                      end_date: CalendarDate) -> List[Period]:
        """
        One Period per half-year overlapping [start_date, end_date].

        Raises:
            ValueError: If end_date is before start_date.
            RateCoverageError: If a half-year starts before the rate table.
        """
        surcharge_rate = self.resolver.surcharge_rate_on(start_date)
        periods = []

        for period_start, period_end in split_half_years(start_date, end_date):
            total_rate = self.resolver.total_rate_on(period_start, start_date)
            reference_rate = total_rate - surcharge_rate
            interest = accrue_simple_interest(principal, total_rate, period_start, period_end)

            periods.append(Period(
                start_date=period_start,
                end_date=period_end,
                principal=principal,
                reference_rate=reference_rate,
                surcharge_rate=surcharge_rate,
                total_rate=total_rate,
                day_count=days_between_inclusive(period_start, period_end),
                interest=interest
            ))
            logger.debug(f"{period_start} - {period_end}: {total_rate} % -> {interest}")

        return periods

    def accrue(self, principal: Decimal, start_date: CalendarDate,
               end_date: CalendarDate) -> AccrualResult:
        """Compute the full result for already validated inputs."""
        periods = self.build_periods(principal, start_date, end_date)
        unrounded = sum((period.interest for period in periods), Decimal('0'))
        return AccrualResult(
            principal=principal,
            start_date=start_date,
            end_date=end_date,
            surcharge_rate=self.resolver.surcharge_rate_on(start_date),
            periods=tuple(periods),
            total_interest=self.round(unrounded)
        )

    def _prepare_inputs(self, amount: AmountInput, start: DateLike,
                        end: DateLike) -> Optional[Tuple[Decimal, CalendarDate, CalendarDate]]:
        start_date = to_calendar_date(start)
        end_date = to_calendar_date(end)
        if start_date is None or end_date is None:
            logger.debug(f"Invalid date input: {start!r}, {end!r}")
            return None
        if start_date > end_date:
            logger.debug(f"Start date {start_date} is after end date {end_date}")
            return None

        principal = parse_amount(amount)
        if principal is None or principal <= 0 or principal > MAX_PRINCIPAL:
            logger.debug(f"Invalid amount input: {amount!r}")
            return None

        return principal, start_date, end_date

    def calculate_accrual(self, amount: AmountInput, start: DateLike,
                          end: DateLike) -> Optional[AccrualResult]:
        """
        Validate the input and compute the result.

        Returns:
            The AccrualResult, or None for an invalid amount, an invalid date
            or a start date after the end date.

        Raises:
            RateCoverageError: If the range starts before the rate table.
        """
        inputs = self._prepare_inputs(amount, start, end)
        if inputs is None:
            return None
        return self.accrue(*inputs)

    def calculate_process_interest(self, amount: AmountInput, start: DateLike,
                                   end: DateLike) -> Optional[Decimal]:
        """Rounded total interest, or None for invalid input."""
        result = self.calculate_accrual(amount, start, end)
        if result is None:
            return None
        return result.total_interest

    def calculate_detailed_breakdown(self, amount: AmountInput, start: DateLike,
                                     end: DateLike) -> List[Period]:
        """Periods of the calculation; empty for invalid input."""
        result = self.calculate_accrual(amount, start, end)
        if result is None:
            return []
        return list(result.periods)


_default_calculator = ProcessInterestCalculator()


def calculate_process_interest(amount: AmountInput, start_date: DateLike,
                               end_date: DateLike) -> Optional[Decimal]:
    """
    Process interest from start_date to end_date (both DD-MM-YYYY, inclusive).

    Args:
        amount: Principal as "10.000,00" or as a number.
        start_date: Interest start date.
        end_date: Calculation date.

    Returns:
        Total interest rounded half-up to 2 decimals, or None if the amount
        is not positive or above MAX_PRINCIPAL, a date is invalid or
        start_date is after end_date.

    Raises:
        RateCoverageError: If the range starts before the bundled rate table.
    """
    return _default_calculator.calculate_process_interest(amount, start_date, end_date)


def calculate_detailed_breakdown(amount: AmountInput, start_date: DateLike,
                                 end_date: DateLike) -> List[Period]:
    """Half-year periods of calculate_process_interest; empty for invalid input."""
    return _default_calculator.calculate_detailed_breakdown(amount, start_date, end_date)


def calculate_accrual(amount: AmountInput, start_date: DateLike,
                      end_date: DateLike) -> Optional[AccrualResult]:
    return _default_calculator.calculate_accrual(amount, start_date, end_date)
