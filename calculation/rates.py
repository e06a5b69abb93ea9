#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rate resolution for process interest.

The rate for a half-year is the reference rate in force at the start of that
half-year plus a surcharge. The surcharge comes from the surcharge table
(7 % for claims whose interest starts before 1 March 2013, 8 % from that
date). It is fixed from the claim's interest start date and does not change
during the calculation.
"""

import logging
from decimal import Decimal
from typing import Optional

from calculation.dates import CalendarDate
from calculation.rate_table import RateTable, DEFAULT_REFERENCE_RATES, DEFAULT_SURCHARGE_RATES

logger = logging.getLogger(__name__)

# Interest Act amendment of 1 March 2013, used for the report wording
SURCHARGE_CUTOVER_DATE = CalendarDate(2013, 3, 1)


class RateResolver:
    """Looks up reference and surcharge rates against rate tables."""

    def __init__(self, reference_rates: Optional[RateTable] = None,
                 surcharge_rates: Optional[RateTable] = None):
        self.reference_rates = reference_rates or DEFAULT_REFERENCE_RATES
        self.surcharge_rates = surcharge_rates or DEFAULT_SURCHARGE_RATES

    def reference_rate_on(self, query_date: CalendarDate) -> Decimal:
        """
        Reference rate in force on query_date.

        Raises:
            RateCoverageError: If query_date precedes the first table entry.
        """
        rate = self.reference_rates.rate_on(query_date)
        logger.debug(f"Reference rate on {query_date}: {rate}")
        return rate

    def surcharge_rate_on(self, interest_start_date: CalendarDate) -> Decimal:
        """Surcharge for a claim whose interest starts on interest_start_date."""
        return self.surcharge_rates.rate_on(interest_start_date)

    def total_rate_on(self, query_date: CalendarDate, interest_start_date: CalendarDate) -> Decimal:
        return self.reference_rate_on(query_date) + self.surcharge_rate_on(interest_start_date)


_default_resolver = RateResolver()


def reference_rate_on(query_date: CalendarDate) -> Decimal:
    """Reference rate on query_date according to the bundled table."""
    return _default_resolver.reference_rate_on(query_date)


def surcharge_rate_on(interest_start_date: CalendarDate) -> Decimal:
    """Surcharge on a claim starting on interest_start_date, from the bundled table."""
    return _default_resolver.surcharge_rate_on(interest_start_date)
