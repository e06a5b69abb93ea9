#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interest specification tests
"""

import pytest
from decimal import Decimal

from calculation.interest import ProcessInterestCalculator
from calculation.rate_table import RateTable
from reports.specification import (
    build_specification, create_specification, calculation_principles,
    COLUMN_HEADERS, TOTAL_LABEL
)


class TestBuildSpecification:

    def test_texts(self, sample_result):
        spec = build_specification(sample_result)

        assert spec.title == "Procesrente"
        assert spec.principal_line == "Hovedstol: 10.000,00 kr."
        assert spec.period_line == "Periode: 01-01-2023 - 31-12-2023 (begge dage inkl.)"
        assert spec.total_interest == Decimal('1058.05')
        assert spec.total_text == "1.058,05 kr."
        assert spec.filename == "Procesrente af 10.000,00 kr. - 01-01-2023 til 31-12-2023"
        assert not spec.is_hypothetical

    def test_rows(self, sample_result):
        spec = build_specification(sample_result)

        assert [row.period_text for row in spec.rows] == ["01-01-2023 - 30-06-2023", "01-07-2023 - 31-12-2023"]
        assert [row.day_count for row in spec.rows] == [181, 184]
        assert [row.rate_text for row in spec.rows] == ["9,90 %", "11,25 %"]
        assert spec.rows[0].interest_text == "490,93 kr."

    def test_table(self, sample_result):
        table = build_specification(sample_result).table()

        assert table[0] == list(COLUMN_HEADERS)
        assert len(table) == 4
        assert table[-1] == [TOTAL_LABEL, '', '', "1.058,05 kr."]

    def test_hypothetical_notice(self, calculator):
        result = calculator.calculate_accrual("10.000,00", "01-01-2025", "31-03-2026")
        spec = build_specification(result, calculator.reference_rates)

        assert spec.is_hypothetical
        assert spec.hypothetical_notice == (
            "Der er kun fastsat procesrente frem til 31-12-2025. Beregning derefter er hypotetisk!"
        )

    def test_notice_can_be_disabled(self, calculator):
        result = calculator.calculate_accrual("10.000,00", "01-01-2025", "31-03-2026")
        spec = build_specification(result, warn_on_hypothetical_rates=False)
        assert spec.hypothetical_notice is None

    def test_notice_uses_given_table(self, small_rate_table):
        calculator = ProcessInterestCalculator(small_rate_table)
        result = calculator.calculate_accrual("1.000,00", "01-01-2021", "01-07-2021")
        spec = build_specification(result, small_rate_table)
        assert "30-06-2021" in spec.hypothetical_notice

    def test_custom_title(self, sample_result):
        spec = build_specification(sample_result, title="Renteopgørelse")
        assert spec.title == "Renteopgørelse"
        assert spec.filename.startswith("Renteopgørelse af 10.000,00 kr.")


class TestPrinciples:

    def test_surcharge_from_cutover(self, sample_result):
        principles = calculation_principles(sample_result)
        assert len(principles) == 3
        assert "fra 1. marts 2013" in principles[1]
        assert "tillagt 8 %" in principles[1]

    def test_surcharge_before_cutover(self, calculator):
        result = calculator.calculate_accrual("1.000,00", "01-01-2012", "31-12-2012")
        principles = calculation_principles(result)
        assert "før 1. marts 2013" in principles[1]
        assert "tillagt 7 %" in principles[1]


class TestCreateSpecification:

    def test_create(self):
        spec = create_specification("10.000,00", "01-01-2023", "30-06-2023")
        assert spec.total_interest == Decimal('490.93')
        assert len(spec.rows) == 1

    def test_invalid_input(self):
        assert create_specification("0", "01-01-2023", "30-06-2023") is None
        assert create_specification("1.000", "30-06-2023", "01-01-2023") is None

    def test_custom_calculator(self):
        table = RateTable.from_records([('01-01-2023', '2,00 %')])
        spec = create_specification("36.500,00", "01-01-2023", "01-01-2023",
                                    calculator=ProcessInterestCalculator(table), title="Test")
        # 36500 * 10 % / 365
        assert spec.total_interest == Decimal('10.00')
        assert spec.title == "Test"
