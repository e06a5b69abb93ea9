#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Process interest calculator - test suite
"""

import pytest
import sys
from pathlib import Path

# make the project root importable
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Mark tests by directory"""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def calculator():
    from calculation.interest import ProcessInterestCalculator
    return ProcessInterestCalculator()


@pytest.fixture
def small_rate_table():
    """Three half-years, listed newest first like the published data"""
    from calculation.rate_table import RateTable
    return RateTable.from_records([
        ('01-01-2021', '2,00 %'),
        ('01-07-2020', '1,00 %'),
        ('01-01-2020', '0,50 %'),
    ])


@pytest.fixture
def sample_result(calculator):
    return calculator.calculate_accrual("10.000,00", "01-01-2023", "31-12-2023")
