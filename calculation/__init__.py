#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Process interest calculation engine

Import directly from the submodules to avoid circular imports with models:
- from calculation.interest import calculate_process_interest, calculate_detailed_breakdown
- from calculation.dates import parse_date, format_date
"""
