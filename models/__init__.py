#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models shared across the system
"""

from .interest_data import Period, AccrualResult

__all__ = [
    'Period',
    'AccrualResult',
]
