# -*- coding: utf-8 -*-
"""
Reports built from the detailed interest breakdown
"""
