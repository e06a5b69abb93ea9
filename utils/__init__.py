#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utilities

Import directly from the submodules:
- from utils.error_handler import ErrorHandler, get_error_handler
"""
