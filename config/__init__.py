#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration

Import directly from the module to avoid circular imports:
- from config.app_config import AppConfig, ConfigManager
"""
