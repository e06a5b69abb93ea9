#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration tests
"""

import json
import logging
import pytest

import config.app_config as app_config_module
from config.app_config import (
    AppConfig, ConfigManager, CalculationConfig, LoggingConfig,
    configure_logging, get_config_manager, CONFIG_VERSION
)
from utils.error_handler import ConfigurationError


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "app_config.json"


class TestConfigManager:

    def test_missing_file_uses_defaults(self, config_path):
        manager = ConfigManager(config_path)
        config = manager.get_config()

        assert isinstance(config, AppConfig)
        assert config.calculation.decimal_places == 2
        assert config.calculation.rounding_method == "half_up"
        assert config.report.title == "Procesrente"
        assert not config_path.exists()

    def test_save_and_reload(self, config_path):
        manager = ConfigManager(config_path)
        assert manager.set_setting("rounding_method", "half_even", section="calculation")
        assert manager.set_setting("default_author", "Advokat Hansen", section="report")
        assert manager.save_config()

        reloaded = ConfigManager(config_path).get_config()
        assert reloaded.calculation.rounding_method == "half_even"
        assert reloaded.report.default_author == "Advokat Hansen"
        assert reloaded.version == CONFIG_VERSION

    def test_malformed_file_uses_defaults(self, config_path):
        config_path.write_text("{not json", encoding='utf-8')
        manager = ConfigManager(config_path)
        assert manager.get_config().calculation.decimal_places == 2

    def test_unknown_keys_ignored(self, config_path):
        config_path.write_text(json.dumps({
            "version": "1.0.0",
            "calculation": {"decimal_places": 3, "legacy_flag": True},
        }), encoding='utf-8')
        config = ConfigManager(config_path).get_config()
        assert config.calculation.decimal_places == 3
        assert not hasattr(config.calculation, "legacy_flag")

    def test_migration_from_old_version(self, config_path):
        config_path.write_text(json.dumps({
            "version": "0.9.0",
            "calculation": {"decimal_places": 3},
        }), encoding='utf-8')
        config = ConfigManager(config_path).get_config()
        assert config.version == "1.0.0"
        assert config.calculation.decimal_places == 3

    def test_file_without_version_is_migrated(self, config_path):
        config_path.write_text(json.dumps({"report": {"title": "Renter"}}), encoding='utf-8')
        config = ConfigManager(config_path).get_config()
        assert config.version == "1.0.0"
        assert config.report.title == "Renter"

    def test_get_setting(self, config_path):
        manager = ConfigManager(config_path)
        assert manager.get_setting("decimal_places", section="calculation") == 2
        assert manager.get_setting("missing", section="calculation", default="x") == "x"
        assert manager.get_setting("missing", section="nope", default=1) == 1
        assert manager.get_setting("version") == CONFIG_VERSION

    def test_set_setting(self, config_path):
        manager = ConfigManager(config_path)
        assert not manager.set_setting("no_such_key", 1, section="calculation")
        assert manager.set_setting("firm", "Hansen & Co")
        assert manager.get_setting("firm") == "Hansen & Co"
        assert not config_path.exists()

        assert manager.set_setting("decimal_places", 3, section="calculation", save=True)
        assert config_path.exists()

    def test_reset_to_defaults(self, config_path):
        manager = ConfigManager(config_path)
        manager.set_setting("decimal_places", 4, section="calculation")
        manager.set_setting("title", "Renter", section="report")

        manager.reset_to_defaults("calculation")
        assert manager.get_config().calculation.decimal_places == 2
        assert manager.get_config().report.title == "Renter"

        manager.reset_to_defaults()
        assert manager.get_config().report.title == "Procesrente"

        with pytest.raises(ConfigurationError):
            manager.reset_to_defaults("unknown")


class TestValidation:

    def test_defaults_are_valid(self, config_path):
        result = ConfigManager(config_path).validate_config()
        assert result == {'valid': True, 'errors': [], 'warnings': []}

    def test_invalid_values(self, config_path):
        manager = ConfigManager(config_path)
        manager.set_setting("rounding_method", "ceil", section="calculation")
        manager.set_setting("decimal_places", -1, section="calculation")
        manager.set_setting("reference_rate_file", str(config_path.parent / "none.json"), section="calculation")
        manager.set_setting("level", "LOUD", section="logging")

        result = manager.validate_config()
        assert not result['valid']
        assert len(result['errors']) == 4

    def test_decimal_places_warning(self, config_path):
        manager = ConfigManager(config_path)
        manager.set_setting("decimal_places", 4, section="calculation")
        result = manager.validate_config()
        assert result['valid']
        assert result['warnings']


class TestLoggingSetup:

    def test_configure_logging_to_file(self, tmp_path):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        log_file = tmp_path / "logs" / "app.log"
        try:
            configure_logging(LoggingConfig(level="DEBUG", file_path=str(log_file), console_enabled=False))
            logging.getLogger("calculation.test").debug("debug line")
            for handler in root.handlers:
                handler.flush()
            assert "debug line" in log_file.read_text(encoding='utf-8')
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestGlobalManager:

    def test_singleton(self, monkeypatch, config_path):
        monkeypatch.setattr(app_config_module, "_config_manager", None)
        manager = get_config_manager(config_path)
        assert get_config_manager() is manager
        assert app_config_module.get_config() is manager.get_config()

    def test_calculation_defaults(self):
        config = CalculationConfig()
        assert config.reference_rate_file is None
        assert config.warn_on_hypothetical_rates
