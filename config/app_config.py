#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Application configuration
Loading, saving and validating settings in one place
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union, List
from dataclasses import dataclass, field, asdict
from datetime import datetime

from utils.error_handler import ConfigurationError, get_error_handler

CONFIG_VERSION = "1.0.0"
ROUNDING_METHOD_NAMES = ('half_up', 'half_even')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class ApplicationConfig:
    """Basic application settings"""
    name: str = "Procesrenteberegner"
    version: str = "1.0.0"
    description: str = "Calculates Danish process interest (procesrente) with a per-period specification"


@dataclass
class CalculationConfig:
    """Calculation settings"""
    decimal_places: int = 2
    rounding_method: str = "half_up"  # half_up, half_even
    reference_rate_file: Optional[str] = None  # JSON rate table replacing the bundled one
    warn_on_hypothetical_rates: bool = True


@dataclass
class LoggingConfig:
    """Logging settings"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    console_enabled: bool = True


@dataclass
class ErrorHandlerConfig:
    log_file: Optional[str] = None  # receives ERROR and above
    max_history_items: int = 200


@dataclass
class ReportConfig:
    """Report output settings"""
    output_directory: str = "reports/generated"
    title: str = "Procesrente"
    default_author: str = ""
    font_family: str = "Calibri"
    excel_column_widths: Dict[str, float] = field(default_factory=lambda: {
        "A": 28.0, "B": 12.0, "C": 14.0, "D": 14.0, "E": 14.0, "F": 18.0
    })
    excel_color_scheme: Dict[str, str] = field(default_factory=lambda: {
        "header_bg": "F8F9FA", "total_bg": "FFFFFF",
        "header_text": "000000", "body_text": "333333", "warning_text": "C0392B"
    })


@dataclass
class AppConfig:
    """Complete application configuration"""
    version: str = CONFIG_VERSION
    last_updated: str = field(default_factory=lambda: datetime.now().isoformat())

    application: ApplicationConfig = field(default_factory=ApplicationConfig)
    calculation: CalculationConfig = field(default_factory=CalculationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    error_handling: ErrorHandlerConfig = field(default_factory=ErrorHandlerConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    custom_settings: Dict[str, Any] = field(default_factory=dict)


_SECTIONS = {
    'application': ApplicationConfig,
    'calculation': CalculationConfig,
    'logging': LoggingConfig,
    'error_handling': ErrorHandlerConfig,
    'report': ReportConfig,
}


class ConfigManager:
    """JSON-backed configuration store"""

    def __init__(self, config_file_path: Optional[Union[str, Path]] = None):
        self.logger = logging.getLogger(__name__)
        self._config_file_path = Path(config_file_path) if config_file_path else Path("config/app_config.json")
        self._config: Optional[AppConfig] = None
        self._load_config()

    @property
    def config_file_path(self) -> Path:
        return self._config_file_path

    def _load_config(self):
        if not self._config_file_path.exists():
            self.logger.info(f"No configuration file at {self._config_file_path}, using defaults")
            self._config = AppConfig()
            return

        try:
            with open(self._config_file_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
            if not isinstance(config_dict, dict):
                raise ValueError("top-level JSON value must be an object")

            config_dict = self._migrate_config_if_needed(config_dict)
            self._config = self._dict_to_config(config_dict)
            self.logger.info(f"Loaded configuration from {self._config_file_path}")
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            get_error_handler().handle_exception(
                ConfigurationError(f"Could not parse configuration file {self._config_file_path}: {e}",
                                   user_message="The configuration file is malformed. Starting with defaults.",
                                   context={"path": str(self._config_file_path)})
            )
            self._config = AppConfig()
        except OSError as e:
            get_error_handler().handle_exception(
                ConfigurationError(f"Could not read configuration file {self._config_file_path}: {e}",
                                   user_message="The configuration file could not be read. Starting with defaults.",
                                   context={"path": str(self._config_file_path)})
            )
            self._config = AppConfig()

    def save_config(self, file_path: Optional[Union[str, Path]] = None) -> bool:
        """Write the configuration as JSON"""
        save_path = Path(file_path) if file_path else self._config_file_path
        try:
            self._config.last_updated = datetime.now().isoformat()
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self._config), f, ensure_ascii=False, indent=2)
            self.logger.info(f"Saved configuration to {save_path}")
            return True
        except OSError as e:
            get_error_handler().handle_exception(
                ConfigurationError(f"Could not write configuration file {save_path}: {e}",
                                   user_message=f"Saving '{save_path.name}' failed.",
                                   context={"path": str(save_path)})
            )
            return False

    def get_config(self) -> AppConfig:
        return self._config

    def get_setting(self, key: str, section: Optional[str] = None, default=None) -> Any:
        """Read a single setting"""
        if section:
            section_obj = getattr(self._config, section, None)
            if section_obj is None:
                return default
            return getattr(section_obj, key, default)
        if hasattr(self._config, key):
            return getattr(self._config, key)
        return self._config.custom_settings.get(key, default)

    def set_setting(self, key: str, value: Any, section: Optional[str] = None, save: bool = False) -> bool:
        """Change a single setting; unknown top-level keys go to custom_settings"""
        if section:
            section_obj = getattr(self._config, section, None)
            if section_obj is None or not hasattr(section_obj, key):
                self.logger.warning(f"Unknown setting: {section}.{key}")
                return False
            setattr(section_obj, key, value)
        elif key in _SECTIONS or not hasattr(self._config, key):
            self._config.custom_settings[key] = value
        else:
            setattr(self._config, key, value)

        return self.save_config() if save else True

    def reset_to_defaults(self, section: Optional[str] = None):
        """Restore defaults for one section or for everything"""
        if section:
            if section not in _SECTIONS:
                raise ConfigurationError(f"Unknown configuration section: {section}")
            setattr(self._config, section, _SECTIONS[section]())
        else:
            self._config = AppConfig()

    def validate_config(self) -> Dict[str, Any]:
        """Check the configuration for invalid values"""
        errors: List[str] = []
        warnings: List[str] = []
        config = self._config

        if config.calculation.decimal_places < 0:
            errors.append("decimal_places must be zero or positive")
        elif config.calculation.decimal_places != 2:
            warnings.append("process interest is normally stated with 2 decimals")

        if config.calculation.rounding_method not in ROUNDING_METHOD_NAMES:
            errors.append(f"rounding_method must be one of {list(ROUNDING_METHOD_NAMES)}")

        rate_file = config.calculation.reference_rate_file
        if rate_file and not Path(rate_file).exists():
            errors.append(f"reference_rate_file does not exist: {rate_file}")

        if config.logging.level.upper() not in LOG_LEVELS:
            errors.append(f"logging level must be one of {list(LOG_LEVELS)}")

        if config.error_handling.max_history_items < 1:
            errors.append("max_history_items must be at least 1")

        return {'valid': not errors, 'errors': errors, 'warnings': warnings}

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> AppConfig:
        """Build AppConfig from a dict; unknown keys in a section are ignored with a warning"""
        sections = {}
        for name, section_cls in _SECTIONS.items():
            values = dict(config_dict.get(name) or {})
            known = section_cls.__dataclass_fields__
            unknown = [key for key in values if key not in known]
            if unknown:
                self.logger.warning(f"Ignoring unknown settings in '{name}': {unknown}")
            sections[name] = section_cls(**{key: value for key, value in values.items() if key in known})

        return AppConfig(
            version=config_dict.get('version', CONFIG_VERSION),
            last_updated=config_dict.get('last_updated', datetime.now().isoformat()),
            custom_settings=config_dict.get('custom_settings', {}),
            **sections
        )

    def _migrate_config_if_needed(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Upgrade older configuration files"""
        current_version = config_dict.get('version', '0.0.0')

        if current_version < '1.0.0':
            self.logger.info(f"Migrating configuration from {current_version} to 1.0.0")
            config_dict['version'] = '1.0.0'

        return config_dict


def configure_logging(logging_config: LoggingConfig):
    """Install root handlers according to the logging settings"""
    level = getattr(logging, logging_config.level.upper(), logging.INFO)
    handlers: List[logging.Handler] = []

    if logging_config.console_enabled:
        handlers.append(logging.StreamHandler())
    if logging_config.file_path:
        Path(logging_config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logging_config.file_path, encoding='utf-8'))
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=level, format=logging_config.format, handlers=handlers, force=True)


# process-wide manager
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_file_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Return the process-wide ConfigManager, creating it on first use"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(config_file_path)
    return _config_manager


def get_config() -> AppConfig:
    return get_config_manager().get_config()
