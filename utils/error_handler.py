#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unified error handling for the process interest calculator.

Features:
- classification of exceptions into categories and severities
- user-facing messages and recovery suggestions
- logging by severity
- bounded error history and statistics
"""

import logging
import traceback
import json
from datetime import datetime
from typing import Dict, Any, Optional, List
from enum import Enum
from dataclasses import dataclass, field


class ErrorSeverity(Enum):
    """Severity of an error"""
    LOW = "low"           # warning level
    MEDIUM = "medium"     # error level
    HIGH = "high"         # critical for the current computation
    CRITICAL = "critical" # process cannot continue


class ErrorCategory(Enum):
    """Error category"""
    INPUT_VALIDATION = "input_validation"
    CALCULATION = "calculation"
    RATE_DATA = "rate_data"
    FILE_IO = "file_io"
    CONFIGURATION = "configuration"
    SYSTEM = "system"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Recorded error"""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    user_message: str
    timestamp: datetime = field(default_factory=datetime.now)
    exception_type: Optional[str] = None
    stack_trace: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    recovery_suggestion: Optional[str] = None
    error_code: Optional[str] = None


class ProcessInterestError(Exception):
    """Base exception of the process interest calculator"""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 user_message: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None,
                 recovery_suggestion: Optional[str] = None,
                 error_code: Optional[str] = None):
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.user_message = user_message or message
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.error_code = error_code


class ValidationError(ProcessInterestError):
    """Invalid input value"""
    def __init__(self, message: str, field_name: Optional[str] = None, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.LOW)
        super().__init__(message, category=ErrorCategory.INPUT_VALIDATION, **kwargs)
        if field_name:
            self.context["field_name"] = field_name


class CalculationError(ProcessInterestError):
    """Failure while computing interest"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.CALCULATION)
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)


class RateCoverageError(CalculationError):
    """A date precedes every entry of the reference rate table"""
    def __init__(self, query_date, earliest_date=None, **kwargs):
        message = f"No reference rate in force on {query_date}"
        if earliest_date is not None:
            message += f" (rate table starts {earliest_date})"
        kwargs.setdefault('user_message',
                          "The reference rate table does not cover the requested period.")
        kwargs.setdefault('error_code', "RATE_COVERAGE")
        super().__init__(message, category=ErrorCategory.RATE_DATA, **kwargs)
        self.query_date = query_date
        self.earliest_date = earliest_date
        self.context["query_date"] = str(query_date)
        if earliest_date is not None:
            self.context["earliest_date"] = str(earliest_date)


class ConfigurationError(ProcessInterestError):
    """Invalid or unreadable configuration"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)


class FileIOError(ProcessInterestError):
    """Reading or writing a file failed"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        super().__init__(message, category=ErrorCategory.FILE_IO, **kwargs)


class ErrorHandler:
    """Central error handler"""

    def __init__(self, log_file: Optional[str] = None, max_history_items: int = 200):
        self.logger = logging.getLogger(__name__)
        self.error_stats: Dict[str, int] = {}
        self.error_history: List[ErrorInfo] = []
        self.max_history_items = max_history_items
        self.log_files: List[str] = []

        if log_file:
            self.setup_error_logging(log_file)

    def setup_error_logging(self, log_file: str):
        """Attach a file handler receiving ERROR and above"""
        if log_file in self.log_files:
            return
        error_handler = logging.FileHandler(log_file, encoding='utf-8')
        error_handler.setLevel(logging.ERROR)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        error_handler.setFormatter(formatter)
        self.logger.addHandler(error_handler)
        self.log_files.append(log_file)

    def configure(self, log_file: Optional[str] = None, max_history_items: Optional[int] = None):
        """Apply error handling settings to a running handler"""
        if log_file:
            self.setup_error_logging(log_file)
        if max_history_items is not None:
            self.max_history_items = max_history_items
            self._trim_history()

    def _trim_history(self):
        if len(self.error_history) > self.max_history_items:
            del self.error_history[:-self.max_history_items]

    def handle_exception(self, exception: Exception, context: Optional[Dict[str, Any]] = None) -> ErrorInfo:
        """Record an exception and return the resulting ErrorInfo"""
        context = context or {}

        if isinstance(exception, ProcessInterestError):
            error_info = ErrorInfo(
                category=exception.category,
                severity=exception.severity,
                message=str(exception),
                user_message=exception.user_message,
                exception_type=type(exception).__name__,
                stack_trace=self._format_stack(exception),
                context={**exception.context, **context},
                recovery_suggestion=exception.recovery_suggestion or self._get_recovery_suggestion(exception.category),
                error_code=exception.error_code
            )
        else:
            category = self._categorize_exception(exception)
            error_info = ErrorInfo(
                category=category,
                severity=self._determine_severity(exception),
                message=str(exception),
                user_message=self._create_user_friendly_message(exception),
                exception_type=type(exception).__name__,
                stack_trace=self._format_stack(exception),
                context=context,
                recovery_suggestion=self._get_recovery_suggestion(category)
            )

        self._log_error(error_info)
        self._update_statistics(error_info)
        self.error_history.append(error_info)
        self._trim_history()

        return error_info

    @staticmethod
    def _format_stack(exception: Exception) -> Optional[str]:
        if exception.__traceback__ is None:
            return None
        return ''.join(traceback.format_exception(type(exception), exception, exception.__traceback__))

    def _categorize_exception(self, exception: Exception) -> ErrorCategory:
        """Guess the category from the exception type"""
        mapping = {
            'ValueError': ErrorCategory.INPUT_VALIDATION,
            'TypeError': ErrorCategory.INPUT_VALIDATION,
            'InvalidOperation': ErrorCategory.CALCULATION,
            'DivisionByZero': ErrorCategory.CALCULATION,
            'ZeroDivisionError': ErrorCategory.CALCULATION,
            'OverflowError': ErrorCategory.CALCULATION,
            'FileNotFoundError': ErrorCategory.FILE_IO,
            'PermissionError': ErrorCategory.FILE_IO,
            'IsADirectoryError': ErrorCategory.FILE_IO,
            'JSONDecodeError': ErrorCategory.CONFIGURATION,
            'OSError': ErrorCategory.SYSTEM,
            'MemoryError': ErrorCategory.SYSTEM,
        }
        return mapping.get(type(exception).__name__, ErrorCategory.UNKNOWN)

    def _determine_severity(self, exception: Exception) -> ErrorSeverity:
        exception_type = type(exception).__name__

        if exception_type in ('MemoryError', 'SystemExit', 'KeyboardInterrupt'):
            return ErrorSeverity.CRITICAL
        elif exception_type in ('FileNotFoundError', 'PermissionError', 'ZeroDivisionError'):
            return ErrorSeverity.HIGH
        elif exception_type in ('ValueError', 'TypeError'):
            return ErrorSeverity.LOW
        else:
            return ErrorSeverity.MEDIUM

    def _create_user_friendly_message(self, exception: Exception) -> str:
        messages = {
            'ValueError': 'The value entered is not valid. Please check the format.',
            'TypeError': 'The data has an unexpected type. Please check the input.',
            'FileNotFoundError': 'The file could not be found.',
            'PermissionError': 'Access to the file was denied.',
            'ZeroDivisionError': 'A division by zero occurred. Please check the input values.',
            'MemoryError': 'Out of memory.',
        }
        return messages.get(type(exception).__name__,
                            f'An unexpected error occurred: {exception}')

    def _get_recovery_suggestion(self, category: ErrorCategory) -> str:
        suggestions = {
            ErrorCategory.INPUT_VALIDATION: 'Check the amount (1.234,56) and the dates (DD-MM-YYYY) and try again.',
            ErrorCategory.CALCULATION: 'Check that the amount and the dates are plausible.',
            ErrorCategory.RATE_DATA: 'Extend the reference rate table to cover the interest start date.',
            ErrorCategory.FILE_IO: 'Check that the file exists and can be written.',
            ErrorCategory.CONFIGURATION: 'Check the configuration file or reset it to defaults.',
            ErrorCategory.SYSTEM: 'Check system resources and restart if necessary.',
        }
        return suggestions.get(category, 'Restart the application.')

    def _log_error(self, error_info: ErrorInfo):
        log_message = (
            f"[{error_info.category.value}] {error_info.message} "
            f"(severity: {error_info.severity.value})"
        )

        if error_info.context:
            log_message += f" | Context: {json.dumps(error_info.context, ensure_ascii=False, default=str)}"

        if error_info.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
        elif error_info.severity == ErrorSeverity.HIGH:
            self.logger.error(log_message)
        elif error_info.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

        if error_info.stack_trace:
            self.logger.debug(f"Stack trace: {error_info.stack_trace}")

    def _update_statistics(self, error_info: ErrorInfo):
        key = f"{error_info.category.value}_{error_info.severity.value}"
        self.error_stats[key] = self.error_stats.get(key, 0) + 1

    def get_error_statistics(self) -> Dict[str, Any]:
        """Error statistics"""
        return {
            "total_errors": sum(self.error_stats.values()),
            "by_category": dict(self.error_stats),
            "recent_errors": [
                {
                    "timestamp": error.timestamp.isoformat(),
                    "category": error.category.value,
                    "severity": error.severity.value,
                    "message": error.message
                }
                for error in self.error_history[-10:]  # newest 10
            ]
        }

    def export_error_report(self, filepath: str = "error_report.json"):
        """Write all recorded errors to a JSON report"""
        report = {
            "generated_at": datetime.now().isoformat(),
            "statistics": self.get_error_statistics(),
            "all_errors": [
                {
                    "timestamp": error.timestamp.isoformat(),
                    "category": error.category.value,
                    "severity": error.severity.value,
                    "message": error.message,
                    "user_message": error.user_message,
                    "exception_type": error.exception_type,
                    "context": error.context,
                    "recovery_suggestion": error.recovery_suggestion,
                    "error_code": error.error_code
                }
                for error in self.error_history
            ]
        }

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(report, f, ensure_ascii=False, indent=2, default=str)


# process-wide handler
_global_error_handler: Optional[ErrorHandler] = None


def get_error_handler(log_file: Optional[str] = None,
                      max_history_items: Optional[int] = None) -> ErrorHandler:
    """Return the process-wide error handler, creating it on first use.

    Settings passed here are applied to the handler even if it already exists.
    """
    global _global_error_handler
    if _global_error_handler is None:
        _global_error_handler = ErrorHandler()
    _global_error_handler.configure(log_file, max_history_items)
    return _global_error_handler
