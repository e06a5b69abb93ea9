#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Process interest calculator - command line entry point
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

from config.app_config import AppConfig, ConfigManager, configure_logging
from calculation.interest import ProcessInterestCalculator
from calculation.formatting import format_amount
from reports.excel_generator import ExcelReportGenerator
from reports.specification import build_specification
from utils.error_handler import ProcessInterestError, ValidationError, get_error_handler

EXIT_OK = 0
EXIT_CALCULATION_ERROR = 1
EXIT_INVALID_INPUT = 2

EPILOG = """
Examples:
  python main.py 10.000,00 01-01-2023 30-06-2023
  python main.py 10.000,00 01-01-2023 30-06-2023 --detail
  python main.py 10.000,00 01-01-2023 30-06-2023 --excel procesrente.xlsx
"""


class ProcessInterestLauncher:
    """Runs one calculation from parsed command line arguments"""

    def __init__(self, args: argparse.Namespace):
        self.args = args
        self.logger = logging.getLogger(__name__)
        self.app_config: Optional[AppConfig] = None

    def initialize_configuration(self):
        config_manager = ConfigManager(self.args.config_file) if self.args.config_file else ConfigManager()
        self.app_config = config_manager.get_config()

        if self.args.log_level:
            self.app_config.logging.level = self.args.log_level
        configure_logging(self.app_config.logging)

        validation = config_manager.validate_config()
        for warning in validation['warnings']:
            self.logger.warning(warning)
        if not validation['valid']:
            raise ProcessInterestError("Invalid configuration: " + "; ".join(validation['errors']))

        get_error_handler(self.app_config.error_handling.log_file,
                          self.app_config.error_handling.max_history_items)

    def run(self) -> int:
        try:
            self.initialize_configuration()
            calculator = ProcessInterestCalculator.from_config(self.app_config.calculation)

            result = calculator.calculate_accrual(self.args.amount, self.args.start_date, self.args.end_date)
            if result is None:
                raise ValidationError(
                    f"Invalid input: {self.args.amount!r} {self.args.start_date!r} {self.args.end_date!r}",
                    user_message="Ugyldigt input: angiv et positivt beløb (fx 10.000,00) og datoer som "
                                 "DD-MM-ÅÅÅÅ med startdato før slutdato."
                )

            specification = build_specification(
                result, calculator.reference_rates,
                title=self.app_config.report.title,
                warn_on_hypothetical_rates=self.app_config.calculation.warn_on_hypothetical_rates
            )

            if self.args.detail:
                self._print_specification(specification)
            else:
                print(format_amount(result.total_interest))

            if self.args.excel:
                path = ExcelReportGenerator(self.app_config).create_interest_report(
                    result, os.path.abspath(self.args.excel), calculator.reference_rates
                )
                print(f"Excel: {path}")

            return EXIT_OK

        except ValidationError as e:
            get_error_handler().handle_exception(e)
            print(e.user_message, file=sys.stderr)
            return EXIT_INVALID_INPUT

        except ProcessInterestError as e:
            error_info = get_error_handler().handle_exception(e)
            print(f"Fejl: {error_info.user_message}", file=sys.stderr)
            return EXIT_CALCULATION_ERROR

    def _print_specification(self, specification):
        print(specification.title)
        print(specification.principal_line)
        print(specification.period_line)
        if specification.hypothetical_notice:
            print(specification.hypothetical_notice)
        print()
        for line in specification.table():
            print(f"{line[0]:<25} {line[1]:>9} {line[2]:>10} {line[3]:>18}")
        print()
        for principle in specification.principles:
            print(f"- {principle}")


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Procesrenteberegner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG
    )
    parser.add_argument('amount', help='Hovedstol, fx 10.000,00')
    parser.add_argument('start_date', help='Rentedato (DD-MM-ÅÅÅÅ)')
    parser.add_argument('end_date', help='Beregningsdato (DD-MM-ÅÅÅÅ), inklusiv')
    parser.add_argument('--detail', action='store_true',
                        help='Vis specifikation pr. halvår')
    parser.add_argument('--excel', type=str, metavar='PATH',
                        help='Gem specifikationen som Excel-fil')
    parser.add_argument('--config-file', type=str,
                        help='Sti til konfigurationsfil (JSON)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logniveau')
    parser.add_argument('--version', action='version', version='%(prog)s 1.0.0')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)
    return ProcessInterestLauncher(args).run()


if __name__ == "__main__":
    sys.exit(main())
