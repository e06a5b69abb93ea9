#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Excel export of the interest specification
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill

from calculation.rate_table import RateTable
from config.app_config import AppConfig
from models.interest_data import AccrualResult
from reports.specification import COLUMN_HEADERS, TOTAL_LABEL, InterestSpecification, build_specification
from utils.error_handler import FileIOError, get_error_handler

AMOUNT_FORMAT = '#,##0.00'
RATE_FORMAT = '0.00'


class ExcelReportGenerator:
    """Writes process interest specifications to .xlsx workbooks"""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.report_config = self.config.report
        self.logger = logging.getLogger(__name__)
        self.error_handler = get_error_handler()
        self.output_dir = Path(self.report_config.output_directory)
        self._initialize_styles()

    def _initialize_styles(self):
        colors = self.report_config.excel_color_scheme
        font_name = self.report_config.font_family

        self.fonts = {
            'title': Font(name=font_name, size=16, bold=True),
            'header': Font(name=font_name, size=10, bold=True, color=colors.get('header_text', '000000')),
            'body': Font(name=font_name, size=10, color=colors.get('body_text', '333333')),
            'total': Font(name=font_name, size=10, bold=True, color=colors.get('body_text', '333333')),
            'warning': Font(name=font_name, size=10, bold=True, color=colors.get('warning_text', 'C0392B')),
        }
        self.fills = {
            'header': PatternFill(start_color=colors.get('header_bg', 'F8F9FA'),
                                  end_color=colors.get('header_bg', 'F8F9FA'),
                                  fill_type='solid'),
            'total': PatternFill(start_color=colors.get('total_bg', 'FFFFFF'),
                                 end_color=colors.get('total_bg', 'FFFFFF'),
                                 fill_type='solid'),
        }
        thin = Side(style='thin')
        self.borders = {
            'thin_all': Border(left=thin, right=thin, top=thin, bottom=thin),
            'top': Border(top=Side(style='medium')),
        }

    def create_interest_report(self, result: AccrualResult, filename: Optional[str] = None,
                               rate_table: Optional[RateTable] = None) -> str:
        """
        Write the specification of result to a workbook.

        Args:
            result: A computed process interest result.
            filename: Output path; relative names go to the output directory.
                Defaults to the specification's file name.
            rate_table: Table the result was computed with, for the
                hypothetical-rate notice.

        Returns:
            str: Path of the written file.

        Raises:
            FileIOError: If the workbook cannot be written.
        """
        specification = build_specification(
            result, rate_table,
            title=self.report_config.title,
            warn_on_hypothetical_rates=self.config.calculation.warn_on_hypothetical_rates
        )

        output_path = Path(filename) if filename else Path(f"{specification.filename}.xlsx")
        if not output_path.is_absolute():
            output_path = self.output_dir / output_path

        workbook = self.build_workbook(specification)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            workbook.save(output_path)
        except OSError as e:
            error = FileIOError(
                f"Could not write Excel report {output_path}: {e}",
                user_message="The Excel specification could not be saved.",
                context={"path": str(output_path)}
            )
            self.error_handler.handle_exception(error)
            raise error from e

        self.logger.info(f"Excel specification written: {output_path}")
        return str(output_path)

    def build_workbook(self, specification: InterestSpecification) -> openpyxl.Workbook:
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = specification.title[:31]

        for column, width in self.report_config.excel_column_widths.items():
            sheet.column_dimensions[column].width = width

        sheet['A1'] = specification.title
        sheet['A1'].font = self.fonts['title']
        sheet['A2'] = specification.principal_line
        sheet['A3'] = specification.period_line
        sheet['A2'].font = sheet['A3'].font = self.fonts['body']

        row = 5
        if specification.hypothetical_notice:
            sheet.cell(row=row, column=1, value=specification.hypothetical_notice).font = self.fonts['warning']
            row += 2

        headers = ('Fra', 'Til') + COLUMN_HEADERS[1:]
        for column, header in enumerate(headers, start=1):
            cell = sheet.cell(row=row, column=column, value=header)
            cell.font = self.fonts['header']
            cell.fill = self.fills['header']
            cell.border = self.borders['thin_all']
            cell.alignment = Alignment(horizontal='center')
        row += 1

        for line in specification.rows:
            period = line.period
            values = (
                period.start_date.to_date(),
                period.end_date.to_date(),
                period.day_count,
                float(period.total_rate),
                float(period.interest),
            )
            for column, value in enumerate(values, start=1):
                cell = sheet.cell(row=row, column=column, value=value)
                cell.font = self.fonts['body']
                cell.border = self.borders['thin_all']
            sheet.cell(row=row, column=1).number_format = 'DD-MM-YYYY'
            sheet.cell(row=row, column=2).number_format = 'DD-MM-YYYY'
            sheet.cell(row=row, column=4).number_format = RATE_FORMAT
            sheet.cell(row=row, column=5).number_format = AMOUNT_FORMAT
            row += 1

        total_label = sheet.cell(row=row, column=1, value=TOTAL_LABEL)
        total_value = sheet.cell(row=row, column=5, value=float(specification.total_interest))
        total_value.number_format = AMOUNT_FORMAT
        for cell in (total_label, total_value):
            cell.font = self.fonts['total']
            cell.fill = self.fills['total']
            cell.border = self.borders['top']
        row += 2

        sheet.cell(row=row, column=1, value='Beregningsprincipper:').font = self.fonts['header']
        for principle in specification.principles:
            row += 1
            sheet.cell(row=row, column=1, value=f"• {principle}").font = self.fonts['body']

        row += 2
        footer = f"Udskrevet {datetime.now().strftime('%d-%m-%Y %H:%M')}"
        if self.report_config.default_author:
            footer += f" af {self.report_config.default_author}"
        sheet.cell(row=row, column=1, value=footer).font = self.fonts['body']

        return workbook
