import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from io import BytesIO
from datetime import date
from typing import Optional
from models.payroll import PayrollInput, PayrollResult
from utils.formatters import format_percentage
from config.settings import COMPANY_NAME, CURRENCY_SYMBOL, EPF_EMPLOYEE_RATE, EPF_EMPLOYER_RATE, ETF_EMPLOYER_RATE

class PayslipGenerator:
    """Render a payroll breakdown as an Excel payslip"""

    def generate(self, payroll_input: PayrollInput, result: PayrollResult,
                 employee_name: Optional[str] = None, issued: Optional[date] = None) -> BytesIO:
        """Build the payslip workbook in memory and return it rewound"""

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Payslip"

        # Set column widths
        ws.column_dimensions['A'].width = 36
        ws.column_dimensions['B'].width = 18

        # Define styles
        header_font = Font(bold=True, size=14)
        bold_font = Font(bold=True)
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        section_fill = PatternFill(start_color="B4C7E7", end_color="B4C7E7", fill_type="solid")
        money_format = '#,##0.00'

        # Header section
        row = 1
        ws.merge_cells(f'A{row}:B{row}')
        ws[f'A{row}'] = f"{COMPANY_NAME} - PAYSLIP"
        ws[f'A{row}'].font = header_font
        ws[f'A{row}'].alignment = Alignment(horizontal='center')

        row = 2
        ws[f'A{row}'] = "Employee"
        ws[f'B{row}'] = employee_name or "-"

        row = 3
        ws[f'A{row}'] = "Issued"
        ws[f'B{row}'] = (issued or date.today()).strftime('%Y-%m-%d')

        row = 4
        ws[f'A{row}'] = "Currency"
        ws[f'B{row}'] = CURRENCY_SYMBOL

        def section(start_row: int, title: str) -> int:
            ws[f'A{start_row}'] = title
            ws[f'A{start_row}'].font = bold_font
            for col in ['A', 'B']:
                ws[f'{col}{start_row}'].fill = section_fill
                ws[f'{col}{start_row}'].border = thin_border
            return start_row + 1

        def line(at_row: int, label: str, amount, bold: bool = False) -> int:
            ws[f'A{at_row}'] = label
            ws[f'B{at_row}'] = float(amount)
            ws[f'B{at_row}'].number_format = money_format
            for col in ['A', 'B']:
                ws[f'{col}{at_row}'].border = thin_border
                if bold:
                    ws[f'{col}{at_row}'].font = bold_font
            return at_row + 1

        # Earnings
        row = section(6, "Earnings")
        row = line(row, "Basic salary", result.basic)
        for incentive in payroll_input.incentives:
            row = line(row, incentive.label, incentive.amount)
        row = line(row, "Gross salary", result.gross_salary, bold=True)

        # Deductions
        row = section(row + 1, "Deductions")
        row = line(row, f"EPF employee ({format_percentage(EPF_EMPLOYEE_RATE)})", result.employee_contribution)
        row = line(row, "Income tax", result.tax_amount)
        row = line(row, "Total deductions", result.total_deductions, bold=True)

        # Employer contributions
        row = section(row + 1, "Employer contributions")
        row = line(row, f"EPF employer ({format_percentage(EPF_EMPLOYER_RATE)})", result.employer_contribution)
        row = line(row, f"ETF ({format_percentage(ETF_EMPLOYER_RATE)})", result.employer_secondary_contribution)
        row = line(row, "Total employer contribution", result.total_employer_contribution, bold=True)

        # Net pay
        row += 1
        ws[f'A{row}'] = "Net salary"
        ws[f'A{row}'].font = Font(bold=True, size=14)
        ws[f'B{row}'] = float(result.net_salary)
        ws[f'B{row}'].number_format = money_format
        ws[f'B{row}'].font = Font(bold=True, size=14)

        buffer = BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        return buffer
