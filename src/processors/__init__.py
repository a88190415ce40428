from .tax_engine import compute_tax, validate_brackets, build_brackets, describe_brackets, DEFAULT_BRACKETS
from .payroll_calculator import compute_payroll
from .ctc_calculator import compute_ctc
from .payslip_generator import PayslipGenerator


__all__ = [
    'compute_tax',
    'validate_brackets',
    'build_brackets',
    'describe_brackets',
    'DEFAULT_BRACKETS',
    'compute_payroll',
    'compute_ctc',
    'PayslipGenerator'
]
