from .errors import InvalidInput
from .payroll import (
    TaxBracket,
    Incentive,
    PayrollInput,
    PayrollResult,
    CtcInput,
    CtcResult
)

__all__ = [
    'InvalidInput',
    'TaxBracket',
    'Incentive',
    'PayrollInput',
    'PayrollResult',
    'CtcInput',
    'CtcResult'
]
