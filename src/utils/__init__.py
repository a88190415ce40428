from .formatters import to_money, format_currency, format_percentage
from .validators import (
    coerce_decimal,
    parse_amount,
    parse_percentage,
    parse_payroll_form,
    parse_ctc_form,
    payroll_input_from_json,
    tax_input_from_json,
    ctc_input_from_json
)

__all__ = [
    'to_money',
    'format_currency',
    'format_percentage',
    'coerce_decimal',
    'parse_amount',
    'parse_percentage',
    'parse_payroll_form',
    'parse_ctc_form',
    'payroll_input_from_json',
    'tax_input_from_json',
    'ctc_input_from_json'
]
