from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Tuple
from models.errors import InvalidInput
from models.payroll import Incentive, PayrollInput, CtcInput

REQUIRED = "Required"
NOT_A_NUMBER = "Must be a number"
NOT_POSITIVE = "Must be positive"
NEGATIVE = "Must not be negative"
OUT_OF_RANGE = "Must be between 0 and 100"
TOO_LARGE = "Must be less than 1,000,000,000,000,000"

# Amounts of 10**15 and up cannot be rounded to cents within Decimal's default precision
MAX_ADJUSTED_EXPONENT = 14

def coerce_decimal(field: str, value: Any) -> Decimal:
    """Turn a number or numeric string into a finite Decimal"""
    if value is None or isinstance(value, bool):
        raise InvalidInput(field, NOT_A_NUMBER)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInput(field, NOT_A_NUMBER)
    if not amount.is_finite():
        raise InvalidInput(field, NOT_A_NUMBER)
    if amount and amount.adjusted() > MAX_ADJUSTED_EXPONENT:
        raise InvalidInput(field, TOO_LARGE)
    return amount

def validate_tax_rate(rate: Decimal) -> bool:
    """Validate a percentage is within 0-100"""
    return Decimal('0') <= rate <= Decimal('100')

def parse_amount(field: str, raw: Optional[str], allow_zero: bool = False) -> Decimal:
    """Parse a money field typed into the form"""
    if raw is None or not str(raw).strip():
        raise InvalidInput(field, REQUIRED)
    amount = coerce_decimal(field, raw)
    if amount < 0:
        raise InvalidInput(field, NEGATIVE if allow_zero else NOT_POSITIVE)
    if amount == 0 and not allow_zero:
        raise InvalidInput(field, NOT_POSITIVE)
    return amount

def parse_percentage(field: str, raw: Optional[str]) -> Decimal:
    """Parse a 0-100 percentage field typed into the form"""
    if raw is None or not str(raw).strip():
        raise InvalidInput(field, REQUIRED)
    rate = coerce_decimal(field, raw)
    if not validate_tax_rate(rate):
        raise InvalidInput(field, OUT_OF_RANGE)
    return rate

def parse_payroll_form(form) -> Tuple[Optional[PayrollInput], Dict[str, str], list]:
    """Read the payroll form.

    ``form`` is a werkzeug ``MultiDict``; incentives arrive as parallel
    ``incentive_id`` / ``incentive_label`` / ``incentive_amount`` lists.
    Returns the parsed input (``None`` when anything failed), a dict of
    field-level error messages, and the incentive rows as typed so the form
    can be redrawn.
    """
    errors = {}
    basic = None
    try:
        basic = parse_amount('basic_salary', form.get('basic_salary'))
    except InvalidInput as e:
        errors[e.field] = e.reason

    ids = form.getlist('incentive_id')
    labels = form.getlist('incentive_label')
    amounts = form.getlist('incentive_amount')

    rows = []
    incentives = []
    seen = set()
    for index, raw_amount in enumerate(amounts):
        identifier = (ids[index] if index < len(ids) else '') or f"incentive-{index + 1}"
        label = (labels[index] if index < len(labels) else '').strip()
        rows.append({'id': identifier, 'label': label, 'amount': raw_amount})

        # A fully blank row is an unused slot
        if not label and not raw_amount.strip():
            continue

        field = f"incentives[{identifier}]"
        if identifier in seen:
            errors[field] = "Duplicate incentive"
            continue
        seen.add(identifier)
        try:
            amount = parse_amount(field, raw_amount, allow_zero=True)
        except InvalidInput as e:
            errors[e.field] = e.reason
            continue
        incentives.append(Incentive(identifier, label or f"Incentive {index + 1}", amount))

    if errors:
        return None, errors, rows
    return PayrollInput(basic, tuple(incentives)), errors, rows

def parse_ctc_form(form: Mapping[str, str]) -> Tuple[Optional[CtcInput], Dict[str, str]]:
    """Read the cost-to-company form"""
    errors = {}
    values = {}
    parsers = [
        ('ctc', lambda raw: parse_amount('ctc', raw)),
        ('epf', lambda raw: parse_percentage('epf', raw)),
        ('etf', lambda raw: parse_percentage('etf', raw)),
        ('tax', lambda raw: parse_percentage('tax', raw)),
    ]
    for name, parser in parsers:
        try:
            values[name] = parser(form.get(name))
        except InvalidInput as e:
            errors[e.field] = e.reason

    if errors:
        return None, errors
    return CtcInput(values['ctc'], values['epf'], values['etf'], values['tax']), errors

def payroll_input_from_json(data: Optional[Dict[str, Any]]) -> PayrollInput:
    """Build a PayrollInput from an API request body"""
    if not isinstance(data, dict):
        raise InvalidInput('body', "Expected a JSON object")

    basic = coerce_decimal('basic_salary', data.get('basic_salary'))
    raw_incentives = data.get('incentives') or []
    if not isinstance(raw_incentives, list):
        raise InvalidInput('incentives', "Expected a list")

    incentives = []
    for index, item in enumerate(raw_incentives):
        if not isinstance(item, dict):
            raise InvalidInput(f"incentives[{index}]", "Expected an object")
        identifier = str(item.get('id') or f"incentive-{index + 1}")
        label = str(item.get('label') or f"Incentive {index + 1}")
        amount = coerce_decimal(f"incentives[{identifier}]", item.get('amount'))
        incentives.append(Incentive(identifier, label, amount))

    return PayrollInput(basic, tuple(incentives))

def tax_input_from_json(data: Optional[Dict[str, Any]]) -> Decimal:
    """Read the gross income from an API request body"""
    if not isinstance(data, dict):
        raise InvalidInput('body', "Expected a JSON object")
    return coerce_decimal('gross_income', data.get('gross_income'))

def ctc_input_from_json(data: Optional[Dict[str, Any]]) -> CtcInput:
    """Build a CtcInput from an API request body"""
    if not isinstance(data, dict):
        raise InvalidInput('body', "Expected a JSON object")
    return CtcInput(
        ctc=coerce_decimal('ctc', data.get('ctc')),
        epf_percent=coerce_decimal('epf', data.get('epf')),
        etf_percent=coerce_decimal('etf', data.get('etf')),
        tax_percent=coerce_decimal('tax', data.get('tax'))
    )
