import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from models.errors import InvalidInput
from models.payroll import TaxBracket
from utils.validators import coerce_decimal
from config.settings import TAX_BRACKETS

logger = logging.getLogger(__name__)

BracketRow = Tuple[Decimal, Optional[Decimal], Decimal]

def build_brackets(rows: Iterable[BracketRow]) -> Tuple[TaxBracket, ...]:
    """Turn (lower, upper, rate) rows into a validated bracket table"""
    brackets = tuple(TaxBracket(lower, upper, rate) for lower, upper, rate in rows)
    validate_brackets(brackets)
    return brackets

def validate_brackets(brackets: Sequence[TaxBracket]) -> None:
    """Check the table starts at zero, is contiguous and only the top band is open"""
    if not brackets:
        raise InvalidInput('tax_brackets', "table is empty")

    if brackets[0].lower_bound != 0:
        raise InvalidInput('tax_brackets', "first bracket must start at 0")

    previous_upper = Decimal('0')
    for index, bracket in enumerate(brackets):
        if not Decimal('0') <= bracket.rate <= Decimal('1'):
            raise InvalidInput('tax_brackets', f"bracket {index} rate must be within 0 and 1")
        if bracket.lower_bound != previous_upper:
            raise InvalidInput('tax_brackets', f"bracket {index} does not start where bracket {index - 1} ends")
        if bracket.upper_bound is None:
            if index != len(brackets) - 1:
                raise InvalidInput('tax_brackets', f"bracket {index} is unbounded but not last")
            break
        if bracket.upper_bound <= bracket.lower_bound:
            raise InvalidInput('tax_brackets', f"bracket {index} upper bound must exceed lower bound")
        previous_upper = bracket.upper_bound

DEFAULT_BRACKETS = build_brackets(TAX_BRACKETS)

def compute_tax(gross_income: Union[Decimal, int, float, str],
                brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS) -> Decimal:
    """Progressive tax on ``gross_income``.

    Each bracket below the income taxes the slice of income that falls
    inside it. The result is not rounded; callers round at presentation.
    """
    income = coerce_decimal('gross_income', gross_income)
    if income < 0:
        raise InvalidInput('gross_income', "must not be negative")

    tax = Decimal('0')
    remaining = income
    for bracket in brackets:
        if remaining <= 0 or bracket.lower_bound >= income:
            break
        span = bracket.span
        taxable = remaining if span is None else min(remaining, span)
        tax += taxable * bracket.rate
        remaining -= taxable

    logger.debug("Tax on %s: %s", income, tax)
    return tax

def describe_brackets(brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS) -> List[dict]:
    """Bracket table as plain dicts for the API"""
    return [bracket.to_dict() for bracket in brackets]
