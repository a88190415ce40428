import logging
from decimal import Decimal
from models.errors import InvalidInput
from models.payroll import PayrollInput, PayrollResult
from processors.tax_engine import compute_tax
from utils.formatters import to_money
from utils.validators import coerce_decimal
from config.settings import EPF_EMPLOYEE_RATE, EPF_EMPLOYER_RATE, ETF_EMPLOYER_RATE

logger = logging.getLogger(__name__)

def compute_payroll(payroll_input: PayrollInput) -> PayrollResult:
    """Full payroll breakdown for one basic salary and its incentives.

    Contributions (EPF employee 8%, EPF employer 12%, ETF 3%) are taken on
    basic salary only; tax is taken on gross. Everything is carried at full
    precision and rounded once when the result is assembled.
    """
    basic = coerce_decimal('basic_salary', payroll_input.basic_salary)
    if basic <= 0:
        logger.warning("Rejected payroll input: basic salary %s", basic)
        raise InvalidInput('basic_salary', "must be positive")

    total_incentives = Decimal('0')
    seen = set()
    for incentive in payroll_input.incentives:
        field = f"incentives[{incentive.identifier}]"
        if incentive.identifier in seen:
            raise InvalidInput(field, "duplicate identifier")
        seen.add(incentive.identifier)

        amount = coerce_decimal(field, incentive.amount)
        if amount < 0:
            logger.warning("Rejected payroll input: %s (%s) is %s", incentive.identifier, incentive.label, amount)
            raise InvalidInput(field, f"amount for '{incentive.label}' must not be negative")
        total_incentives += amount

    gross = basic + total_incentives
    employee_epf = basic * EPF_EMPLOYEE_RATE
    employer_epf = basic * EPF_EMPLOYER_RATE
    employer_etf = basic * ETF_EMPLOYER_RATE
    tax = compute_tax(gross)
    net = gross - employee_epf - tax

    result = PayrollResult(
        basic=to_money(basic),
        total_incentives=to_money(total_incentives),
        gross_salary=to_money(gross),
        employee_contribution=to_money(employee_epf),
        employer_contribution=to_money(employer_epf),
        employer_secondary_contribution=to_money(employer_etf),
        tax_amount=to_money(tax),
        net_salary=to_money(net),
        total_deductions=to_money(employee_epf + tax),
        total_employer_contribution=to_money(employer_epf + employer_etf)
    )

    logger.debug("Payroll for basic %s with %d incentives: gross %s, net %s",
                 basic, len(payroll_input.incentives), result.gross_salary, result.net_salary)
    return result
