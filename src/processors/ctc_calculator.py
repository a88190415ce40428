import logging
from decimal import Decimal
from models.errors import InvalidInput
from models.payroll import CtcInput, CtcResult
from utils.formatters import to_money
from utils.validators import coerce_decimal, validate_tax_rate

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')

def compute_ctc(ctc_input: CtcInput) -> CtcResult:
    """Gross and net salary from a cost-to-company figure.

    EPF and ETF percentages come off CTC to give gross; the flat tax
    percentage then comes off gross to give net.
    """
    ctc = coerce_decimal('ctc', ctc_input.ctc)
    if ctc <= 0:
        raise InvalidInput('ctc', "must be positive")

    percentages = {}
    for field, value in (('epf', ctc_input.epf_percent),
                         ('etf', ctc_input.etf_percent),
                         ('tax', ctc_input.tax_percent)):
        percent = coerce_decimal(field, value)
        if not validate_tax_rate(percent):
            raise InvalidInput(field, "must be between 0 and 100")
        percentages[field] = percent

    contributions = ctc * (percentages['epf'] + percentages['etf']) / HUNDRED
    gross = ctc - contributions
    tax = gross * percentages['tax'] / HUNDRED
    net = gross - tax

    logger.debug("CTC %s: gross %s, net %s", ctc, gross, net)
    return CtcResult(
        ctc=to_money(ctc),
        total_contributions=to_money(contributions),
        gross_salary=to_money(gross),
        tax_amount=to_money(tax),
        net_salary=to_money(net)
    )
