from dataclasses import dataclass, field, fields, replace
from typing import Dict, Optional, Tuple
from decimal import Decimal
from .errors import InvalidInput

@dataclass(frozen=True)
class TaxBracket:
    """One band of the progressive tax table"""
    lower_bound: Decimal
    upper_bound: Optional[Decimal]
    rate: Decimal

    @property
    def span(self) -> Optional[Decimal]:
        if self.upper_bound is None:
            return None
        return self.upper_bound - self.lower_bound

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            'lower_bound': str(self.lower_bound),
            'upper_bound': str(self.upper_bound) if self.upper_bound is not None else None,
            'rate': str(self.rate)
        }

@dataclass(frozen=True)
class Incentive:
    """Extra income on top of basic salary"""
    identifier: str
    label: str
    amount: Decimal

@dataclass(frozen=True)
class PayrollInput:
    """Validated inputs for one payroll calculation"""
    basic_salary: Decimal
    incentives: Tuple[Incentive, ...] = field(default_factory=tuple)

    def with_incentive(self, incentive: Incentive) -> 'PayrollInput':
        """Return a copy with ``incentive`` appended"""
        if any(i.identifier == incentive.identifier for i in self.incentives):
            raise InvalidInput(f"incentives[{incentive.identifier}]", "duplicate identifier")
        return replace(self, incentives=self.incentives + (incentive,))

    def without_incentive(self, identifier: str) -> 'PayrollInput':
        """Return a copy with the incentive ``identifier`` removed"""
        remaining = tuple(i for i in self.incentives if i.identifier != identifier)
        if len(remaining) == len(self.incentives):
            raise InvalidInput(f"incentives[{identifier}]", "no such incentive")
        return replace(self, incentives=remaining)

@dataclass(frozen=True)
class PayrollResult:
    """Payroll breakdown, every amount rounded to 2 decimals"""
    basic: Decimal
    total_incentives: Decimal
    gross_salary: Decimal
    employee_contribution: Decimal
    employer_contribution: Decimal
    employer_secondary_contribution: Decimal
    tax_amount: Decimal
    net_salary: Decimal
    total_deductions: Decimal
    total_employer_contribution: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}

@dataclass(frozen=True)
class CtcInput:
    """Cost-to-company inputs; percentages are 0-100"""
    ctc: Decimal
    epf_percent: Decimal
    etf_percent: Decimal
    tax_percent: Decimal

@dataclass(frozen=True)
class CtcResult:
    ctc: Decimal
    total_contributions: Decimal
    gross_salary: Decimal
    tax_amount: Decimal
    net_salary: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}
