"""
The financial profile accumulated across the onboarding wizard.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import List, Optional

from apps.core import validators as v
from apps.core.exceptions import WizardStateError
from apps.core.utils import calculate_monthly_emi, round_emi_for_display


@dataclass(frozen=True)
class EMIInput:
    """An existing loan declared on the risk-assessment step."""

    loan_amount: Decimal
    tenure_years: Decimal
    annual_interest_rate_pct: Decimal

    @property
    def monthly_emi(self) -> Optional[Decimal]:
        return calculate_monthly_emi(
            self.loan_amount,
            self.tenure_years,
            self.annual_interest_rate_pct,
        )

    @property
    def display_emi(self) -> int:
        return round_emi_for_display(self.monthly_emi)


@dataclass
class FinancialProfile:
    """
    Wizard state forwarded from step to step.

    Fields start empty and are filled in as steps are saved. Merging only
    touches the keys supplied, so nothing already set has to be entered
    again. Registration details are frozen once the user record exists.
    """

    REGISTRATION_FIELDS = (v.FULL_NAME, v.EMAIL, v.MOBILE, v.AGE)

    user_id: Optional[int] = None

    full_name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    age: Optional[int] = None

    retirement_age: Optional[int] = None
    life_expectancy: Optional[int] = None

    monthly_income: Optional[Decimal] = None
    annual_income_growth_pct: Optional[Decimal] = None
    monthly_expenses: Optional[Decimal] = None
    annual_expense_growth_pct: Optional[Decimal] = None
    inflation_rate_pct: Optional[Decimal] = None
    emi: Optional[EMIInput] = None

    goals: List[dict] = field(default_factory=list)
    plan: Optional[dict] = None
    investment: Optional[dict] = None

    @property
    def is_registered(self) -> bool:
        return self.user_id is not None

    def merge(self, values: dict) -> None:
        """
        Set the given fields, leaving every other field as it is.

        Raises:
            WizardStateError: On an unknown field, or on a change to a
                registration field after the user has been created.
        """
        known = {f.name for f in fields(self)}
        for name, value in values.items():
            if name not in known:
                raise WizardStateError(f"Unknown profile field: {name}")
            if (
                self.is_registered
                and name in self.REGISTRATION_FIELDS
                and getattr(self, name) != value
            ):
                raise WizardStateError(
                    f"{name} cannot be changed after registration"
                )
            setattr(self, name, value)

    def as_context(self) -> dict:
        """Flat mapping of the scalar fields that are set, for validation."""
        context = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or isinstance(value, (list, dict, EMIInput)):
                continue
            context[f.name] = value
        if self.emi is not None:
            context[v.LOAN_AMOUNT] = self.emi.loan_amount
            context[v.TENURE_YEARS] = self.emi.tenure_years
            context[v.ANNUAL_INTEREST_RATE_PCT] = self.emi.annual_interest_rate_pct
        return context
