"""
Wizard steps and the form fields each step collects.
"""

from enum import Enum

from apps.core import validators as v


class WizardStep(Enum):
    """Onboarding steps in their fixed order."""

    REGISTRATION = 1
    CLIENT_DETAILS = 2
    RISK_ASSESSMENT = 3
    GOALS = 4
    PLAN = 5
    INVEST = 6

    @property
    def label(self):
        return self.name.replace('_', ' ').title()

    def next(self):
        """The following step, or None for the last one."""
        try:
            return WizardStep(self.value + 1)
        except ValueError:
            return None

    def previous(self):
        """The preceding step, or None for the first one."""
        try:
            return WizardStep(self.value - 1)
        except ValueError:
            return None


FIRST_STEP = WizardStep.REGISTRATION
LAST_STEP = WizardStep.INVEST

EMI_FIELDS = (
    v.LOAN_AMOUNT,
    v.TENURE_YEARS,
    v.ANNUAL_INTEREST_RATE_PCT,
)

# Free-text/numeric inputs validated field by field. GOALS and PLAN
# collect structured data instead and have no per-field inputs.
STEP_FIELDS = {
    WizardStep.REGISTRATION: (
        v.FULL_NAME,
        v.EMAIL,
        v.MOBILE,
        v.AGE,
        v.PASSWORD,
        v.CONFIRM_PASSWORD,
    ),
    WizardStep.CLIENT_DETAILS: (
        v.RETIREMENT_AGE,
        v.LIFE_EXPECTANCY,
    ),
    WizardStep.RISK_ASSESSMENT: (
        v.MONTHLY_INCOME,
        v.ANNUAL_INCOME_GROWTH_PCT,
        v.MONTHLY_EXPENSES,
        v.ANNUAL_EXPENSE_GROWTH_PCT,
        v.INFLATION_RATE_PCT,
    ),
    WizardStep.GOALS: (),
    WizardStep.PLAN: (),
    WizardStep.INVEST: (
        v.PAYMENT_METHOD,
        v.MONTHLY_AMOUNT,
    ),
}


def required_fields(step, emi_enabled=False):
    """Fields that must be filled in before leaving `step`."""
    fields = STEP_FIELDS[step]
    if step is WizardStep.RISK_ASSESSMENT and emi_enabled:
        fields = fields + EMI_FIELDS
    return fields
