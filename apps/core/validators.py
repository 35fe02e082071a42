"""
Field validation rules for the onboarding wizard.

Every rule is a pure function of (field, value, context): the context is
the current snapshot of sibling values, read at call time so that fields
edited out of order are compared against what the user sees now.

Validation failures are returned as values, never raised.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from apps.core.utils import to_decimal

# Registration
FULL_NAME = 'full_name'
EMAIL = 'email'
MOBILE = 'mobile'
AGE = 'age'
PASSWORD = 'password'
CONFIRM_PASSWORD = 'confirm_password'

# Client details
RETIREMENT_AGE = 'retirement_age'
LIFE_EXPECTANCY = 'life_expectancy'

# Risk assessment
MONTHLY_INCOME = 'monthly_income'
ANNUAL_INCOME_GROWTH_PCT = 'annual_income_growth_pct'
MONTHLY_EXPENSES = 'monthly_expenses'
ANNUAL_EXPENSE_GROWTH_PCT = 'annual_expense_growth_pct'
INFLATION_RATE_PCT = 'inflation_rate_pct'

# EMI sub-form
LOAN_AMOUNT = 'loan_amount'
TENURE_YEARS = 'tenure_years'
ANNUAL_INTEREST_RATE_PCT = 'annual_interest_rate_pct'

# Investment
PAYMENT_METHOD = 'payment_method'
MONTHLY_AMOUNT = 'monthly_amount'

PERCENTAGE_FIELDS = (
    ANNUAL_INCOME_GROWTH_PCT,
    ANNUAL_EXPENSE_GROWTH_PCT,
    INFLATION_RATE_PCT,
)

PAYMENT_METHODS = ('netbanking', 'upi', 'card')

MIN_AGE = 18
MAX_AGE = 100
MAX_RETIREMENT_AGE = 100
MAX_LIFE_EXPECTANCY = 120
MIN_PASSWORD_LENGTH = 8

# Largest values the client record can store (15 digits, 2 decimals)
MAX_AMOUNT = Decimal('9999999999999.99')
MAX_TENURE_YEARS = 100

# Source field -> fields whose validity depends on it
FIELD_DEPENDENTS = {
    AGE: (RETIREMENT_AGE,),
    RETIREMENT_AGE: (LIFE_EXPECTANCY,),
    MONTHLY_INCOME: (MONTHLY_EXPENSES,),
    PASSWORD: (CONFIRM_PASSWORD,),
}

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
NON_DIGIT_RE = re.compile(r'[^0-9]')

HUNDRED = Decimal('100')


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one field: valid when message is None."""

    message: Optional[str] = None

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls()

    @classmethod
    def invalid(cls, message: str) -> 'ValidationResult':
        return cls(message=message)

    @property
    def is_valid(self) -> bool:
        return self.message is None

    def __bool__(self):
        return self.is_valid


VALID = ValidationResult.valid()


def is_blank(value) -> bool:
    """True for None and strings that are empty after trimming."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_number(value) -> Optional[Decimal]:
    """Parse a raw input to a finite Decimal, or None if it is not a number."""
    return to_decimal(value)


def parse_whole_number(value) -> Optional[Decimal]:
    """Like parse_number, but fractional values count as unparseable."""
    number = parse_number(value)
    if number is None or number != number.to_integral_value():
        return None
    return number


def _text(value) -> str:
    return '' if value is None else str(value)


def _validate_retirement_age(value, context):
    if is_blank(value):
        return 'Retirement age is required'
    number = parse_whole_number(value)
    age = parse_number(context.get(AGE))
    if number is None or (age is not None and number <= age):
        return 'Retirement age must be greater than current age'
    if number > MAX_RETIREMENT_AGE:
        return 'Retirement age must be 100 or less'
    return None


def _validate_life_expectancy(value, context):
    if is_blank(value):
        return 'Life expectancy is required'
    number = parse_whole_number(value)
    retirement_age = parse_number(context.get(RETIREMENT_AGE))
    if number is None or (retirement_age is not None and number <= retirement_age):
        return 'Life expectancy must be greater than retirement age'
    if number > MAX_LIFE_EXPECTANCY:
        return 'Life expectancy must be 120 or less'
    return None


def _validate_monthly_income(value, context):
    number = parse_number(value)
    if number is None or number <= 0:
        return 'Monthly income must be greater than 0'
    if number > MAX_AMOUNT:
        return 'Monthly income is too large'
    return None


def _validate_monthly_expenses(value, context):
    number = parse_number(value)
    if number is None or number <= 0:
        return 'Monthly expenses must be greater than 0'
    if number > MAX_AMOUNT:
        return 'Monthly expenses are too large'
    # A missing income compares as 0, so any positive expense exceeds it
    income = parse_number(context.get(MONTHLY_INCOME)) or Decimal('0')
    if number >= income:
        return 'Expenses cannot exceed income'
    return None


def _validate_percentage(value, context):
    if is_blank(value):
        return 'This field is required'
    number = parse_number(value)
    if number is None or number < 0 or number > HUNDRED:
        return 'Percentage must be between 0 and 100'
    return None


def _validate_full_name(value, context):
    name = _text(value).strip()
    if not name:
        return 'Full name is required'
    if len(name) < 2:
        return 'Name must be at least 2 characters'
    return None


def _validate_email(value, context):
    email = _text(value).strip()
    if not email:
        return 'Email is required'
    if not EMAIL_RE.match(email):
        return 'Please enter a valid email address'
    return None


def _validate_mobile(value, context):
    mobile = _text(value).strip()
    if not mobile:
        return 'Mobile number is required'
    if len(NON_DIGIT_RE.sub('', mobile)) != 10:
        return 'Please enter a valid 10-digit mobile number'
    return None


def _validate_age(value, context):
    if is_blank(value):
        return 'Age is required'
    number = parse_whole_number(value)
    if number is None or number < MIN_AGE or number > MAX_AGE:
        return 'Age must be between 18 and 100'
    return None


def _validate_password(value, context):
    password = _text(value)
    if not password:
        return 'Password is required'
    if len(password) < MIN_PASSWORD_LENGTH:
        return 'Password must be at least 8 characters'
    return None


def _validate_confirm_password(value, context):
    confirmation = _text(value)
    if not confirmation:
        return 'Please confirm your password'
    if confirmation != _text(context.get(PASSWORD)):
        return 'Passwords do not match'
    return None


def _validate_loan_amount(value, context):
    number = parse_number(value)
    if number is None or number <= 0:
        return 'Loan amount must be greater than 0'
    if number > MAX_AMOUNT:
        return 'Loan amount is too large'
    return None


def _validate_tenure_years(value, context):
    number = parse_number(value)
    if number is None or number <= 0:
        return 'Tenure must be greater than 0'
    if number > MAX_TENURE_YEARS:
        return 'Tenure must be 100 years or less'
    return None


def _validate_interest_rate(value, context):
    if is_blank(value):
        return 'This field is required'
    number = parse_number(value)
    if number is None or number < 0 or number > HUNDRED:
        return 'Interest rate must be between 0 and 100'
    return None


def _validate_payment_method(value, context):
    if _text(value).strip() not in PAYMENT_METHODS:
        return 'Please select a payment method'
    return None


def _validate_monthly_amount(value, context):
    number = parse_number(value)
    if number is None or number <= 0:
        return 'Investment amount must be greater than 0'
    if number > MAX_AMOUNT:
        return 'Investment amount is too large'
    return None


RULES = {
    FULL_NAME: _validate_full_name,
    EMAIL: _validate_email,
    MOBILE: _validate_mobile,
    AGE: _validate_age,
    PASSWORD: _validate_password,
    CONFIRM_PASSWORD: _validate_confirm_password,
    RETIREMENT_AGE: _validate_retirement_age,
    LIFE_EXPECTANCY: _validate_life_expectancy,
    MONTHLY_INCOME: _validate_monthly_income,
    MONTHLY_EXPENSES: _validate_monthly_expenses,
    ANNUAL_INCOME_GROWTH_PCT: _validate_percentage,
    ANNUAL_EXPENSE_GROWTH_PCT: _validate_percentage,
    INFLATION_RATE_PCT: _validate_percentage,
    LOAN_AMOUNT: _validate_loan_amount,
    TENURE_YEARS: _validate_tenure_years,
    ANNUAL_INTEREST_RATE_PCT: _validate_interest_rate,
    PAYMENT_METHOD: _validate_payment_method,
    MONTHLY_AMOUNT: _validate_monthly_amount,
}


def validate_field(
    field: str,
    value: Any,
    context: Optional[Mapping[str, Any]] = None,
) -> ValidationResult:
    """
    Validate a single field value against the current context.

    Args:
        field: Field name (one of the module-level field constants).
        value: Raw input, usually the string as typed.
        context: Current values of the other fields. Cross-field rules
                 read the referenced field from here.

    Returns:
        ValidationResult; fields without a rule are always valid.
    """
    rule = RULES.get(field)
    if rule is None:
        return VALID
    message = rule(value, context or {})
    if message is None:
        return VALID
    return ValidationResult.invalid(message)


def validate_fields(
    values: Mapping[str, Any],
    context: Optional[Mapping[str, Any]] = None,
) -> Dict[str, str]:
    """
    Validate several fields at once.

    Each field is checked against the context overlaid with `values`, so
    cross-field rules inside the batch see each other's new values.

    Returns:
        Mapping of invalid field name to message; valid fields are absent.
    """
    merged = dict(context or {})
    merged.update(values)

    errors = {}
    for field, value in values.items():
        result = validate_field(field, value, merged)
        if not result.is_valid:
            errors[field] = result.message
    return errors


def dependents_of(field: str) -> tuple:
    """Fields that must be re-validated when `field` changes."""
    return FIELD_DEPENDENTS.get(field, ())
