"""
Core utility functions for the onboarding backend.

Contains financial calculation helpers used across the application.
All financial calculations use Python's Decimal for precision.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Optional

# Set high precision for intermediate financial calculations
getcontext().prec = 28

ONE = Decimal('1')
MONTHS_PER_YEAR = Decimal('12')
HUNDRED = Decimal('100')

# Digits carried inside the amortization formula. Covers the cut-offs
# below with more than 28 significant digits to spare.
EMI_WORKING_PRECISION = 100
# Below this monthly rate ln(1 + r) is r - r²/2 to working precision
SMALL_RATE = Decimal('1e-30')
# Below this ln((1+r)^n) the EMI equals P / n to 28 digits
NEGLIGIBLE_GROWTH = Decimal('1e-40')


def to_decimal(value) -> Optional[Decimal]:
    """
    Coerce a raw input (str, int, float or Decimal) to a finite Decimal.

    Returns None for None, blank strings, unparseable text, booleans,
    and NaN/Infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def _log1p(x: Decimal) -> Decimal:
    """ln(1 + x) for x >= 0, without losing a tiny x to rounding of 1 + x."""
    if x < SMALL_RATE:
        return x - x * x / 2
    return (ONE + x).ln()


def calculate_monthly_emi(principal, tenure_years, annual_rate_pct) -> Optional[Decimal]:
    """
    Calculate EMI using the amortization formula with Decimal precision.

    EMI = P × r × (1+r)^n / ((1+r)^n - 1) = P × r / (1 - (1+r)^-n)

    Where:
        P = principal (loan amount)
        r = monthly interest rate (annual_rate_pct / 12 / 100)
        n = tenure in months (tenure_years * 12)

    A zero interest rate falls back to straight-line repayment (P / n).
    The formula is evaluated at EMI_WORKING_PRECISION digits and the
    result rounded to the module precision, so it stays finite and
    non-decreasing in the rate for tiny rates and very long tenures.

    Args:
        principal: Loan amount. Accepts Decimal, float, int or numeric str.
        tenure_years: Loan tenure in years (fractional years allowed).
        annual_rate_pct: Annual interest rate as percentage (e.g., 8.5).

    Returns:
        The unrounded monthly EMI as Decimal, or None when the inputs
        do not describe a loan (non-positive principal or tenure,
        negative rate, unparseable or non-finite values).
    """
    principal = to_decimal(principal)
    tenure_years = to_decimal(tenure_years)
    annual_rate_pct = to_decimal(annual_rate_pct)

    if principal is None or tenure_years is None or annual_rate_pct is None:
        return None
    if principal <= 0 or tenure_years <= 0 or annual_rate_pct < 0:
        return None

    try:
        months = tenure_years * MONTHS_PER_YEAR

        # Handle 0% interest rate edge case
        if annual_rate_pct == 0:
            return principal / months

        with localcontext() as ctx:
            ctx.prec = EMI_WORKING_PRECISION
            monthly_rate = annual_rate_pct / MONTHS_PER_YEAR / HUNDRED
            # ln((1+r)^n)
            growth = months * _log1p(monthly_rate)
            if growth < NEGLIGIBLE_GROWTH:
                emi = principal / months
            else:
                emi = principal * monthly_rate / (ONE - (-growth).exp())
        emi = +emi
    except (InvalidOperation, ArithmeticError):
        return None

    if not emi.is_finite():
        return None
    return emi


def round_emi_for_display(emi: Optional[Decimal]) -> int:
    """
    Round an EMI to the nearest whole currency unit (half rounds up).

    An undefined EMI (None) displays as 0.
    """
    if emi is None:
        return 0
    return int(emi.quantize(ONE, rounding=ROUND_HALF_UP))
