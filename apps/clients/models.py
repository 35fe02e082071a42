"""
Client and Goal models for the onboarding backend.
"""

from decimal import Decimal

from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Client(models.Model):
    """
    Represents a client going through the financial-planning onboarding.

    Each wizard step owns one section of this record: registration,
    client details, risk assessment (with an optional existing-EMI
    sub-document), plan and investment. Goals live in their own table.
    """

    # Registration
    full_name = models.CharField(
        max_length=200,
        help_text="Client's full name."
    )
    email = models.EmailField(
        unique=True,
        help_text="Client's email address (login identifier)."
    )
    mobile = models.CharField(
        max_length=20,
        help_text="Client's 10-digit mobile number."
    )
    age = models.PositiveIntegerField(
        validators=[MinValueValidator(18), MaxValueValidator(100)],
        help_text="Client's age at registration (18-100)."
    )
    password = models.CharField(
        max_length=128,
        help_text="Salted password hash."
    )

    # Client details
    retirement_age = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(100)],
        help_text="Expected retirement age."
    )
    life_expectancy = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(120)],
        help_text="Expected life expectancy."
    )

    # Risk assessment
    monthly_income = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Monthly income in INR.",
    )
    annual_income_growth_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text="Expected annual income growth (percentage).",
    )
    monthly_expenses = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Monthly expenses in INR.",
    )
    annual_expense_growth_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text="Expected annual expense growth (percentage).",
    )
    inflation_rate_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text="Expected inflation rate (percentage).",
    )

    # Existing EMI (optional part of the risk assessment)
    emi_loan_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Outstanding loan principal.",
    )
    emi_tenure_years = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Loan tenure in years.",
    )
    emi_interest_rate_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Annual loan interest rate (percentage).",
    )
    emi_monthly_amount = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Monthly EMI, rounded to the nearest rupee.",
    )

    plan = models.JSONField(
        encoder=DjangoJSONEncoder,
        null=True,
        blank=True,
        help_text="Financial plan section as last submitted.",
    )
    investment = models.JSONField(
        encoder=DjangoJSONEncoder,
        null=True,
        blank=True,
        help_text="Investment set-up section as last submitted.",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.full_name} (ID: {self.pk})"

    @property
    def has_emi(self):
        """Whether the client declared an existing EMI."""
        return self.emi_loan_amount is not None

    @property
    def risk_assessment(self):
        """Risk-assessment section as a dict, or None if not submitted."""
        if self.monthly_income is None:
            return None
        emi_details = None
        if self.has_emi:
            emi_details = {
                'loan_amount': self.emi_loan_amount,
                'tenure_years': self.emi_tenure_years,
                'annual_interest_rate_pct': self.emi_interest_rate_pct,
                'monthly_emi': self.emi_monthly_amount,
            }
        return {
            'monthly_income': self.monthly_income,
            'annual_income_growth_pct': self.annual_income_growth_pct,
            'monthly_expenses': self.monthly_expenses,
            'annual_expense_growth_pct': self.annual_expense_growth_pct,
            'inflation_rate_pct': self.inflation_rate_pct,
            'emi_details': emi_details,
        }


class Goal(models.Model):
    """A single financial goal attached to a client."""

    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.CASCADE,
        related_name='goals',
        db_index=True,
        help_text="The client who owns this goal."
    )
    name = models.CharField(
        max_length=100,
        help_text="Goal name (e.g. 'Child Education')."
    )
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Goal amount in today's money.",
    )
    inflation_adjusted = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Goal amount adjusted for inflation.",
    )
    position = models.PositiveIntegerField(
        default=0,
        help_text="Display order within the client's goals."
    )

    class Meta:
        db_table = 'goals'
        ordering = ['client', 'position']

    def __str__(self):
        return f"{self.name} - Client: {self.client_id} - Amount: {self.amount}"
