"""
Serializers for the core calculation and validation endpoints.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.core.validators import RULES


class CalculateEMISerializer(serializers.Serializer):
    """Serializer for EMI calculation request."""

    loan_amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=True,
        help_text="Loan principal.",
    )
    tenure_years = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=True,
        help_text="Loan tenure in years.",
    )
    annual_interest_rate_pct = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=True,
        help_text="Annual interest rate (%).",
    )


class EMIResponseSerializer(serializers.Serializer):
    """Serializer for EMI calculation response."""

    loan_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    tenure_years = serializers.DecimalField(max_digits=5, decimal_places=2)
    annual_interest_rate_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    monthly_emi = serializers.IntegerField()


class ValidateFieldSerializer(serializers.Serializer):
    """Serializer for a single-field validation request."""

    field = serializers.ChoiceField(choices=sorted(RULES))
    value = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        required=True,
    )
    context = serializers.DictField(required=False, default=dict)


class ValidateFieldResponseSerializer(serializers.Serializer):
    """Serializer for a single-field validation response."""

    field = serializers.CharField()
    valid = serializers.BooleanField()
    message = serializers.CharField(allow_null=True)
