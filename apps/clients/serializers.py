"""
Client serializers for the onboarding backend.

Request serializers delegate their business rules to
apps.core.validators, so the API applies the same field rules as the
wizard on top of the column limits of the client record.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.core import validators as v


def _raise_field_errors(values: dict, context: dict = None):
    errors = v.validate_fields(values, context)
    if errors:
        raise serializers.ValidationError(
            {field: [message] for field, message in errors.items()}
        )


class RegisterClientSerializer(serializers.Serializer):
    """Serializer for client registration request."""

    full_name = serializers.CharField(
        max_length=200,
        required=True,
        help_text="Client's full name.",
    )
    email = serializers.EmailField(
        required=True,
        help_text="Client's email address.",
    )
    mobile = serializers.CharField(
        max_length=20,
        required=True,
        help_text="Client's 10-digit mobile number.",
    )
    age = serializers.IntegerField(
        min_value=v.MIN_AGE,
        max_value=v.MAX_AGE,
        required=True,
        help_text="Client's age (18-100).",
    )
    password = serializers.CharField(
        write_only=True,
        required=True,
        trim_whitespace=False,
        help_text="Password (at least 8 characters).",
    )

    def validate_mobile(self, value):
        """Keep only the digits of the mobile number."""
        return v.NON_DIGIT_RE.sub('', value)

    def validate(self, attrs):
        _raise_field_errors({
            v.FULL_NAME: attrs['full_name'],
            v.EMAIL: attrs['email'],
            v.MOBILE: attrs['mobile'],
            v.AGE: attrs['age'],
            v.PASSWORD: attrs['password'],
        })
        return attrs


class LoginSerializer(serializers.Serializer):
    """Serializer for login request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        trim_whitespace=False,
    )


class ClientDetailsSerializer(serializers.Serializer):
    """
    Serializer for the client-details step.

    Expects the stored client in context['client'] so that the
    retirement age can be checked against the registered age.
    """

    retirement_age = serializers.IntegerField(required=True)
    life_expectancy = serializers.IntegerField(required=True)

    def validate(self, attrs):
        client = self.context['client']
        _raise_field_errors(
            {
                v.RETIREMENT_AGE: attrs['retirement_age'],
                v.LIFE_EXPECTANCY: attrs['life_expectancy'],
            },
            {v.AGE: client.age},
        )
        return attrs


class EMIDetailsSerializer(serializers.Serializer):
    """Existing loan entered on the risk-assessment step."""

    loan_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    tenure_years = serializers.DecimalField(max_digits=5, decimal_places=2)
    annual_interest_rate_pct = serializers.DecimalField(max_digits=5, decimal_places=2)

    def validate(self, attrs):
        _raise_field_errors(dict(attrs))
        return attrs


class RiskAssessmentSerializer(serializers.Serializer):
    """Serializer for the risk-assessment step."""

    monthly_income = serializers.DecimalField(max_digits=15, decimal_places=2)
    annual_income_growth_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    monthly_expenses = serializers.DecimalField(max_digits=15, decimal_places=2)
    annual_expense_growth_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    inflation_rate_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    emi_details = EMIDetailsSerializer(required=False, allow_null=True)

    def validate(self, attrs):
        _raise_field_errors({
            field: attrs[field]
            for field in (
                v.MONTHLY_INCOME,
                v.ANNUAL_INCOME_GROWTH_PCT,
                v.MONTHLY_EXPENSES,
                v.ANNUAL_EXPENSE_GROWTH_PCT,
                v.INFLATION_RATE_PCT,
            )
        })
        return attrs


class GoalSerializer(serializers.Serializer):
    """A single financial goal."""

    name = serializers.CharField(max_length=100)
    amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
    )
    inflation_adjusted = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
    )


class UpdateGoalsSerializer(serializers.Serializer):
    """Serializer for the goals step: the complete list of goals."""

    goals = GoalSerializer(many=True, allow_empty=False)


class AllocationSerializer(serializers.Serializer):
    """One line of a portfolio allocation."""

    name = serializers.CharField(max_length=100)
    amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0'),
    )


class PlanSerializer(serializers.Serializer):
    """Financial plan section."""

    RISK_LEVELS = ('Conservative', 'Moderate', 'Aggressive')

    monthly_investment = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
    )
    portfolio_allocation = AllocationSerializer(many=True)
    expected_returns = serializers.CharField(max_length=50)
    risk_level = serializers.ChoiceField(choices=RISK_LEVELS)


class UpdatePlanSerializer(serializers.Serializer):
    """Serializer for the plan step."""

    plan = PlanSerializer()


class InvestmentSerializer(serializers.Serializer):
    """Investment set-up section."""

    payment_method = serializers.ChoiceField(choices=v.PAYMENT_METHODS)
    monthly_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    portfolio_allocation = AllocationSerializer(many=True)

    def validate(self, attrs):
        _raise_field_errors({
            v.PAYMENT_METHOD: attrs['payment_method'],
            v.MONTHLY_AMOUNT: attrs['monthly_amount'],
        })
        return attrs


class UpdateInvestmentSerializer(serializers.Serializer):
    """Serializer for the investment step."""

    investment = InvestmentSerializer()


class ClientSummarySerializer(serializers.Serializer):
    """Registration details returned after register and login."""

    id = serializers.IntegerField()
    full_name = serializers.CharField()
    email = serializers.EmailField()
    mobile = serializers.CharField()
    age = serializers.IntegerField()


class GoalResponseSerializer(serializers.Serializer):
    """Stored goal as returned in the profile."""

    name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    inflation_adjusted = serializers.DecimalField(max_digits=15, decimal_places=2)


class ClientProfileSerializer(ClientSummarySerializer):
    """Full accumulated profile of a client."""

    retirement_age = serializers.IntegerField(allow_null=True)
    life_expectancy = serializers.IntegerField(allow_null=True)
    risk_assessment = serializers.SerializerMethodField()
    goals = GoalResponseSerializer(many=True)
    plan = serializers.JSONField(allow_null=True)
    investment = serializers.JSONField(allow_null=True)

    def get_risk_assessment(self, client):
        section = client.risk_assessment
        if section is None:
            return None
        data = {
            key: str(value)
            for key, value in section.items()
            if key != 'emi_details'
        }
        emi_details = section['emi_details']
        if emi_details is not None:
            emi_details = {
                'loan_amount': str(emi_details['loan_amount']),
                'tenure_years': str(emi_details['tenure_years']),
                'annual_interest_rate_pct': str(emi_details['annual_interest_rate_pct']),
                'monthly_emi': emi_details['monthly_emi'],
            }
        data['emi_details'] = emi_details
        return data
