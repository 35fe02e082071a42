"""
Client service layer.

All client-related business logic resides here.
Views delegate to this service — no business logic in views.

Each update_* method replaces one whole section of the client record,
mirroring one step of the onboarding wizard.
"""

import logging

from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction

from apps.core.exceptions import (
    ClientNotFoundError,
    DuplicateEmailError,
    InvalidCredentialsError,
)
from apps.core.utils import calculate_monthly_emi, round_emi_for_display
from apps.clients.models import Client, Goal

logger = logging.getLogger(__name__)


class ClientService:
    """Service class for client-related operations."""

    @staticmethod
    def register(validated_data: dict) -> Client:
        """
        Register a new client.

        The password is stored as a salted one-way hash.

        Args:
            validated_data: Dict with full_name, email, mobile, age, password.

        Returns:
            The newly created Client instance.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        email = validated_data['email'].strip().lower()

        if Client.objects.filter(email__iexact=email).exists():
            raise DuplicateEmailError()

        try:
            client = Client.objects.create(
                full_name=validated_data['full_name'].strip(),
                email=email,
                mobile=validated_data['mobile'],
                age=validated_data['age'],
                password=make_password(validated_data['password']),
            )
        except IntegrityError:
            raise DuplicateEmailError()

        logger.info(
            "Registered client %s (ID: %d)",
            client.full_name,
            client.pk,
        )

        return client

    @staticmethod
    def authenticate(email: str, password: str) -> Client:
        """
        Look up a client by email and verify the password.

        Raises:
            InvalidCredentialsError: If no client matches or the password is wrong.
        """
        client = Client.objects.filter(email__iexact=email.strip()).first()
        if client is None or not check_password(password, client.password):
            logger.warning("Failed login attempt for %s", email)
            raise InvalidCredentialsError()
        return client

    @staticmethod
    def get_client(client_id: int) -> Client:
        """
        Retrieve a client by ID.

        Raises:
            ClientNotFoundError: If client not found.
        """
        try:
            return Client.objects.get(pk=client_id)
        except Client.DoesNotExist:
            raise ClientNotFoundError(
                detail=f"Client with ID {client_id} not found."
            )

    @classmethod
    def update_client_details(cls, client_id: int, validated_data: dict) -> Client:
        """Replace the client-details section (retirement age, life expectancy)."""
        client = cls.get_client(client_id)
        client.retirement_age = validated_data['retirement_age']
        client.life_expectancy = validated_data['life_expectancy']
        client.save(update_fields=['retirement_age', 'life_expectancy', 'updated_at'])

        logger.info(
            "Client %d: client details updated (retirement_age=%d, life_expectancy=%d)",
            client.pk,
            client.retirement_age,
            client.life_expectancy,
        )
        return client

    @classmethod
    def update_risk_assessment(cls, client_id: int, validated_data: dict) -> Client:
        """
        Replace the risk-assessment section.

        When emi_details is present the monthly EMI is computed here and
        stored rounded to the nearest rupee; when absent, any previously
        stored EMI is cleared.
        """
        client = cls.get_client(client_id)

        client.monthly_income = validated_data['monthly_income']
        client.annual_income_growth_pct = validated_data['annual_income_growth_pct']
        client.monthly_expenses = validated_data['monthly_expenses']
        client.annual_expense_growth_pct = validated_data['annual_expense_growth_pct']
        client.inflation_rate_pct = validated_data['inflation_rate_pct']

        emi_details = validated_data.get('emi_details')
        if emi_details:
            client.emi_loan_amount = emi_details['loan_amount']
            client.emi_tenure_years = emi_details['tenure_years']
            client.emi_interest_rate_pct = emi_details['annual_interest_rate_pct']
            client.emi_monthly_amount = round_emi_for_display(
                calculate_monthly_emi(
                    emi_details['loan_amount'],
                    emi_details['tenure_years'],
                    emi_details['annual_interest_rate_pct'],
                )
            )
        else:
            client.emi_loan_amount = None
            client.emi_tenure_years = None
            client.emi_interest_rate_pct = None
            client.emi_monthly_amount = None

        client.save()

        logger.info(
            "Client %d: risk assessment updated (income=%s, expenses=%s, emi=%s)",
            client.pk,
            client.monthly_income,
            client.monthly_expenses,
            client.emi_monthly_amount,
        )
        return client

    @classmethod
    @transaction.atomic
    def update_goals(cls, client_id: int, goals: list) -> Client:
        """Replace all of the client's goals with the given list."""
        client = cls.get_client(client_id)

        Goal.objects.filter(client=client).delete()
        Goal.objects.bulk_create([
            Goal(
                client=client,
                name=goal['name'],
                amount=goal['amount'],
                inflation_adjusted=goal['inflation_adjusted'],
                position=position,
            )
            for position, goal in enumerate(goals)
        ])

        logger.info("Client %d: %d goals saved", client.pk, len(goals))
        return client

    @classmethod
    def update_plan(cls, client_id: int, plan: dict) -> Client:
        """Replace the financial-plan section."""
        client = cls.get_client(client_id)
        client.plan = plan
        client.save(update_fields=['plan', 'updated_at'])
        client.refresh_from_db(fields=['plan'])

        logger.info(
            "Client %d: plan updated (monthly_investment=%s, risk_level=%s)",
            client.pk,
            plan.get('monthly_investment'),
            plan.get('risk_level'),
        )
        return client

    @classmethod
    def update_investment(cls, client_id: int, investment: dict) -> Client:
        """Replace the investment set-up section."""
        client = cls.get_client(client_id)
        client.investment = investment
        client.save(update_fields=['investment', 'updated_at'])
        client.refresh_from_db(fields=['investment'])

        logger.info(
            "Client %d: investment updated (method=%s, monthly_amount=%s)",
            client.pk,
            investment.get('payment_method'),
            investment.get('monthly_amount'),
        )
        return client
