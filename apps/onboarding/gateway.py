"""
Persistence gateways used by the wizard at each step boundary.

A gateway saves one section of the client record per call. Every update
replaces the whole section; callers always send the complete sub-object.
Failures surface as PersistenceFailure so the wizard can offer a retry.
"""

import logging
from abc import ABC, abstractmethod

from django.db import DatabaseError
from rest_framework.exceptions import APIException

from apps.core.exceptions import PersistenceFailure
from apps.onboarding.steps import WizardStep

logger = logging.getLogger(__name__)


class ProfileGateway(ABC):
    """
    Interface between the wizard and wherever client records live.

    Subclasses implement the six section operations; submit() routes a
    wizard step's payload to the matching one.
    """

    @abstractmethod
    def create_user(self, full_name, email, mobile, age, password) -> int:
        pass

    @abstractmethod
    def update_client_details(self, user_id, retirement_age, life_expectancy):
        pass

    @abstractmethod
    def update_risk_assessment(
        self,
        user_id,
        monthly_income,
        annual_income_growth_pct,
        monthly_expenses,
        annual_expense_growth_pct,
        inflation_rate_pct,
        emi=None,
    ):
        pass

    @abstractmethod
    def update_goals(self, user_id, goals):
        pass

    @abstractmethod
    def update_plan(self, user_id, plan):
        pass

    @abstractmethod
    def update_investment(self, user_id, investment):
        pass

    def submit(self, step: WizardStep, user_id, payload: dict) -> int:
        """
        Persist the payload of a wizard step.

        Returns:
            The user id: newly assigned for REGISTRATION, otherwise the
            one passed in.
        """
        if step is WizardStep.REGISTRATION:
            return self.create_user(**payload)

        if user_id is None:
            raise PersistenceFailure(
                f"Cannot save {step.label} before registration.",
                step=step,
            )

        if step is WizardStep.CLIENT_DETAILS:
            self.update_client_details(user_id, **payload)
        elif step is WizardStep.RISK_ASSESSMENT:
            self.update_risk_assessment(user_id, **payload)
        elif step is WizardStep.GOALS:
            self.update_goals(user_id, payload['goals'])
        elif step is WizardStep.PLAN:
            self.update_plan(user_id, payload['plan'])
        elif step is WizardStep.INVEST:
            self.update_investment(user_id, payload['investment'])
        return user_id


class ServiceProfileGateway(ProfileGateway):
    """
    Gateway that saves straight through the clients service layer.

    Database errors, API errors raised by the service (unknown client,
    duplicate email) and decimal errors from values outside the column
    limits are reported as PersistenceFailure.
    """

    def _call(self, step, operation, *args):
        # Deferred until the app registry is ready
        from apps.clients.services import ClientService

        try:
            return getattr(ClientService, operation)(*args)
        except (DatabaseError, APIException, ArithmeticError) as exc:
            logger.warning("Saving %s failed: %s", step.label, exc)
            raise PersistenceFailure(str(exc), step=step) from exc

    def create_user(self, full_name, email, mobile, age, password) -> int:
        client = self._call(WizardStep.REGISTRATION, 'register', {
            'full_name': full_name,
            'email': email,
            'mobile': mobile,
            'age': age,
            'password': password,
        })
        return client.pk

    def update_client_details(self, user_id, retirement_age, life_expectancy):
        self._call(WizardStep.CLIENT_DETAILS, 'update_client_details', user_id, {
            'retirement_age': retirement_age,
            'life_expectancy': life_expectancy,
        })

    def update_risk_assessment(
        self,
        user_id,
        monthly_income,
        annual_income_growth_pct,
        monthly_expenses,
        annual_expense_growth_pct,
        inflation_rate_pct,
        emi=None,
    ):
        emi_details = None
        if emi is not None:
            emi_details = {
                'loan_amount': emi.loan_amount,
                'tenure_years': emi.tenure_years,
                'annual_interest_rate_pct': emi.annual_interest_rate_pct,
            }
        self._call(WizardStep.RISK_ASSESSMENT, 'update_risk_assessment', user_id, {
            'monthly_income': monthly_income,
            'annual_income_growth_pct': annual_income_growth_pct,
            'monthly_expenses': monthly_expenses,
            'annual_expense_growth_pct': annual_expense_growth_pct,
            'inflation_rate_pct': inflation_rate_pct,
            'emi_details': emi_details,
        })

    def update_goals(self, user_id, goals):
        self._call(WizardStep.GOALS, 'update_goals', user_id, goals)

    def update_plan(self, user_id, plan):
        self._call(WizardStep.PLAN, 'update_plan', user_id, plan)

    def update_investment(self, user_id, investment):
        self._call(WizardStep.INVEST, 'update_investment', user_id, investment)
