"""
Onboarding wizard controller.

Holds the in-progress draft of the current step, validates every field
change against the current context, gates forward navigation on a
freshly computed error map, and merges a step into the FinancialProfile
only after the gateway has saved it.

Saving is modelled as a request/response pair carrying a version token:
begin_advance() hands out a Submission, complete_advance() applies it
only if no newer submission or back-navigation has superseded it.
advance() runs the whole round trip synchronously.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from apps.core import validators as v
from apps.core.exceptions import PersistenceFailure, WizardStateError
from apps.core.utils import calculate_monthly_emi, round_emi_for_display
from apps.onboarding.defaults import (
    DEFAULT_GOALS,
    DEFAULT_INVESTMENT_ALLOCATION,
    DEFAULT_MONTHLY_INVESTMENT,
    DEFAULT_PLAN,
)
from apps.onboarding.gateway import ProfileGateway
from apps.onboarding.profile import EMIInput, FinancialProfile
from apps.onboarding.steps import (
    EMI_FIELDS,
    FIRST_STEP,
    LAST_STEP,
    STEP_FIELDS,
    WizardStep,
    required_fields,
)

logger = logging.getLogger(__name__)

ADVANCED = 'advanced'
BLOCKED = 'blocked'
FAILED = 'failed'
STALE = 'stale'
COMPLETED = 'completed'

GOALS_KEY = 'goals'
PLAN_KEY = 'plan'


@dataclass(frozen=True)
class Submission:
    """A validated step payload waiting for the gateway's answer."""

    step: WizardStep
    version: int
    user_id: Optional[int]
    payload: dict


@dataclass
class StepOutcome:
    """Result of trying to leave a step."""

    status: str
    step: WizardStep
    errors: dict = field(default_factory=dict)
    notice: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (ADVANCED, COMPLETED)


def _goals_error(goals) -> Optional[str]:
    if not goals:
        return 'Add at least one goal'
    for goal in goals:
        if v.is_blank(goal.get('name')):
            return 'Every goal needs a name'
        for key in ('amount', 'inflation_adjusted'):
            amount = v.parse_number(goal.get(key))
            if amount is None or amount <= 0:
                return 'Goal amounts must be greater than 0'
            if amount > v.MAX_AMOUNT:
                return 'Goal amounts are too large'
    return None


def _plan_error(plan) -> Optional[str]:
    if not plan:
        return 'A plan is required'
    amount = v.parse_number(plan.get('monthly_investment'))
    if amount is None or amount <= 0:
        return 'Monthly investment must be greater than 0'
    return None


def resume_step(profile: FinancialProfile) -> WizardStep:
    """First step whose section of the profile is still missing."""
    if not profile.is_registered:
        return WizardStep.REGISTRATION
    if profile.retirement_age is None:
        return WizardStep.CLIENT_DETAILS
    if profile.monthly_income is None:
        return WizardStep.RISK_ASSESSMENT
    if not profile.goals:
        return WizardStep.GOALS
    if profile.plan is None:
        return WizardStep.PLAN
    return WizardStep.INVEST


class WizardController:
    """
    Drives one client through the onboarding steps.

    The error map is owned by the controller and rebuilt per field; the
    validators themselves keep no state. Drafts are kept per step, so
    going back and forward again loses nothing.
    """

    def __init__(self, gateway: ProfileGateway, profile: FinancialProfile = None):
        self.gateway = gateway
        self.profile = profile if profile is not None else FinancialProfile()
        self.current_step = resume_step(self.profile)
        self.completed = False
        self.notice = None
        self._version = 0
        self._emi_enabled = self.profile.emi is not None
        self._drafts = {step: self._initial_draft(step) for step in WizardStep}
        self._errors = {step: {} for step in WizardStep}

    # -- state --------------------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    @property
    def draft(self) -> dict:
        return dict(self._drafts[self.current_step])

    @property
    def errors(self) -> dict:
        return dict(self._errors[self.current_step])

    @property
    def emi_enabled(self) -> bool:
        return self._emi_enabled

    def context(self) -> dict:
        """Profile values overlaid with the current step's draft."""
        context = self.profile.as_context()
        context.update(self._drafts[self.current_step])
        return context

    def _initial_draft(self, step):
        profile = self.profile

        if step is WizardStep.GOALS:
            return {GOALS_KEY: copy.deepcopy(profile.goals or DEFAULT_GOALS)}
        if step is WizardStep.PLAN:
            return {PLAN_KEY: copy.deepcopy(profile.plan or DEFAULT_PLAN)}
        if step is WizardStep.INVEST:
            investment = profile.investment or {}
            return {
                v.PAYMENT_METHOD: investment.get('payment_method', ''),
                v.MONTHLY_AMOUNT: str(
                    investment.get('monthly_amount', DEFAULT_MONTHLY_INVESTMENT)
                ),
            }

        context = profile.as_context()
        return {
            name: str(context[name])
            for name in self._form_fields(step)
            if context.get(name) is not None
        }

    def _form_fields(self, step):
        fields = STEP_FIELDS[step]
        if step is WizardStep.RISK_ASSESSMENT:
            fields = fields + EMI_FIELDS
        return fields

    # -- editing ------------------------------------------------------

    def _check_editable(self):
        if self.completed:
            raise WizardStateError("The wizard is already complete")
        if self.current_step is WizardStep.REGISTRATION and self.profile.is_registered:
            raise WizardStateError("Registration details cannot be changed")

    def set_field(self, name: str, value) -> v.ValidationResult:
        """
        Record a new raw value for a field of the current step.

        The field is validated against the current context; fields that
        depend on it and already hold a value are validated again.
        """
        self._check_editable()
        if name not in self._form_fields(self.current_step):
            raise WizardStateError(
                f"{name} is not a field of {self.current_step.label}"
            )
        if name in EMI_FIELDS and not self._emi_enabled:
            raise WizardStateError("Enable the EMI form before entering a loan")

        draft = self._drafts[self.current_step]
        draft[name] = value

        context = self.context()
        result = v.validate_field(name, value, context)
        self._record(name, result)

        for dependent in v.dependents_of(name):
            if dependent in draft:
                self._record(
                    dependent,
                    v.validate_field(dependent, draft[dependent], context),
                )

        return result

    def touch(self, name: str) -> v.ValidationResult:
        """Re-validate a field's current value, e.g. when it loses focus."""
        return self.set_field(name, self._drafts[self.current_step].get(name, ''))

    def _record(self, name, result):
        errors = self._errors[self.current_step]
        if result.is_valid:
            errors.pop(name, None)
        else:
            errors[name] = result.message

    def set_emi_enabled(self, enabled: bool) -> None:
        """Show or hide the existing-EMI sub-form on the risk step."""
        if self.current_step is not WizardStep.RISK_ASSESSMENT:
            raise WizardStateError("The EMI form belongs to the risk assessment")
        self._emi_enabled = bool(enabled)
        if not self._emi_enabled:
            errors = self._errors[self.current_step]
            for name in EMI_FIELDS:
                errors.pop(name, None)

    def emi_preview(self) -> int:
        """Monthly EMI for the loan in the draft, 0 while undefined."""
        draft = self._drafts[WizardStep.RISK_ASSESSMENT]
        if not self._emi_enabled:
            return 0
        return round_emi_for_display(calculate_monthly_emi(
            draft.get(v.LOAN_AMOUNT),
            draft.get(v.TENURE_YEARS),
            draft.get(v.ANNUAL_INTEREST_RATE_PCT),
        ))

    def set_goals(self, goals) -> Optional[str]:
        """Replace the goals draft; returns the error message, if any."""
        self._check_editable()
        if self.current_step is not WizardStep.GOALS:
            raise WizardStateError("Goals can only be edited on the goals step")
        self._drafts[WizardStep.GOALS][GOALS_KEY] = copy.deepcopy(list(goals))
        return self._record_structured(GOALS_KEY, _goals_error(goals))

    def set_plan(self, plan) -> Optional[str]:
        """Replace the plan draft; returns the error message, if any."""
        self._check_editable()
        if self.current_step is not WizardStep.PLAN:
            raise WizardStateError("The plan can only be edited on the plan step")
        self._drafts[WizardStep.PLAN][PLAN_KEY] = copy.deepcopy(dict(plan))
        return self._record_structured(PLAN_KEY, _plan_error(plan))

    def _record_structured(self, key, message):
        if message is None:
            self._record(key, v.VALID)
        else:
            self._record(key, v.ValidationResult.invalid(message))
        return message

    # -- gating -------------------------------------------------------

    def _compute_errors(self, step) -> dict:
        draft = self._drafts[step]

        if step is WizardStep.REGISTRATION and self.profile.is_registered:
            return {}

        if step is WizardStep.GOALS:
            message = _goals_error(draft.get(GOALS_KEY))
            return {GOALS_KEY: message} if message else {}
        if step is WizardStep.PLAN:
            message = _plan_error(draft.get(PLAN_KEY))
            return {PLAN_KEY: message} if message else {}

        values = {
            name: draft.get(name, '')
            for name in required_fields(step, self._emi_enabled)
        }
        context = self.profile.as_context()
        context.update(draft)
        return v.validate_fields(values, context)

    def validate_step(self) -> dict:
        """Rebuild the error map of the current step from its draft."""
        errors = self._compute_errors(self.current_step)
        self._errors[self.current_step] = dict(errors)
        return dict(errors)

    def can_advance(self) -> bool:
        """True when every required field of the step is filled in and valid."""
        if self.completed:
            return False
        return not self._compute_errors(self.current_step)

    # -- navigation ---------------------------------------------------

    def _payload(self, step) -> dict:
        draft = self._drafts[step]

        if step is WizardStep.REGISTRATION:
            if self.profile.is_registered:
                return {}
            return {
                'full_name': draft[v.FULL_NAME].strip(),
                'email': draft[v.EMAIL].strip().lower(),
                'mobile': v.NON_DIGIT_RE.sub('', str(draft[v.MOBILE])),
                'age': int(v.parse_number(draft[v.AGE])),
                'password': draft[v.PASSWORD],
            }
        if step is WizardStep.CLIENT_DETAILS:
            return {
                'retirement_age': int(v.parse_number(draft[v.RETIREMENT_AGE])),
                'life_expectancy': int(v.parse_number(draft[v.LIFE_EXPECTANCY])),
            }
        if step is WizardStep.RISK_ASSESSMENT:
            payload = {
                name: v.parse_number(draft[name])
                for name in STEP_FIELDS[step]
            }
            payload['emi'] = None
            if self._emi_enabled:
                payload['emi'] = EMIInput(
                    loan_amount=v.parse_number(draft[v.LOAN_AMOUNT]),
                    tenure_years=v.parse_number(draft[v.TENURE_YEARS]),
                    annual_interest_rate_pct=v.parse_number(
                        draft[v.ANNUAL_INTEREST_RATE_PCT]
                    ),
                )
            return payload
        if step is WizardStep.GOALS:
            return {'goals': copy.deepcopy(draft[GOALS_KEY])}
        if step is WizardStep.PLAN:
            return {'plan': copy.deepcopy(draft[PLAN_KEY])}
        return {
            'investment': {
                'payment_method': str(draft[v.PAYMENT_METHOD]).strip(),
                'monthly_amount': v.parse_number(draft[v.MONTHLY_AMOUNT]),
                'portfolio_allocation': copy.deepcopy(DEFAULT_INVESTMENT_ALLOCATION),
            },
        }

    def begin_advance(self) -> Union[Submission, StepOutcome]:
        """
        Validate the current step and prepare its payload for saving.

        Returns a blocked StepOutcome when the step has errors. Otherwise
        returns a Submission carrying a fresh version token; the profile
        is not touched until complete_advance().
        """
        if self.completed:
            raise WizardStateError("The wizard is already complete")

        step = self.current_step
        errors = self.validate_step()
        if errors:
            logger.debug("%s blocked by %d invalid fields", step.label, len(errors))
            return StepOutcome(BLOCKED, step, errors=errors)

        self._version += 1
        return Submission(
            step=step,
            version=self._version,
            user_id=self.profile.user_id,
            payload=self._payload(step),
        )

    def _is_current(self, submission: Submission) -> bool:
        return (
            submission.version == self._version
            and submission.step is self.current_step
            and not self.completed
        )

    def _stale(self, submission):
        logger.info(
            "Discarding response for %s (version %d, current %d)",
            submission.step.label,
            submission.version,
            self._version,
        )
        return StepOutcome(STALE, self.current_step)

    def complete_advance(self, submission: Submission, user_id=None) -> StepOutcome:
        """
        Apply a saved submission and move to the next step.

        A submission superseded by a later one, or by going back, is
        discarded without touching the profile.
        """
        if not self._is_current(submission):
            return self._stale(submission)

        step = submission.step
        registering = step is WizardStep.REGISTRATION and not self.profile.is_registered
        if registering and user_id is None:
            raise WizardStateError("Registration must yield a user id")

        values = dict(submission.payload)
        values.pop('password', None)

        self.profile.merge(values)
        if registering:
            self.profile.user_id = user_id
            registration = self._drafts[WizardStep.REGISTRATION]
            registration.pop(v.PASSWORD, None)
            registration.pop(v.CONFIRM_PASSWORD, None)
        self.notice = None

        if step is LAST_STEP:
            self.completed = True
            logger.info("Onboarding complete for user %s", self.profile.user_id)
            return StepOutcome(COMPLETED, step)

        self.current_step = step.next()
        logger.info(
            "User %s advanced from %s to %s",
            self.profile.user_id,
            step.label,
            self.current_step.label,
        )
        return StepOutcome(ADVANCED, self.current_step)

    def fail_advance(self, submission: Submission, error=None) -> StepOutcome:
        """Report a failed save; the draft stays as entered for a retry."""
        if not self._is_current(submission):
            return self._stale(submission)

        self.notice = f"Could not save {submission.step.label}. Please try again."
        logger.warning(
            "Saving %s for user %s failed: %s",
            submission.step.label,
            self.profile.user_id,
            error,
        )
        return StepOutcome(FAILED, submission.step, notice=self.notice)

    def advance(self) -> StepOutcome:
        """Validate, save through the gateway and move forward."""
        prepared = self.begin_advance()
        if isinstance(prepared, StepOutcome):
            return prepared

        if prepared.step is WizardStep.REGISTRATION and self.profile.is_registered:
            # Registration is immutable; revisiting it saves nothing.
            return self.complete_advance(prepared, self.profile.user_id)

        try:
            user_id = self.gateway.submit(
                prepared.step,
                prepared.user_id,
                prepared.payload,
            )
        except PersistenceFailure as exc:
            return self.fail_advance(prepared, exc)

        return self.complete_advance(prepared, user_id)

    def back(self) -> WizardStep:
        """
        Go one step back, keeping every draft.

        Supersedes any submission still waiting for a response.
        """
        if self.completed:
            raise WizardStateError("The wizard is already complete")
        previous = self.current_step.previous()
        if previous is None:
            raise WizardStateError(f"Cannot go back from {FIRST_STEP.label}")

        self._version += 1
        self.notice = None
        logger.debug(
            "User %s went back from %s to %s",
            self.profile.user_id,
            self.current_step.label,
            previous.label,
        )
        self.current_step = previous
        return previous
