"""
Tests for the onboarding field validators.
"""

from django.test import SimpleTestCase

from apps.core import validators as v
from apps.core.validators import ValidationResult, validate_field, validate_fields


class ValidationResultTests(SimpleTestCase):

    def test_valid_result(self):
        result = ValidationResult.valid()
        self.assertTrue(result.is_valid)
        self.assertTrue(result)
        self.assertIsNone(result.message)

    def test_invalid_result(self):
        result = ValidationResult.invalid('Nope')
        self.assertFalse(result.is_valid)
        self.assertFalse(result)
        self.assertEqual(result.message, 'Nope')

    def test_unknown_field_is_valid(self):
        self.assertEqual(validate_field('favourite_colour', ''), v.VALID)

    def test_same_inputs_same_result(self):
        context = {v.AGE: '40'}
        first = validate_field(v.RETIREMENT_AGE, '35', context)
        second = validate_field(v.RETIREMENT_AGE, '35', context)
        self.assertEqual(first, second)


class RetirementAgeTests(SimpleTestCase):
    """Retirement age must be above the current age and at most 100."""

    def test_required(self):
        result = validate_field(v.RETIREMENT_AGE, '', {v.AGE: '30'})
        self.assertEqual(result.message, 'Retirement age is required')

    def test_whitespace_is_blank(self):
        result = validate_field(v.RETIREMENT_AGE, '   ', {v.AGE: '30'})
        self.assertEqual(result.message, 'Retirement age is required')

    def test_every_age_between_current_and_100_is_valid(self):
        for retirement_age in range(31, 101):
            result = validate_field(v.RETIREMENT_AGE, str(retirement_age), {v.AGE: '30'})
            self.assertTrue(result.is_valid, retirement_age)

    def test_equal_to_current_age(self):
        result = validate_field(v.RETIREMENT_AGE, '30', {v.AGE: '30'})
        self.assertEqual(result.message, 'Retirement age must be greater than current age')

    def test_below_current_age(self):
        result = validate_field(v.RETIREMENT_AGE, '25', {v.AGE: 30})
        self.assertEqual(result.message, 'Retirement age must be greater than current age')

    def test_above_100(self):
        result = validate_field(v.RETIREMENT_AGE, '101', {v.AGE: '30'})
        self.assertEqual(result.message, 'Retirement age must be 100 or less')

    def test_unparseable(self):
        result = validate_field(v.RETIREMENT_AGE, 'sixty', {v.AGE: '30'})
        self.assertEqual(result.message, 'Retirement age must be greater than current age')

    def test_fractional_is_unparseable(self):
        result = validate_field(v.RETIREMENT_AGE, '60.5', {v.AGE: '30'})
        self.assertEqual(result.message, 'Retirement age must be greater than current age')

    def test_missing_age_checks_upper_bound_only(self):
        self.assertTrue(validate_field(v.RETIREMENT_AGE, '20', {}).is_valid)
        self.assertEqual(
            validate_field(v.RETIREMENT_AGE, '101', {}).message,
            'Retirement age must be 100 or less',
        )


class LifeExpectancyTests(SimpleTestCase):
    """Life expectancy must be above the retirement age and at most 120."""

    def test_required(self):
        result = validate_field(v.LIFE_EXPECTANCY, '', {v.RETIREMENT_AGE: '60'})
        self.assertEqual(result.message, 'Life expectancy is required')

    def test_valid_range(self):
        for life_expectancy in (61, 85, 120):
            result = validate_field(
                v.LIFE_EXPECTANCY, str(life_expectancy), {v.RETIREMENT_AGE: '60'}
            )
            self.assertTrue(result.is_valid, life_expectancy)

    def test_equal_to_retirement_age(self):
        result = validate_field(v.LIFE_EXPECTANCY, '60', {v.RETIREMENT_AGE: '60'})
        self.assertEqual(result.message, 'Life expectancy must be greater than retirement age')

    def test_above_120(self):
        result = validate_field(v.LIFE_EXPECTANCY, '121', {v.RETIREMENT_AGE: '60'})
        self.assertEqual(result.message, 'Life expectancy must be 120 or less')

    def test_unparseable_retirement_age_checks_upper_bound_only(self):
        self.assertTrue(
            validate_field(v.LIFE_EXPECTANCY, '50', {v.RETIREMENT_AGE: 'abc'}).is_valid
        )


class IncomeAndExpensesTests(SimpleTestCase):

    def test_income_must_be_positive(self):
        for value in ('', '0', '-100', 'lots'):
            result = validate_field(v.MONTHLY_INCOME, value)
            self.assertEqual(result.message, 'Monthly income must be greater than 0')

    def test_income_valid(self):
        self.assertTrue(validate_field(v.MONTHLY_INCOME, '150000').is_valid)
        self.assertTrue(validate_field(v.MONTHLY_INCOME, '0.5').is_valid)

    def test_expenses_must_be_positive(self):
        result = validate_field(v.MONTHLY_EXPENSES, '0', {v.MONTHLY_INCOME: '50000'})
        self.assertEqual(result.message, 'Monthly expenses must be greater than 0')

    def test_expenses_equal_to_income(self):
        result = validate_field(v.MONTHLY_EXPENSES, '50000', {v.MONTHLY_INCOME: '50000'})
        self.assertEqual(result.message, 'Expenses cannot exceed income')

    def test_expenses_just_below_income(self):
        result = validate_field(v.MONTHLY_EXPENSES, '49999', {v.MONTHLY_INCOME: '50000'})
        self.assertTrue(result.is_valid)

    def test_expenses_above_income(self):
        result = validate_field(v.MONTHLY_EXPENSES, '60000', {v.MONTHLY_INCOME: '50000'})
        self.assertEqual(result.message, 'Expenses cannot exceed income')

    def test_amounts_limited_to_storable_values(self):
        self.assertTrue(validate_field(v.MONTHLY_INCOME, '9999999999999.99').is_valid)
        self.assertEqual(
            validate_field(v.MONTHLY_INCOME, '1e20').message,
            'Monthly income is too large',
        )
        self.assertEqual(
            validate_field(v.MONTHLY_EXPENSES, '1e20', {v.MONTHLY_INCOME: '1e21'}).message,
            'Monthly expenses are too large',
        )

    def test_expenses_without_income(self):
        result = validate_field(v.MONTHLY_EXPENSES, '100', {})
        self.assertEqual(result.message, 'Expenses cannot exceed income')


class PercentageTests(SimpleTestCase):

    def test_bounds_are_inclusive(self):
        for field in v.PERCENTAGE_FIELDS:
            for value in ('0', '100', '6.5'):
                self.assertTrue(validate_field(field, value).is_valid, (field, value))

    def test_out_of_range(self):
        for field in v.PERCENTAGE_FIELDS:
            for value in ('-1', '101', '100.01', 'abc'):
                result = validate_field(field, value)
                self.assertEqual(
                    result.message, 'Percentage must be between 0 and 100', (field, value)
                )

    def test_required(self):
        result = validate_field(v.INFLATION_RATE_PCT, '')
        self.assertEqual(result.message, 'This field is required')


class RegistrationFieldTests(SimpleTestCase):

    def test_full_name(self):
        self.assertEqual(validate_field(v.FULL_NAME, ' ').message, 'Full name is required')
        self.assertEqual(
            validate_field(v.FULL_NAME, 'A').message, 'Name must be at least 2 characters'
        )
        self.assertTrue(validate_field(v.FULL_NAME, 'Asha Rao').is_valid)

    def test_email(self):
        self.assertEqual(validate_field(v.EMAIL, '').message, 'Email is required')
        self.assertEqual(
            validate_field(v.EMAIL, 'asha@example').message,
            'Please enter a valid email address',
        )
        self.assertTrue(validate_field(v.EMAIL, 'asha@example.com').is_valid)

    def test_mobile(self):
        self.assertEqual(validate_field(v.MOBILE, '').message, 'Mobile number is required')
        self.assertEqual(
            validate_field(v.MOBILE, '12345').message,
            'Please enter a valid 10-digit mobile number',
        )
        self.assertTrue(validate_field(v.MOBILE, '98765 43210').is_valid)

    def test_age(self):
        self.assertEqual(validate_field(v.AGE, '').message, 'Age is required')
        for value in ('17', '101', '30.5', 'old'):
            self.assertEqual(
                validate_field(v.AGE, value).message, 'Age must be between 18 and 100', value
            )
        self.assertTrue(validate_field(v.AGE, '18').is_valid)
        self.assertTrue(validate_field(v.AGE, '100').is_valid)

    def test_password(self):
        self.assertEqual(validate_field(v.PASSWORD, '').message, 'Password is required')
        self.assertEqual(
            validate_field(v.PASSWORD, 'short').message,
            'Password must be at least 8 characters',
        )
        self.assertTrue(validate_field(v.PASSWORD, 'longenough').is_valid)

    def test_confirm_password(self):
        context = {v.PASSWORD: 'longenough'}
        self.assertEqual(
            validate_field(v.CONFIRM_PASSWORD, '', context).message,
            'Please confirm your password',
        )
        self.assertEqual(
            validate_field(v.CONFIRM_PASSWORD, 'different', context).message,
            'Passwords do not match',
        )
        self.assertTrue(validate_field(v.CONFIRM_PASSWORD, 'longenough', context).is_valid)


class EMIAndInvestmentFieldTests(SimpleTestCase):

    def test_loan_amount(self):
        self.assertEqual(
            validate_field(v.LOAN_AMOUNT, '0').message, 'Loan amount must be greater than 0'
        )
        self.assertTrue(validate_field(v.LOAN_AMOUNT, '1000000').is_valid)

    def test_tenure(self):
        self.assertEqual(
            validate_field(v.TENURE_YEARS, '').message, 'Tenure must be greater than 0'
        )
        self.assertTrue(validate_field(v.TENURE_YEARS, '2.5').is_valid)
        self.assertTrue(validate_field(v.TENURE_YEARS, '100').is_valid)
        self.assertEqual(
            validate_field(v.TENURE_YEARS, '1000').message,
            'Tenure must be 100 years or less',
        )

    def test_loan_and_investment_upper_bounds(self):
        self.assertEqual(
            validate_field(v.LOAN_AMOUNT, '1e15').message, 'Loan amount is too large'
        )
        self.assertEqual(
            validate_field(v.MONTHLY_AMOUNT, '1e15').message,
            'Investment amount is too large',
        )

    def test_interest_rate(self):
        self.assertEqual(
            validate_field(v.ANNUAL_INTEREST_RATE_PCT, '').message, 'This field is required'
        )
        self.assertEqual(
            validate_field(v.ANNUAL_INTEREST_RATE_PCT, '101').message,
            'Interest rate must be between 0 and 100',
        )
        self.assertTrue(validate_field(v.ANNUAL_INTEREST_RATE_PCT, '0').is_valid)

    def test_payment_method(self):
        self.assertEqual(
            validate_field(v.PAYMENT_METHOD, 'cheque').message,
            'Please select a payment method',
        )
        for method in v.PAYMENT_METHODS:
            self.assertTrue(validate_field(v.PAYMENT_METHOD, method).is_valid)

    def test_monthly_amount(self):
        self.assertEqual(
            validate_field(v.MONTHLY_AMOUNT, '-5').message,
            'Investment amount must be greater than 0',
        )
        self.assertTrue(validate_field(v.MONTHLY_AMOUNT, '60000').is_valid)


class ValidateFieldsTests(SimpleTestCase):

    def test_batch_sees_sibling_values(self):
        errors = validate_fields(
            {v.RETIREMENT_AGE: '60', v.LIFE_EXPECTANCY: '85'},
            {v.AGE: '30', v.RETIREMENT_AGE: '90'},
        )
        self.assertEqual(errors, {})

    def test_only_invalid_fields_reported(self):
        errors = validate_fields(
            {v.MONTHLY_INCOME: '50000', v.MONTHLY_EXPENSES: '50000'},
        )
        self.assertEqual(errors, {v.MONTHLY_EXPENSES: 'Expenses cannot exceed income'})

    def test_dependents(self):
        self.assertEqual(v.dependents_of(v.AGE), (v.RETIREMENT_AGE,))
        self.assertEqual(v.dependents_of(v.RETIREMENT_AGE), (v.LIFE_EXPECTANCY,))
        self.assertEqual(v.dependents_of(v.MONTHLY_INCOME), (v.MONTHLY_EXPENSES,))
        self.assertEqual(v.dependents_of(v.PASSWORD), (v.CONFIRM_PASSWORD,))
        self.assertEqual(v.dependents_of(v.EMAIL), ())
