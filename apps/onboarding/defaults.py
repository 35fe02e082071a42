"""
Static goals, plan and investment figures offered by the wizard.

These are display defaults, not projections: nothing here is derived
from the client's inputs.
"""

DEFAULT_GOALS = [
    {'name': 'Child Education', 'amount': 2500000, 'inflation_adjusted': 3200000},
    {'name': 'Lavish Wedding', 'amount': 3000000, 'inflation_adjusted': 3800000},
    {'name': 'Home Purchase', 'amount': 5000000, 'inflation_adjusted': 6500000},
    {'name': 'Retirement', 'amount': 10000000, 'inflation_adjusted': 15000000},
    {'name': 'Adhoc', 'amount': 1000000, 'inflation_adjusted': 1200000},
]

DEFAULT_PLAN = {
    'monthly_investment': 60000,
    'portfolio_allocation': [
        {'name': 'Equity Mutual Funds', 'amount': 36000},
        {'name': 'Debt Instruments', 'amount': 18000},
        {'name': 'Gold & Others', 'amount': 6000},
    ],
    'expected_returns': '12%',
    'risk_level': 'Moderate',
}

DEFAULT_INVESTMENT_ALLOCATION = [
    {'name': 'Large Cap Mutual Funds', 'amount': 25000},
    {'name': 'Mid Cap Mutual Funds', 'amount': 15000},
    {'name': 'Debt Funds', 'amount': 12000},
    {'name': 'Gold ETF', 'amount': 8000},
]

DEFAULT_MONTHLY_INVESTMENT = 60000
