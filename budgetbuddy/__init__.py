# budgetbuddy/__init__.py
"""BudgetBuddy client: login/register against the auth service and
session-gated reads from the finance service."""

__version__ = "0.1.0"
