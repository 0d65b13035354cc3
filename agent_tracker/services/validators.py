"""
Data Quality Validators

Business-rule checks for goals, weekly entries, commission transactions
and users. Request bodies are type-checked by pydantic before they get
here; these functions enforce the ranges and relationships between fields.
All of them return a ValidationResult, and raise_if_invalid() raises
ValidationError with the collected messages.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from agent_tracker.errors import ValidationError
from agent_tracker.models import CommissionTransaction, User

MIN_YEAR = 2000
MAX_YEAR = 2100

# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


class ValidationResult:
    """Container for validation errors."""

    def __init__(self):
        self.errors: List[str] = []

    def add_error(self, msg: str):
        self.errors.append(msg)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        """Raise ValidationError if there are blocking errors."""
        if self.errors:
            raise ValidationError("; ".join(self.errors))


def _check_year(result: ValidationResult, year: int):
    if year is None or not (MIN_YEAR <= year <= MAX_YEAR):
        result.add_error(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")


def _check_month(result: ValidationResult, month: int):
    if month is None or not (1 <= month <= 12):
        result.add_error("Month must be between 1 and 12")


# ============================================================
# GOALS
# ============================================================

def validate_period(year: int, month: Optional[int] = None) -> ValidationResult:
    result = ValidationResult()
    _check_year(result, year)
    if month is not None:
        _check_month(result, month)
    return result


def validate_monthly_goal(year: int, month: int, goal_value: int) -> ValidationResult:
    result = ValidationResult()
    _check_year(result, year)
    _check_month(result, month)
    if goal_value is None or goal_value < 0:
        result.add_error("Goal value cannot be negative")
    return result


def validate_commission_goal(year: int, annual_target: Decimal) -> ValidationResult:
    result = ValidationResult()
    _check_year(result, year)
    if annual_target is None or annual_target < 0:
        result.add_error("Annual target cannot be negative")
    elif annual_target > MAX_AMOUNT:
        result.add_error(f"Annual target cannot exceed {MAX_AMOUNT}")
    return result


# ============================================================
# WEEKLY ENTRIES
# ============================================================

def validate_weekly_entry(week_start: date, week_end: date, count_value: int) -> ValidationResult:
    """
    A week runs from week_start to at most six days later.
    Counts are whole, non-negative numbers.
    """
    result = ValidationResult()

    if week_end < week_start:
        result.add_error("Week end date cannot be before week start date")
    elif (week_end - week_start).days > 6:
        result.add_error("Week end date must be within six days of week start date")

    if count_value is None or count_value < 0:
        result.add_error("Count cannot be negative")

    return result


# ============================================================
# COMMISSION TRANSACTIONS
# ============================================================

def validate_commission_transaction(
    amount: Decimal,
    transaction_type: str,
    transaction_month: int,
    transaction_year: int,
) -> ValidationResult:
    result = ValidationResult()

    if amount is None or amount <= 0:
        result.add_error("Amount must be greater than zero")
    elif amount > MAX_AMOUNT:
        result.add_error(f"Amount cannot exceed {MAX_AMOUNT}")

    if transaction_type not in CommissionTransaction.TRANSACTION_TYPES:
        result.add_error(
            f"Transaction type must be one of: {', '.join(CommissionTransaction.TRANSACTION_TYPES)}"
        )

    _check_month(result, transaction_month)
    _check_year(result, transaction_year)
    return result


# ============================================================
# USERS
# ============================================================

def validate_new_user(username: str, email: str, password: str, full_name: str, role: str) -> ValidationResult:
    result = ValidationResult()

    if not username or not username.strip():
        result.add_error("Username is required")
    if not email or "@" not in email:
        result.add_error("A valid email is required")
    if not password:
        result.add_error("Password is required")
    if not full_name or not full_name.strip():
        result.add_error("Full name is required")
    if role not in User.ROLES:
        result.add_error(f"Role must be one of: {', '.join(User.ROLES)}")

    return result
