"""
Financial Rules Module
Defines income/expense polarity, keyword hints and the numeric comparisons
used when reconciling running balances.
"""

from enum import Enum
from typing import Optional
import logging

from .bank_formats import FormatRules

logger = logging.getLogger(__name__)

# Differences are rounded before comparing so float noise in values like
# 1500.05 - 1500.00 cannot cross a tolerance boundary.
COMPARISON_PRECISION = 6


class Polarity(Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class ReconcileBasis(Enum):
    """Which rule decided a polarity."""
    BALANCE = "balance"
    KEYWORD = "keyword"


def polarity_from_hint(is_income: bool) -> Polarity:
    """Map a keyword hint to a polarity (no hint means expense)."""
    return Polarity.INCOME if is_income else Polarity.EXPENSE


def income_keyword_hint(content: str, description: str, rules: FormatRules) -> bool:
    """
    Guess from wording alone whether a transaction is income.

    Args:
        content: Full span text
        description: Extracted description
        rules: Layout configuration holding the keyword lists

    Returns:
        True if an income keyword appears in the span, or a
        received-transfer phrase appears in the description
    """
    if any(keyword in content for keyword in rules.income_keywords):
        return True
    return any(phrase in description for phrase in rules.received_transfer_phrases)


def within_tolerance(expected: float, actual: float, tolerance: float) -> bool:
    """Strict check: |expected - actual| < tolerance."""
    return round(abs(expected - actual), COMPARISON_PRECISION) < tolerance


def exceeds_threshold(delta: float, threshold: float) -> bool:
    """Strict check: delta > threshold."""
    return round(delta, COMPARISON_PRECISION) > threshold


def apply_sign_to_amount(amount: float, polarity: Optional[Polarity]) -> float:
    """
    Apply correct sign to amount based on polarity.

    Income: positive
    Expense: negative

    Args:
        amount: Raw amount (assumed positive)
        polarity: Transaction polarity

    Returns:
        Amount with correct sign applied
    """
    amount = abs(amount)

    if polarity == Polarity.INCOME:
        return amount
    elif polarity == Polarity.EXPENSE:
        return -amount
    else:
        logger.warning(f"Unknown polarity for amount {amount}, keeping positive")
        return amount


def format_amount_display(amount: float) -> str:
    """Format a signed amount with an explicit sign (+1600.00 / -250.00)."""
    if amount >= 0:
        return f"+{amount:.2f}"
    return f"{amount:.2f}"
