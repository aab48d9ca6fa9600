"""
Balance Reconciler Module
Second pass over extracted candidates: decides income/expense from the
running balance of consecutive transactions, falling back to the keyword
hint when the arithmetic is unavailable or inconclusive.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .bank_formats import BankFormat, FormatRules, ReconcileMode, rules_for
from .field_extractor import RawTransactionCandidate
from .financial_rules import (
    Polarity,
    ReconcileBasis,
    exceeds_threshold,
    polarity_from_hint,
    within_tolerance,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedCandidate:
    """A candidate with its polarity and the rule that decided it."""
    candidate: RawTransactionCandidate
    polarity: Polarity
    basis: ReconcileBasis


def _by_balance(
    prev: RawTransactionCandidate,
    curr: RawTransactionCandidate,
    rules: FormatRules
) -> Optional[Polarity]:
    """Polarity implied by the two balances, or None if they are inconclusive."""
    if rules.reconcile_mode == ReconcileMode.DELTA:
        delta = curr.balance - prev.balance
        return Polarity.INCOME if exceeds_threshold(delta, rules.tolerance) else Polarity.EXPENSE

    if within_tolerance(prev.balance + curr.amount, curr.balance, rules.tolerance):
        return Polarity.INCOME
    if within_tolerance(prev.balance - curr.amount, curr.balance, rules.tolerance):
        return Polarity.EXPENSE
    return None


def classify_candidate(
    prev: Optional[RawTransactionCandidate],
    curr: RawTransactionCandidate,
    rules: FormatRules
) -> ClassifiedCandidate:
    """
    Decide the polarity of one candidate given its predecessor.

    The opening candidate has no predecessor and is decided by keywords only.
    """
    if prev is not None and prev.balance is not None and curr.balance is not None:
        polarity = _by_balance(prev, curr, rules)
        if polarity is not None:
            return ClassifiedCandidate(curr, polarity, ReconcileBasis.BALANCE)
        logger.debug(
            f"Balance mismatch on {curr.date.isoformat()} "
            f"({prev.balance:.2f} -> {curr.balance:.2f}, amount {curr.amount:.2f}); using keywords"
        )

    return ClassifiedCandidate(curr, polarity_from_hint(curr.is_income_hint), ReconcileBasis.KEYWORD)


def reconcile(
    candidates: list[RawTransactionCandidate],
    bank_format: BankFormat
) -> list[ClassifiedCandidate]:
    """
    Assign a polarity to every candidate, in order.

    Args:
        candidates: Ordered candidates from the field extractor
        bank_format: Layout deciding the balance rule and tolerance

    Returns:
        New list of ClassifiedCandidate in the same order
    """
    rules = rules_for(bank_format)
    classified = []
    prev = None

    for curr in candidates:
        classified.append(classify_candidate(prev, curr, rules))
        prev = curr

    by_balance = sum(1 for c in classified if c.basis == ReconcileBasis.BALANCE)
    logger.debug(
        f"Reconciled {len(classified)} candidates: {by_balance} by balance, "
        f"{len(classified) - by_balance} by keyword"
    )
    return classified
