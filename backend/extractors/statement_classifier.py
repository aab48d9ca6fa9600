"""
Statement Classifier Module
Turns the text of a Thai bank statement into ordered transactions, each
classified as income or expense, together with the account header.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .bank_formats import BankFormat, detect_bank_format
from .balance_reconciler import reconcile
from .field_extractor import extract_candidates
from .financial_rules import Polarity, ReconcileBasis, apply_sign_to_amount, format_amount_display
from .header_extractor import StatementHeader, extract_header
from .segmenter import normalize_text, segment, transaction_spans

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class Transaction:
    """Represents a single classified transaction."""
    id: str
    date: date
    description: str
    amount: float
    polarity: Polarity
    time: Optional[str] = None

    @property
    def type(self) -> str:
        return self.polarity.value

    @property
    def signed_amount(self) -> float:
        return apply_sign_to_amount(self.amount, self.polarity)

    def to_dict(self) -> dict:
        """Convert transaction to dictionary."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "time": self.time,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
        }

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, date={self.date}, "
            f"desc={self.description[:30]}..., amount={format_amount_display(self.signed_amount)})"
        )


@dataclass(frozen=True)
class StatementResult:
    """Header, ordered transactions and the text they were read from."""
    header: StatementHeader
    transactions: tuple
    raw_text: str
    stats: dict = field(default_factory=dict)

    @property
    def bank_name(self) -> str:
        return self.header.bank_name

    @property
    def is_empty(self) -> bool:
        return not self.transactions

    @property
    def total_income(self) -> float:
        return round(sum(t.amount for t in self.transactions if t.polarity == Polarity.INCOME), 2)

    @property
    def total_expense(self) -> float:
        return round(sum(t.amount for t in self.transactions if t.polarity == Polarity.EXPENSE), 2)

    @property
    def net_amount(self) -> float:
        return round(self.total_income - self.total_expense, 2)

    def summary(self) -> dict:
        return {
            "transaction_count": len(self.transactions),
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "net_amount": self.net_amount,
        }

    def to_dict(self, include_raw_text: bool = True) -> dict:
        """Convert result to a JSON-ready dictionary (header fields flattened)."""
        data = self.header.to_dict()
        data["transactions"] = [t.to_dict() for t in self.transactions]
        if include_raw_text:
            data["raw_text"] = self.raw_text
        return data


class StatementClassifier:
    """
    Runs the parsing pipeline for one statement at a time:
    segment -> extract fields -> reconcile balances -> assemble.
    Holds no state between statements apart from the last run's stats.
    """

    def __init__(self, bank_format: Optional[BankFormat] = None):
        """
        Args:
            bank_format: Force a layout instead of detecting it from the text
        """
        self.bank_format = bank_format
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "spans_found": 0,
            "header_spans": 0,
            "rejected_spans": 0,
            "candidates": 0,
            "by_balance": 0,
            "by_keyword": 0,
            "transactions_found": 0,
        }

    def classify(self, text: str) -> StatementResult:
        """
        Classify all transactions in statement text.

        Args:
            text: Full concatenated page text of a statement

        Returns:
            StatementResult (empty transactions when nothing was found)
        """
        self.stats = self._empty_stats()

        if not isinstance(text, str):
            logger.error("Invalid input: text must be a string")
            text = ""

        clean_text = normalize_text(text)
        bank_format = self.bank_format or detect_bank_format(clean_text)

        spans = segment(clean_text, bank_format)
        kept = transaction_spans(spans, bank_format)
        candidates, rejected = extract_candidates(kept, bank_format)

        self.stats["spans_found"] = len(spans)
        self.stats["header_spans"] = len(spans) - len(kept)
        self.stats["rejected_spans"] = rejected
        self.stats["candidates"] = len(candidates)

        transactions = []
        for idx, item in enumerate(reconcile(candidates, bank_format), 1):
            if item.basis == ReconcileBasis.BALANCE:
                self.stats["by_balance"] += 1
            else:
                self.stats["by_keyword"] += 1

            txn = Transaction(
                id=str(idx),
                date=item.candidate.date,
                time=item.candidate.time,
                description=item.candidate.description,
                amount=item.candidate.amount,
                polarity=item.polarity,
            )
            transactions.append(txn)
            logger.debug(f"Created transaction: {txn}")

        self.stats["transactions_found"] = len(transactions)
        header = extract_header(clean_text, bank_format)

        if not transactions:
            logger.warning(
                f"No transactions found ({bank_format.value}): "
                f"{self.stats['spans_found']} spans, {self.stats['header_spans']} header spans"
            )
        else:
            logger.info(
                f"Classification complete ({bank_format.value}): "
                f"{self.stats['transactions_found']} transactions, "
                f"{self.stats['by_balance']} by balance, {self.stats['by_keyword']} by keyword"
            )

        return StatementResult(
            header=header,
            transactions=tuple(transactions),
            raw_text=clean_text,
            stats=self.get_stats(),
        )

    def get_stats(self) -> dict:
        """Get statistics from the last classification."""
        return self.stats.copy()


def classify_statement(text: str, bank_format: Optional[BankFormat] = None) -> StatementResult:
    """
    Convenience function to classify a statement's text.

    Args:
        text: Full concatenated page text
        bank_format: Optional forced layout

    Returns:
        StatementResult
    """
    return StatementClassifier(bank_format=bank_format).classify(text)
