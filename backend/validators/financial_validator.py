"""
Financial Validator Module
Validates classified transactions for correctness and completeness.
"""

import logging
from datetime import date
from extractors.statement_classifier import Transaction
from extractors.financial_rules import Polarity

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class TransactionValidator:
    """Validates transaction data."""

    def __init__(
        self,
        strict_mode: bool = False,
        allow_zero_amounts: bool = False,
        min_description_length: int = 1
    ):
        """
        Initialize validator with configurable settings.

        Args:
            strict_mode: If True, raise exceptions on invalid data.
                        If False, log warnings and skip invalid transactions.
            allow_zero_amounts: If True, allow transactions with 0 amount.
            min_description_length: Minimum characters required in description.
        """
        self.strict_mode = strict_mode
        self.allow_zero_amounts = allow_zero_amounts
        self.min_description_length = min_description_length
        self.reset_stats()

    def _reject(self, stat: str, msg: str, transaction: Transaction) -> bool:
        self.validation_stats[stat] += 1
        self.validation_stats["invalid"] += 1
        if self.strict_mode:
            raise ValidationError(msg)
        logger.warning(f"{msg} in transaction: {transaction}")
        return False

    def validate_transaction(self, transaction: Transaction) -> bool:
        """
        Validate a single transaction.

        Args:
            transaction: Transaction object to validate

        Returns:
            True if valid, False if invalid

        Raises:
            ValidationError: If strict_mode is True and validation fails
        """
        self.validation_stats["total_validated"] += 1

        if not self._validate_date(transaction.date):
            return self._reject("invalid_date", f"Invalid date: {transaction.date}", transaction)

        if not self._validate_amount(transaction.amount):
            return self._reject("invalid_amount", f"Invalid amount: {transaction.amount}", transaction)

        if not self._validate_description(transaction.description):
            return self._reject("invalid_description", "Invalid description: empty or too short", transaction)

        if not self._validate_polarity(transaction.polarity):
            return self._reject("invalid_polarity", f"Invalid polarity: {transaction.polarity}", transaction)

        self.validation_stats["valid"] += 1
        return True

    def validate_transactions(self, transactions) -> list[Transaction]:
        """
        Validate a sequence of transactions.

        Args:
            transactions: Transaction objects

        Returns:
            List of valid transactions (invalid ones filtered out)
        """
        valid_transactions = [txn for txn in transactions if self.validate_transaction(txn)]

        logger.info(
            f"Validation complete: {self.validation_stats['valid']} valid, "
            f"{self.validation_stats['invalid']} invalid out of "
            f"{self.validation_stats['total_validated']} total"
        )

        return valid_transactions

    def _validate_date(self, value) -> bool:
        """Date must be a calendar date (or ISO YYYY-MM-DD text)."""
        if isinstance(value, date):
            return True
        if not isinstance(value, str):
            return False
        try:
            date.fromisoformat(value)
            return True
        except ValueError:
            return False

    def _validate_amount(self, amount) -> bool:
        """
        Amount must be a non-negative number; direction lives in polarity.
        Zero is rejected unless allow_zero_amounts is set.
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return False

        if amount < 0:
            logger.debug(f"Amount is negative: {amount}")
            return False

        if amount == 0 and not self.allow_zero_amounts:
            logger.debug("Amount is zero (rejected - allow_zero_amounts=False)")
            return False

        return True

    def _validate_description(self, description: str) -> bool:
        """Description must be a string of at least min_description_length characters."""
        if not isinstance(description, str):
            return False

        if len(description.strip()) < self.min_description_length:
            logger.debug(f"Description too short: '{description}' (min: {self.min_description_length})")
            return False

        return True

    def _validate_polarity(self, polarity) -> bool:
        return isinstance(polarity, Polarity)

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()

    def reset_stats(self):
        """Reset validation statistics."""
        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_date": 0,
            "invalid_amount": 0,
            "invalid_description": 0,
            "invalid_polarity": 0
        }


def validate_transactions(transactions, strict_mode: bool = False) -> list[Transaction]:
    """
    Convenience function to validate a sequence of transactions.

    Args:
        transactions: Transaction objects
        strict_mode: If True, raise exceptions on invalid data

    Returns:
        List of valid transactions
    """
    validator = TransactionValidator(strict_mode=strict_mode)
    return validator.validate_transactions(transactions)
