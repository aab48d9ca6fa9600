from datetime import date

import pytest

from extractors import Polarity, Transaction, classify_statement
from validators import TransactionValidator, ValidationError, validate_transactions


def make_txn(**overrides):
    fields = dict(id="1", date=date(2025, 7, 1), description="ชำระเงิน", amount=16.00,
                  polarity=Polarity.EXPENSE, time="08:53")
    fields.update(overrides)
    return Transaction(**fields)


def test_classified_statement_is_valid(ktb_text):
    result = classify_statement(ktb_text)
    assert validate_transactions(result.transactions) == list(result.transactions)


def test_zero_amount_rejected_unless_allowed():
    txn = make_txn(amount=0.0)
    assert TransactionValidator().validate_transaction(txn) is False
    assert TransactionValidator(allow_zero_amounts=True).validate_transaction(txn) is True


def test_negative_amount_rejected():
    validator = TransactionValidator()
    assert validator.validate_transaction(make_txn(amount=-5.0)) is False
    assert validator.get_stats()["invalid_amount"] == 1


def test_empty_description_rejected():
    validator = TransactionValidator()
    assert validator.validate_transactions([make_txn(description=""), make_txn()]) == [make_txn()]
    assert validator.get_stats()["invalid_description"] == 1


def test_bad_date_and_polarity():
    validator = TransactionValidator()
    assert validator.validate_transaction(make_txn(date="2025-13-01")) is False
    assert validator.validate_transaction(make_txn(date="2025-07-01")) is True
    assert validator.validate_transaction(make_txn(polarity="income")) is False


def test_strict_mode_raises():
    with pytest.raises(ValidationError):
        validate_transactions([make_txn(amount=0.0)], strict_mode=True)


def test_reset_stats():
    validator = TransactionValidator()
    validator.validate_transaction(make_txn())
    validator.reset_stats()
    assert validator.get_stats()["total_validated"] == 0
