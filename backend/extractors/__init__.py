"""
Extractors Module - Statement parsing and income/expense classification.
"""

from .statement_classifier import (
    Transaction,
    StatementResult,
    StatementClassifier,
    classify_statement
)

from .bank_formats import (
    BankFormat,
    detect_bank_format,
    rules_for
)

from .financial_rules import (
    Polarity,
    ReconcileBasis,
    apply_sign_to_amount,
    format_amount_display
)

from .header_extractor import StatementHeader, extract_header
from .locale_converters import CalendarKind, FormatError, convert_date, parse_amount

__all__ = [
    'Transaction',
    'StatementResult',
    'StatementClassifier',
    'classify_statement',
    'BankFormat',
    'detect_bank_format',
    'rules_for',
    'Polarity',
    'ReconcileBasis',
    'apply_sign_to_amount',
    'format_amount_display',
    'StatementHeader',
    'extract_header',
    'CalendarKind',
    'FormatError',
    'convert_date',
    'parse_amount',
]
