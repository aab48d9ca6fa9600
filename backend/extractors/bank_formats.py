"""
Bank Formats Module
Defines the supported statement layouts and the configuration data each one
carries (anchor pattern, field order, tolerances, keyword lists, header
patterns), plus detection of the layout from statement text.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Pattern

from .locale_converters import CalendarKind

logger = logging.getLogger(__name__)


class BankFormat(Enum):
    """Supported statement layouts."""
    KBANK = "kbank"   # Format A: Kasikornbank K PLUS statement
    KTB = "ktb"       # Format B: Krungthai statement


class ReconcileMode(Enum):
    """How running balances decide polarity."""
    DELTA = "delta"              # sign of balance[i] - balance[i-1]
    RECONSTRUCT = "reconstruct"  # prev balance +/- amount compared with balance[i]


@dataclass(frozen=True)
class FormatRules:
    """Per-layout parsing configuration."""
    bank_format: BankFormat
    bank_name: str
    signatures: tuple
    anchor_pattern: Pattern
    calendar_kind: CalendarKind
    min_amount_tokens: int
    balance_first: bool
    reconcile_mode: ReconcileMode
    tolerance: float
    income_keywords: tuple
    received_transfer_phrases: tuple = ()
    boilerplate_phrases: tuple = ()
    header_markers: tuple = ()
    header_patterns: tuple = ()


KBANK_RULES = FormatRules(
    bank_format=BankFormat.KBANK,
    bank_name="ธนาคารกสิกรไทย (KBank)",
    signatures=("K PLUS", "KASIKORNBANK", "กสิกรไทย", "KBank"),
    # 01-07-25 08:53
    anchor_pattern=re.compile(
        r'(?<![\d-])(?P<day>\d{2})-(?P<month>\d{2})-(?P<year>\d{2})\s(?P<time>\d{2}:\d{2})(?!\d)'
    ),
    calendar_kind=CalendarKind.CIVIL,
    min_amount_tokens=2,
    balance_first=True,
    reconcile_mode=ReconcileMode.DELTA,
    tolerance=0.01,
    income_keywords=(
        "เงินโอนเข้า",
        "ฝากเงิน",
        "ดอกเบี้ย",
        "คืนเงิน",
        "เงินเข้า",
    ),
    received_transfer_phrases=("รับโอนเงิน",),
    boilerplate_phrases=(
        "K PLUS SHOP",
        "K PLUS",
        "K-Cyber",
        "K-Cash Connect Plus",
        "EDC/K SHOP/MYQR",
        "Internet/Mobile",
        "Automatic Machine",
    ),
    header_patterns=(
        ("account_owner", re.compile(r'ชื่อบัญชี\s+(.{1,120}?)\s+(?:เลขที่บัญชี|ที่อยู่)')),
        ("account_owner", re.compile(r'Account Name\s*:?\s+(.{1,120}?)\s+(?:Account No|Address)', re.IGNORECASE)),
        ("account_number", re.compile(r'เลขที่บัญชี\s*:?\s*([\dXx]{3}-[\dXx]-[\dXx]{5}-[\dXx])')),
        ("account_number", re.compile(r'Account No\.?\s*:?\s*([\dXx-]{10,})', re.IGNORECASE)),
        ("branch", re.compile(r'สาขา(?:เจ้าของบัญชี)?\s*:?\s+(.{1,80}?)\s+(?:รอบระหว่างวันที่|เลขที่บัญชี|ที่อยู่|ยอดยกมา)')),
        ("address", re.compile(r'ที่อยู่\s*:?\s+(.{1,200}?)\s+(?:รอบระหว่างวันที่|เลขที่บัญชี|สาขา|ยอดยกมา)')),
        ("period", re.compile(r'รอบระหว่างวันที่\s+(\d{2}/\d{2}/\d{4}\s*-\s*\d{2}/\d{2}/\d{4})')),
    ),
)

KTB_RULES = FormatRules(
    bank_format=BankFormat.KTB,
    bank_name="ธนาคารกรุงไทย (Krungthai)",
    signatures=("กรุงไทย", "Krungthai", "KRUNGTHAI"),
    # 01/07/68
    anchor_pattern=re.compile(
        r'(?<![\d/])(?P<day>\d{2})/(?P<month>\d{2})/(?P<year>\d{2})(?![\d/])'
    ),
    calendar_kind=CalendarKind.BUDDHIST_ERA,
    min_amount_tokens=1,
    balance_first=False,
    reconcile_mode=ReconcileMode.RECONSTRUCT,
    tolerance=0.05,
    income_keywords=(
        "โอนเงินเข้า",
        "ฝากเงิน",
        "รับโอน",
        "เงินโอนเข้า",
        "ดอกเบี้ย",
        "เข้าบัญชี",
        "คืนเงิน",
    ),
    header_markers=(
        "ชื่อบัญชี",
        "เลขที่บัญชี",
        "Account Name",
        "Account No",
        "ที่อยู่",
        "Address",
        "รอบบัญชี",
        "Statement Period",
        "ยอดยกมา",
        "Balance Brought Forward",
    ),
    # Labels are bilingual ("สาขา / Branch"); (?!/) keeps the Thai half of a
    # label from capturing the English half as its value.
    header_patterns=(
        ("account_owner", re.compile(r'ชื่อบัญชี\s*:?\s+(?!/)(.{1,120}?)\s+(?:เลขที่บัญชี|Account No)')),
        ("account_owner", re.compile(r'Account Name\s*:?\s+(?!/)(.{1,120}?)\s+(?:เลขที่บัญชี|Account No)', re.IGNORECASE)),
        ("account_number", re.compile(r'(?:เลขที่บัญชี|Account No\.?)\s*:?\s*([\dXx]{3}-[\dXx]-[\dXx]{5}-[\dXx])', re.IGNORECASE)),
        ("account_number", re.compile(r'(?:เลขที่บัญชี|Account No\.?)\s*:?\s*([\dXx-]{10,})', re.IGNORECASE)),
        ("branch", re.compile(r'(?:สาขา|Branch)\s*:?\s+(?!/)(.{1,80}?)\s+(?:ที่อยู่|Address|รอบบัญชี|Statement Period)')),
        ("address", re.compile(r'(?:ที่อยู่|Address)\s*:?\s+(?!/)(.{1,200}?)\s+(?:รอบบัญชี|Statement Period|วันที่|Date)')),
        ("period", re.compile(r'(?:รอบบัญชี|Statement Period)\s*:?\s*(\d{2}/\d{2}/\d{2,4}\s*-\s*\d{2}/\d{2}/\d{2,4})')),
    ),
)

FORMAT_RULES = {
    BankFormat.KBANK: KBANK_RULES,
    BankFormat.KTB: KTB_RULES,
}

DEFAULT_FORMAT = BankFormat.KTB


def _has_signature(text: str, rules: FormatRules) -> bool:
    return any(signature in text for signature in rules.signatures)


def _looks_like_kbank(text: str) -> bool:
    # K PLUS also shows up in other banks' transfer descriptions, so the
    # dash-dated anchor must be present too.
    return _has_signature(text, KBANK_RULES) and bool(KBANK_RULES.anchor_pattern.search(text))


def _looks_like_ktb(text: str) -> bool:
    return _has_signature(text, KTB_RULES)


# Evaluated in order; first match wins.
DETECTION_ORDER: tuple[tuple[BankFormat, Callable[[str], bool]], ...] = (
    (BankFormat.KBANK, _looks_like_kbank),
    (BankFormat.KTB, _looks_like_ktb),
)


def rules_for(bank_format: BankFormat) -> FormatRules:
    """Get the configuration record for a layout."""
    return FORMAT_RULES[bank_format]


def detect_bank_format(text: str, default: Optional[BankFormat] = None) -> BankFormat:
    """
    Choose the statement layout for normalized text.

    Args:
        text: Normalized statement text
        default: Layout returned when no signature matches (DEFAULT_FORMAT if None)

    Returns:
        BankFormat
    """
    for bank_format, predicate in DETECTION_ORDER:
        if predicate(text or ""):
            logger.info(f"Detected statement format: {bank_format.value}")
            return bank_format

    fallback = default or DEFAULT_FORMAT
    logger.info(f"No bank signature found, using default format: {fallback.value}")
    return fallback
