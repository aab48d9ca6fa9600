"""
Field Extractor Module
Pulls date, time, amounts and description out of each transaction span,
following the field order of the statement layout.
"""

import re
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .bank_formats import BankFormat, rules_for
from .financial_rules import income_keyword_hint
from .locale_converters import AMOUNT_PATTERN, FormatError, convert_date, parse_amount
from .segmenter import Span, normalize_text

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r'(?<!\d)(\d{2}:\d{2})(?!\d)')


@dataclass(frozen=True)
class RawTransactionCandidate:
    """Fields extracted from one span, before polarity is known."""
    date: date
    time: Optional[str]
    description: str
    amount: float
    balance: Optional[float]
    is_income_hint: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "time": self.time,
            "description": self.description,
            "amount": self.amount,
            "balance": self.balance,
            "is_income_hint": self.is_income_hint,
        }


def _strip_boilerplate(text: str, phrases: tuple) -> str:
    # Longest first so "K PLUS SHOP" is removed before "K PLUS".
    for phrase in sorted(phrases, key=len, reverse=True):
        text = text.replace(phrase, ' ')
    return text


def extract_candidate(span: Span, bank_format: BankFormat) -> Optional[RawTransactionCandidate]:
    """
    Build a candidate from a span.

    Args:
        span: Segmented span
        bank_format: Layout deciding field order and description rules

    Returns:
        RawTransactionCandidate, or None when the span carries too few amounts

    Raises:
        FormatError: If the anchor date or an amount fails strict parsing
    """
    rules = rules_for(bank_format)
    content = span.content

    matches = list(AMOUNT_PATTERN.finditer(content))
    if not matches:
        return None

    if len(matches) < rules.min_amount_tokens:
        logger.debug(
            f"Skipping span at {span.anchor}: {len(matches)} amount(s), "
            f"need {rules.min_amount_tokens}"
        )
        return None

    if rules.balance_first:
        balance = parse_amount(matches[0].group(0))
        amount = parse_amount(matches[-1].group(0))
        time = span.time
        description = AMOUNT_PATTERN.sub(' ', content)
        description = normalize_text(_strip_boilerplate(description, rules.boilerplate_phrases))
    else:
        amount = parse_amount(matches[0].group(0))
        balance = parse_amount(matches[-1].group(0)) if len(matches) > 1 else None
        time_match = TIME_PATTERN.search(content)
        time = time_match.group(1) if time_match else span.time
        description = content[:matches[0].start()]
        description = normalize_text(TIME_PATTERN.sub(' ', description, count=1))

    txn_date = convert_date(span.day, span.month, span.year, rules.calendar_kind)

    return RawTransactionCandidate(
        date=txn_date,
        time=time,
        description=description,
        amount=amount,
        balance=balance,
        is_income_hint=income_keyword_hint(content, description, rules),
    )


def extract_candidates(
    spans: list[Span],
    bank_format: BankFormat
) -> tuple[list[RawTransactionCandidate], int]:
    """
    Extract candidates from spans in order.

    Spans with too few amounts are dropped silently; spans that fail strict
    parsing are logged, dropped and counted.

    Returns:
        (candidates, number of spans rejected by strict parsing)
    """
    candidates = []
    rejected = 0
    for span in spans:
        try:
            candidate = extract_candidate(span, bank_format)
        except FormatError as e:
            rejected += 1
            logger.warning(f"Failed to parse span at {span.anchor}: {e}")
            continue

        if candidate is not None:
            candidates.append(candidate)

    logger.debug(f"Extracted {len(candidates)} candidates from {len(spans)} spans ({rejected} rejected)")
    return candidates, rejected
