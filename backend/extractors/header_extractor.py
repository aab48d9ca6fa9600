"""
Header Extractor Module
Reads account metadata (owner, account number, branch, address, period)
from phrase-anchored patterns in the statement text.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .bank_formats import BankFormat, rules_for
from .segmenter import normalize_text

logger = logging.getLogger(__name__)

HEADER_FIELDS = ("account_owner", "account_number", "branch", "address", "period")


@dataclass(frozen=True)
class StatementHeader:
    """Account metadata. Missing fields were not found in the text."""
    bank_code: str
    bank_name: str
    account_number: Optional[str] = None
    account_owner: Optional[str] = None
    branch: Optional[str] = None
    address: Optional[str] = None
    period: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "bank_code": self.bank_code,
            "bank_name": self.bank_name,
            "account_number": self.account_number,
            "account_owner": self.account_owner,
            "branch": self.branch,
            "address": self.address,
            "period": self.period,
        }


def extract_header(text: str, bank_format: BankFormat) -> StatementHeader:
    """
    Extract header fields for a layout.

    Patterns are tried in their configured order; the first match for a
    field wins. Nothing here raises for a missing field.
    """
    rules = rules_for(bank_format)
    found = {}

    for field, pattern in rules.header_patterns:
        if field in found:
            continue
        match = pattern.search(text or "")
        if match:
            value = normalize_text(match.group(1))
            if value:
                found[field] = value

    missing = [f for f in HEADER_FIELDS if f not in found]
    if missing:
        logger.debug(f"Header fields not found ({bank_format.value}): {', '.join(missing)}")

    return StatementHeader(
        bank_code=bank_format.value,
        bank_name=rules.bank_name,
        **found
    )
