"""
Line Segmenter Module
Splits normalized statement text into per-transaction spans.
Each span starts right after a date anchor and runs to the next anchor
(or the end of the text).
"""

import re
import logging
from dataclasses import dataclass, replace
from typing import Optional

from .bank_formats import BankFormat, rules_for
from .locale_converters import AMOUNT_PATTERN

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')


@dataclass(frozen=True)
class Span:
    """Text attributed to one candidate transaction."""
    day: str
    month: str
    year: str
    time: Optional[str]
    anchor: str
    start: int
    end: int
    content: str


def normalize_text(text: str) -> str:
    """Collapse every whitespace run (newlines included) to a single space."""
    if not text:
        return ""
    return _WHITESPACE.sub(' ', text).strip()


def segment(text: str, bank_format: BankFormat) -> list[Span]:
    """
    Split text at every date anchor of the given layout.

    Spans are returned in order of occurrence, never re-sorted by date.

    Args:
        text: Normalized statement text
        bank_format: Layout whose anchor pattern delimits spans

    Returns:
        One Span per anchor
    """
    pattern = rules_for(bank_format).anchor_pattern
    anchors = list(pattern.finditer(text or ""))

    spans = []
    for idx, anchor in enumerate(anchors):
        end = anchors[idx + 1].start() if idx + 1 < len(anchors) else len(text)
        groups = anchor.groupdict()
        spans.append(Span(
            day=groups["day"],
            month=groups["month"],
            year=groups["year"],
            time=groups.get("time"),
            anchor=anchor.group(0),
            start=anchor.start(),
            end=end,
            content=text[anchor.end():end].strip(),
        ))

    logger.debug(f"Segmented text into {len(spans)} spans ({bank_format.value})")
    return spans


def _header_cut(content: str, markers: tuple) -> Optional[int]:
    positions = [content.find(marker) for marker in markers]
    positions = [pos for pos in positions if pos >= 0]
    return min(positions) if positions else None


def is_header_span(span: Span, bank_format: BankFormat) -> bool:
    """
    Check whether a span holds account-header boilerplate rather than a transaction.

    A header marker preceded by an amount is a repeated page header that
    landed in the tail of a transaction row, so that span is not a header span.
    """
    cut = _header_cut(span.content, rules_for(bank_format).header_markers)
    return cut is not None and not AMOUNT_PATTERN.search(span.content[:cut])


def strip_header_tail(span: Span, bank_format: BankFormat) -> Span:
    """Cut span content at its first header marker, if any."""
    cut = _header_cut(span.content, rules_for(bank_format).header_markers)
    if cut is None:
        return span
    logger.debug(f"Cutting page header from span at {span.anchor}")
    return replace(span, content=span.content[:cut].strip())


def transaction_spans(spans: list[Span], bank_format: BankFormat) -> list[Span]:
    """Drop header spans and cut page headers out of the remaining spans."""
    kept = []
    for span in spans:
        if is_header_span(span, bank_format):
            logger.debug(f"Skipping header span at {span.anchor}: {span.content[:50]}...")
            continue
        kept.append(strip_header_tail(span, bank_format))
    return kept
