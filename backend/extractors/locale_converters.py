"""
Locale Converters Module
Converts Thai statement encodings into canonical values:
thousands-separated amounts into floats and two-digit-year dates
(civil or Buddhist Era) into calendar dates.
"""

import re
import logging
from datetime import date
from enum import Enum

logger = logging.getLogger(__name__)

_PLAIN_NUMBER = re.compile(r'\d+(?:\.\d+)?')

# Complete amounts with thousands commas and exactly two decimals
# ("1,255.41", "16.00"), never a fragment of a longer number.
AMOUNT_PATTERN = re.compile(r'(?<![\d,.])(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}(?!\d)')

BUDDHIST_ERA_OFFSET = 543


class FormatError(ValueError):
    """A token matched by a coarse pattern failed strict parsing."""
    pass


class CalendarKind(Enum):
    """Calendar system used for the two-digit year of a statement date."""
    CIVIL = "civil"
    BUDDHIST_ERA = "buddhist-era"


def remove_separators(token: str) -> str:
    """Strip thousands separators from a numeric token."""
    return token.replace(',', '')


def parse_amount(token: str) -> float:
    """
    Parse a thousands-separated decimal string into a float.

    Args:
        token: Amount text such as "1,255.41"

    Returns:
        Numeric amount (1255.41)

    Raises:
        FormatError: If the token is not digits(.digits)? once separators are removed
    """
    if not isinstance(token, str):
        raise FormatError(f"Invalid amount format: {token!r}")

    clean = remove_separators(token.strip())
    if not _PLAIN_NUMBER.fullmatch(clean):
        logger.error(f"Cannot parse amount '{token}'")
        raise FormatError(f"Invalid amount format: {token}")

    return float(clean)


def canonical_year(two_digit_year: int, calendar_kind: CalendarKind) -> int:
    """
    Expand a two-digit year to a four-digit civil year.

    Years are always taken to be in the 2000s (2500s for Buddhist Era);
    there is no century rollover.
    """
    if calendar_kind == CalendarKind.BUDDHIST_ERA:
        return (2500 + two_digit_year) - BUDDHIST_ERA_OFFSET
    return 2000 + two_digit_year


def convert_date(day, month, year, calendar_kind: CalendarKind) -> date:
    """
    Build a canonical date from statement day/month/two-digit-year parts.

    Args:
        day: Day of month (str or int)
        month: Month number (str or int)
        year: Two-digit year (str or int)
        calendar_kind: CIVIL (25 -> 2025) or BUDDHIST_ERA (68 -> 2025)

    Returns:
        datetime.date

    Raises:
        FormatError: If a part is not numeric or the date does not exist
    """
    try:
        day_num = int(day)
        month_num = int(month)
        year_num = int(year)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid date parts: {day}/{month}/{year}") from e

    if not 0 <= year_num <= 99:
        raise FormatError(f"Expected a two-digit year, got {year}")

    full_year = canonical_year(year_num, calendar_kind)
    try:
        return date(full_year, month_num, day_num)
    except ValueError as e:
        raise FormatError(f"Invalid calendar date: {day}/{month}/{year} ({calendar_kind.value})") from e
