"""
Amount parsing and amount/balance disambiguation.

The transaction amount and the available balance are always taken from
different regex matches. select_balance() enforces that by refusing any
balance match whose span overlaps the transaction amount.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Pattern, Tuple

from smsfin.core.exceptions import AmountParseError

logger = logging.getLogger(__name__)

PAISA = Decimal("0.01")

_NUMERIC = re.compile(r"^\d+(?:\.\d+)?$")

Span = Tuple[int, int]


def parse_amount(amount_str: str) -> Decimal:
    """
    Parse an SMS amount string to Decimal.

    Thousands separators (including Indian lakh grouping) are stripped and
    the value is quantized to paise.

    Args:
        amount_str: Captured text such as "1,250.00" or "1,00,000"

    Returns:
        Decimal amount

    Raises:
        AmountParseError: If the text is not numeric after removing commas

    Examples:
        >>> parse_amount("1,250.00")
        Decimal('1250.00')
    """
    if not isinstance(amount_str, str):
        raise AmountParseError(repr(amount_str))

    cleaned = amount_str.strip().replace(",", "")
    if not _NUMERIC.match(cleaned):
        raise AmountParseError(amount_str)

    try:
        return Decimal(cleaned).quantize(PAISA)
    except InvalidOperation as e:
        raise AmountParseError(amount_str) from e


def spans_overlap(a: Span, b: Span) -> bool:
    """Check whether two half-open [start, end) spans share any character."""
    return a[0] < b[1] and b[0] < a[1]


def select_balance(
    text: str,
    balance_patterns: Sequence[Pattern],
    amount_span: Optional[Span] = None,
) -> Optional[Decimal]:
    """
    Find the available balance in an SMS, never reusing the amount's text.

    Patterns are tried in order; for each, matches are scanned left to right
    and the first one whose balance group is disjoint from amount_span and
    parses cleanly wins.

    Args:
        text: SMS body
        balance_patterns: Balance rules with a 'balance' group
        amount_span: Span of the transaction amount capture

    Returns:
        Balance as Decimal, or None if no usable balance anchor exists
    """
    for pattern in balance_patterns:
        for match in pattern.finditer(text):
            balance_span = match.span("balance")
            if amount_span and spans_overlap(balance_span, amount_span):
                logger.debug(f"Skipping balance match at {balance_span}: overlaps amount")
                continue
            try:
                return parse_amount(match.group("balance"))
            except AmountParseError as e:
                logger.debug(f"Ignoring malformed balance: {e.message}")
                continue
    return None
