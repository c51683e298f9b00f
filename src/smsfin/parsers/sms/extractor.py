"""
Field extractor for bank SMS bodies.

Pulls transaction amount, counterparty, account suffix, balance and
reference number out of an SMS using one bank's pattern set.
"""

import logging
from typing import Optional, Pattern, Sequence, Tuple

from smsfin.core.exceptions import AmountParseError
from smsfin.parsers.sms.amounts import parse_amount, select_balance
from smsfin.parsers.sms.models import (
    UNKNOWN_MERCHANT,
    BankPatternSet,
    RawFields,
    TransactionType,
)

logger = logging.getLogger(__name__)


def _first_match(text: str, patterns: Sequence[Pattern]):
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None


def _first_group(text: str, patterns: Sequence[Pattern], group: str) -> Optional[str]:
    match = _first_match(text, patterns)
    if match and match.group(group):
        return match.group(group).strip()
    return None


def _match_transaction(text: str, patterns: BankPatternSet):
    """Try debit rules, then credit rules. A single SMS is one transaction."""
    match = _first_match(text, patterns.debit)
    if match:
        return TransactionType.EXPENSE, match

    match = _first_match(text, patterns.credit)
    if match:
        return TransactionType.INCOME, match

    return None, None


def _merchant_from(match, txn_type: TransactionType) -> Optional[str]:
    merchant = None
    if "merchant" in match.re.groupindex and match.group("merchant"):
        merchant = " ".join(match.group("merchant").split())

    if txn_type == TransactionType.EXPENSE:
        return merchant or UNKNOWN_MERCHANT
    return merchant


def extract_fields(sms_text: str, patterns: BankPatternSet) -> Optional[RawFields]:
    """
    Extract transaction fields from an SMS body.

    Args:
        sms_text: Raw SMS body
        patterns: Pattern set of the detected bank

    Returns:
        RawFields, or None when no debit/credit rule matches or the amount
        is malformed
    """
    txn_type, match = _match_transaction(sms_text, patterns)
    if match is None:
        logger.debug(f"No debit/credit pattern matched for {patterns.bank_id}")
        return None

    try:
        amount = parse_amount(match.group("amount"))
    except AmountParseError as e:
        logger.debug(f"Malformed transaction amount for {patterns.bank_id}: {e.message}")
        return None

    if amount <= 0:
        logger.debug(f"Non-positive transaction amount for {patterns.bank_id}: {amount}")
        return None

    amount_span: Tuple[int, int] = match.span("amount")

    return RawFields(
        transaction_type=txn_type,
        amount=amount,
        merchant_name=_merchant_from(match, txn_type),
        account_last4=_first_group(sms_text, patterns.account, "account"),
        balance=select_balance(sms_text, patterns.balance, amount_span),
        reference_number=_first_group(sms_text, patterns.reference, "reference"),
    )
