"""
Bank SMS pattern table.

Regex rules for the transaction SMS formats of major Indian banks and UPI
wallets, plus the ordered registry the detector and extractor work from.

Transaction rules capture the TRANSACTION amount only. They are anchored on
a transaction verb (debited, spent, credited, ...) and never consume text past
a balance keyword; balance rules are anchored on those keywords instead, so
the two numbers always come from different matches.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from smsfin.core.exceptions import PatternConfigError
from smsfin.parsers.sms.models import BankPatternSet, compile_rules

logger = logging.getLogger(__name__)


# Building blocks
CURRENCY = r"(?:\bINR|\bRs\.?|₹)\s*"
AMOUNT = r"(?P<amount>[\d,]+(?:\.\d{2})?)"
BALANCE_AMOUNT = r"(?P<balance>[\d,]+(?:\.\d{2})?)"

# Lazily skip text but never across a balance keyword
UNTIL_BALANCE = r"(?:(?!\b(?:Avl|Avbl|Bal|Balance)\b)[\s\S])*?"

# Where a counterparty name ends
MERCHANT_END = (
    r"(?=\s+on\s|\s*[.,;]|\s+(?:Avl\s*|Avbl\s*|Wallet\s*)?Bal\b"
    r"|\s+Ref\b|\s+Wallet\b|\s*$)"
)

COUNTERPARTY_LEAD = r"\b(?:at|to|for)\s+(?:purchase\s+(?:at\s+)?)?"


def _debit_rules(verbs: str, merchant_chars: str = r"A-Za-z0-9\s") -> List[str]:
    """Standard debit rules: amount-first with counterparty, verb-first, bare."""
    merchant = rf"(?P<merchant>[{merchant_chars}]+?)"
    return [
        # INR 1,250.00 has been debited from A/c XX1234 for purchase at AMAZON
        rf"{CURRENCY}{AMOUNT}\s*(?:has\s+been\s+|is\s+|was\s+)?(?:{verbs})\b"
        rf"{UNTIL_BALANCE}{COUNTERPARTY_LEAD}{merchant}{MERCHANT_END}",
        # A/c XX1234 debited by Rs.500 ... trf to RAHUL; You paid Rs.200 to SHOP@ybl
        rf"\b(?:{verbs})\s+(?:(?:by|with|for)\s+)?{CURRENCY}{AMOUNT}"
        rf"{UNTIL_BALANCE}{COUNTERPARTY_LEAD}{merchant}{MERCHANT_END}",
        # Counterparty missing
        rf"{CURRENCY}{AMOUNT}\s*(?:has\s+been\s+|is\s+|was\s+)?(?:{verbs})\b",
        rf"\b(?:{verbs})\s+(?:(?:by|with|for)\s+)?{CURRENCY}{AMOUNT}",
    ]


def _credit_rules(verbs: str) -> List[str]:
    """Standard credit rules: amount before or directly after the verb."""
    return [
        rf"{CURRENCY}{AMOUNT}\s*(?:has\s+been\s+|is\s+|was\s+)?(?:{verbs})\b",
        rf"\b(?:{verbs})\s+(?:with\s+|by\s+|of\s+)?{CURRENCY}{AMOUNT}",
    ]


def _balance_rules(keywords: str) -> List[str]:
    return [rf"\b(?:{keywords})\b[:\s.-]*{CURRENCY}{BALANCE_AMOUNT}"]


# Account masks keep only the last 4 digits
MASKED_ACCOUNT = r"[xX*]+\d*?(?P<account>\d{4})\b"
LABELLED_ACCOUNT = rf"\b(?:A/c|Acct|Account|Card)\s*(?:No\.?\s*)?{MASKED_ACCOUNT}"
ANY_MASKED_ACCOUNT = rf"(?<![A-Za-z]){MASKED_ACCOUNT}"

REFERENCE = r"\b(?:UPI\s*)?Ref(?:\.|erence)?\s*(?:No\.?)?[:\s]*(?P<reference>\d{6,})"


def _pattern_set(
    bank_id: str,
    bank_name: str,
    detection_tokens: Sequence[str],
    debit: List[str],
    credit: List[str],
    balance: List[str],
    account: List[str],
) -> BankPatternSet:
    return BankPatternSet(
        bank_id=bank_id,
        bank_name=bank_name,
        detection_tokens=tuple(detection_tokens),
        debit=compile_rules(debit, "debit", bank_id),
        credit=compile_rules(credit, "credit", bank_id),
        balance=compile_rules(balance, "balance", bank_id),
        account=compile_rules(account, "account", bank_id),
        reference=compile_rules([REFERENCE], "reference", bank_id),
    )


# HDFC Bank
# "HDFC Bank: INR 1,250.00 has been debited from A/c XX1234 for purchase at
#  AMAZON on 25-Feb-26. Avl Bal: INR 45,678.90"
HDFC = _pattern_set(
    "hdfc", "HDFC Bank", ("hdfc",),
    debit=_debit_rules("debited|spent"),
    credit=_credit_rules("credited|deposited"),
    balance=_balance_rules(r"Avl\s*Bal|Avbl\s*Bal|Balance"),
    account=[LABELLED_ACCOUNT],
)

# ICICI Bank
# "ICICI Bank: Your Acct XX5678 is credited with INR 50,000.00 on 25-Feb.
#  Avl Bal: INR 75,000.00."
ICICI = _pattern_set(
    "icici", "ICICI Bank", ("icici",),
    debit=_debit_rules("debited|spent"),
    credit=_credit_rules("credited|received"),
    balance=_balance_rules(r"Avl\s*Bal|Balance"),
    account=[LABELLED_ACCOUNT],
)

# State Bank of India
# "SBI: Rs.500 debited from A/c XX9012 for UPI/P2M/SWIGGY on 25-Feb.
#  Bal: Rs.12,345.67"
SBI = _pattern_set(
    "sbi", "SBI", ("sbi", "state bank"),
    debit=_debit_rules("debited|withdrawn", merchant_chars=r"A-Za-z0-9/\s"),
    credit=_credit_rules("credited|deposited"),
    balance=_balance_rules(r"Avl\s*Bal|Bal|Balance"),
    account=[LABELLED_ACCOUNT],
)

# Axis Bank
# "Axis Bank: INR 2,500.00 spent on Credit Card XX4567 at FLIPKART on
#  25-Feb-26. Avl Bal: INR 97,500.00"
AXIS = _pattern_set(
    "axis", "Axis Bank", ("axis",),
    debit=_debit_rules("debited|spent"),
    credit=_credit_rules("credited"),
    balance=_balance_rules(r"Avl\s*Bal|Bal"),
    account=[LABELLED_ACCOUNT, ANY_MASKED_ACCOUNT],
)

# Kotak Mahindra Bank
# "Kotak: INR 3,999.00 debited from your A/c XX7890 for purchase at MYNTRA.
#  Bal: INR 28,001.00"
KOTAK = _pattern_set(
    "kotak", "Kotak Bank", ("kotak",),
    debit=_debit_rules("debited"),
    credit=_credit_rules("credited"),
    balance=_balance_rules(r"Avl\s*Bal|Bal"),
    account=[LABELLED_ACCOUNT, ANY_MASKED_ACCOUNT],
)

# Generic UPI / wallet messages, only when no bank token is present
# "UPI: Money sent! Rs.150 debited from Paytm Wallet to ZOMATO@paytm.
#  Wallet Bal: Rs.850.00"
UPI = _pattern_set(
    "upi", "UPI", ("upi", "@"),
    debit=_debit_rules("debited|sent|paid", merchant_chars=r"A-Za-z0-9@\s"),
    credit=_credit_rules("credited|received"),
    balance=_balance_rules(r"Wallet\s*Bal|Avl\s*Bal|Bal"),
    account=[LABELLED_ACCOUNT, ANY_MASKED_ACCOUNT],
)


class BankPatternRegistry:
    """
    Ordered, immutable table of bank pattern sets.

    Iteration order is detection priority. Extension never mutates an
    existing registry: with_bank() and with_priority() return new ones.
    """

    def __init__(self, pattern_sets: Iterable[BankPatternSet]):
        sets: Dict[str, BankPatternSet] = {}
        for pattern_set in pattern_sets:
            if pattern_set.bank_id in sets:
                raise PatternConfigError(
                    f"Duplicate bank id: {pattern_set.bank_id}",
                    bank_id=pattern_set.bank_id,
                )
            sets[pattern_set.bank_id] = pattern_set
        self._sets: Tuple[BankPatternSet, ...] = tuple(sets.values())
        self._by_id = sets

    def __iter__(self) -> Iterator[BankPatternSet]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def __contains__(self, bank_id: str) -> bool:
        return bank_id in self._by_id

    def __repr__(self) -> str:
        return f"BankPatternRegistry({list(self.bank_ids)})"

    @property
    def bank_ids(self) -> Tuple[str, ...]:
        """Bank ids in priority order."""
        return tuple(s.bank_id for s in self._sets)

    def get(self, bank_id: str) -> Optional[BankPatternSet]:
        """Get the pattern set for a bank id, or None."""
        return self._by_id.get(bank_id)

    def with_bank(
        self,
        pattern_set: BankPatternSet,
        before: Optional[str] = None,
    ) -> "BankPatternRegistry":
        """
        Return a registry with one more pattern set.

        Args:
            pattern_set: New bank entry
            before: Optional bank id to insert ahead of (e.g. "upi" so the
                new bank outranks the generic UPI fallback)
        """
        sets = list(self._sets)
        if before is None:
            sets.append(pattern_set)
        else:
            if before not in self._by_id:
                raise PatternConfigError(f"Unknown bank id: {before}", bank_id=before)
            sets.insert(self.bank_ids.index(before), pattern_set)
        logger.debug(f"Registered bank pattern set {pattern_set.bank_id}")
        return BankPatternRegistry(sets)

    def with_priority(self, order: Sequence[str]) -> "BankPatternRegistry":
        """
        Return a registry reordered so the given ids come first.

        Ids not named keep their relative order after the named ones.
        """
        unknown = [bank_id for bank_id in order if bank_id not in self._by_id]
        if unknown:
            raise PatternConfigError(f"Unknown bank id(s) in priority: {unknown}")

        head = [self._by_id[bank_id] for bank_id in dict.fromkeys(order)]
        tail = [s for s in self._sets if s.bank_id not in order]
        return BankPatternRegistry(head + tail)


DEFAULT_PATTERN_SETS: Tuple[BankPatternSet, ...] = (HDFC, ICICI, SBI, AXIS, KOTAK, UPI)

DEFAULT_REGISTRY = BankPatternRegistry(DEFAULT_PATTERN_SETS)
