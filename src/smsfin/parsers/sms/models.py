"""
SMS transaction data models.

Dataclasses for bank pattern sets and parsed SMS transactions.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Pattern, Sequence, Tuple

from smsfin.core.exceptions import PatternConfigError
from smsfin.services.categorization.models import CategoryClassification


UNKNOWN_MERCHANT = "Unknown"

# Named group each rule family must expose
REQUIRED_GROUPS = {
    "debit": "amount",
    "credit": "amount",
    "balance": "balance",
    "account": "account",
    "reference": "reference",
}


class TransactionType(Enum):
    """Direction of money movement described by an SMS."""

    EXPENSE = "expense"  # Debit
    INCOME = "income"    # Credit


def compile_rules(
    rules: Sequence[str],
    family: str,
    bank_id: str = None,
) -> Tuple[Pattern, ...]:
    """
    Compile regex strings for one rule family (debit, credit, ...).

    Args:
        rules: Regex source strings
        family: Rule family name, one of REQUIRED_GROUPS
        bank_id: Owning bank id, used in error messages

    Returns:
        Tuple of case-insensitive compiled patterns

    Raises:
        PatternConfigError: If a rule does not compile or lacks its named group
    """
    if isinstance(rules, str):
        rules = [rules]

    group = REQUIRED_GROUPS[family]
    compiled = []
    for rule in rules:
        try:
            pattern = re.compile(rule, re.IGNORECASE)
        except re.error as e:
            raise PatternConfigError(
                f"Invalid {family} pattern for {bank_id}: {e}", bank_id=bank_id
            ) from e
        if group not in pattern.groupindex:
            raise PatternConfigError(
                f"{family} pattern for {bank_id} has no '{group}' group: {rule}",
                bank_id=bank_id,
            )
        compiled.append(pattern)
    return tuple(compiled)


@dataclass(frozen=True)
class BankPatternSet:
    """
    Field-extraction rules for one bank or SMS source.

    Each rule family is a tuple of compiled patterns tried in order; the
    first one that matches wins. Debit/credit rules capture ``amount`` and
    optionally ``merchant``; balance rules capture ``balance`` and are
    anchored on balance keywords only.
    """

    bank_id: str
    bank_name: str
    detection_tokens: Tuple[str, ...]
    debit: Tuple[Pattern, ...]
    credit: Tuple[Pattern, ...]
    balance: Tuple[Pattern, ...] = ()
    account: Tuple[Pattern, ...] = ()
    reference: Tuple[Pattern, ...] = ()

    def __post_init__(self):
        if not self.bank_id:
            raise PatternConfigError("Pattern set requires a bank_id")
        if not self.detection_tokens:
            raise PatternConfigError(
                f"Pattern set {self.bank_id} has no detection tokens",
                bank_id=self.bank_id,
            )
        if not self.debit and not self.credit:
            raise PatternConfigError(
                f"Pattern set {self.bank_id} needs a debit or credit pattern",
                bank_id=self.bank_id,
            )

    def matches_source(self, text_lower: str) -> bool:
        """Check whether any detection token occurs in lowercased text."""
        return any(token in text_lower for token in self.detection_tokens)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BankPatternSet":
        """
        Create a pattern set from a dictionary of regex strings.

        Expected keys: bank_id, bank_name, detection_tokens, debit, credit,
        and optionally balance, account, reference. Pattern values may be a
        single string or a list of strings.
        """
        bank_id = data.get("bank_id")
        if not bank_id or not data.get("bank_name"):
            raise PatternConfigError("Bank entry requires bank_id and bank_name", bank_id=bank_id)

        tokens = data.get("detection_tokens") or [bank_id]
        if isinstance(tokens, str):
            tokens = [tokens]

        return cls(
            bank_id=bank_id,
            bank_name=data["bank_name"],
            detection_tokens=tuple(t.lower() for t in tokens),
            debit=compile_rules(data.get("debit", []), "debit", bank_id),
            credit=compile_rules(data.get("credit", []), "credit", bank_id),
            balance=compile_rules(data.get("balance", []), "balance", bank_id),
            account=compile_rules(data.get("account", []), "account", bank_id),
            reference=compile_rules(data.get("reference", []), "reference", bank_id),
        )


@dataclass(frozen=True)
class RawFields:
    """Fields pulled out of one SMS body before classification."""

    transaction_type: TransactionType
    amount: Decimal
    merchant_name: Optional[str] = None
    account_last4: Optional[str] = None
    balance: Optional[Decimal] = None
    reference_number: Optional[str] = None


@dataclass(frozen=True)
class ParsedTransaction:
    """A transaction recovered from a bank SMS."""

    transaction_type: TransactionType
    amount: Decimal
    bank_name: str
    bank_id: str
    merchant_name: Optional[str] = None
    account_last4: Optional[str] = None
    balance: Optional[Decimal] = None
    reference_number: Optional[str] = None
    category: Optional[CategoryClassification] = None

    @property
    def is_expense(self) -> bool:
        """Check if transaction is a debit."""
        return self.transaction_type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> Decimal:
        """Return amount with sign (negative for expenses)."""
        if self.is_expense:
            return -self.amount
        return self.amount

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dictionary."""
        return {
            "type": self.transaction_type.value,
            "amount": str(self.amount),
            "merchant_name": self.merchant_name,
            "bank_name": self.bank_name,
            "bank_id": self.bank_id,
            "account_last4": self.account_last4,
            "balance": str(self.balance) if self.balance is not None else None,
            "reference_number": self.reference_number,
            "category": self.category.to_dict() if self.category else None,
        }
