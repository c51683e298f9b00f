"""
SMS transaction parser.

Runs the full pipeline for one SMS body:
detect source -> extract fields -> classify merchant -> assemble record.

Every call is a pure function of its input; the pattern registry and the
merchant classifier are immutable and injected, so one parser can be shared
between threads.
"""

import logging
from typing import Iterable, List, Optional

from smsfin.parsers.sms.detector import SourceDetector
from smsfin.parsers.sms.extractor import extract_fields
from smsfin.parsers.sms.models import ParsedTransaction, TransactionType
from smsfin.parsers.sms.patterns import BankPatternRegistry, DEFAULT_REGISTRY
from smsfin.services.categorization import DEFAULT_CLASSIFIER, MerchantClassifier

logger = logging.getLogger(__name__)


class SMSParser:
    """Converts raw bank SMS text into ParsedTransaction records."""

    def __init__(
        self,
        registry: BankPatternRegistry = DEFAULT_REGISTRY,
        classifier: MerchantClassifier = DEFAULT_CLASSIFIER,
    ):
        """
        Initialize parser.

        Args:
            registry: Bank pattern table, in detection priority order
            classifier: Merchant classifier applied to expenses
        """
        self.registry = registry
        self.classifier = classifier
        self.detector = SourceDetector(registry)

    def parse(self, sms_text: str) -> Optional[ParsedTransaction]:
        """
        Parse one SMS body.

        Args:
            sms_text: Raw SMS body (untrimmed)

        Returns:
            ParsedTransaction, or None when the sender is unrecognized or the
            body does not describe a transaction
        """
        pattern_set = self.detector.detect_pattern_set(sms_text)
        if pattern_set is None:
            return None

        fields = extract_fields(sms_text, pattern_set)
        if fields is None:
            return None

        category = None
        if fields.transaction_type == TransactionType.EXPENSE:
            category = self.classifier.classify(fields.merchant_name)

        txn = ParsedTransaction(
            transaction_type=fields.transaction_type,
            amount=fields.amount,
            bank_name=pattern_set.bank_name,
            bank_id=pattern_set.bank_id,
            merchant_name=fields.merchant_name,
            account_last4=fields.account_last4,
            balance=fields.balance,
            reference_number=fields.reference_number,
            category=category,
        )
        logger.debug(
            f"Parsed {txn.transaction_type.value} of {txn.amount} from {txn.bank_name}"
        )
        return txn

    def parse_all(self, messages: Iterable[str]) -> List[Optional[ParsedTransaction]]:
        """Parse many SMS bodies; results line up with the input order."""
        return [self.parse(text) for text in messages]


DEFAULT_PARSER = SMSParser()


def parse_sms(sms_text: str, parser: Optional[SMSParser] = None) -> Optional[ParsedTransaction]:
    """
    Parse a bank SMS with the default pattern table and classifier.

    Examples:
        >>> txn = parse_sms("SBI: Rs.500 debited from A/c XX9012 for UPI/P2M/SWIGGY on 25-Feb. Bal: Rs.12,345.67")
        >>> txn.amount, txn.balance
        (Decimal('500.00'), Decimal('12345.67'))
    """
    return (parser or DEFAULT_PARSER).parse(sms_text)
