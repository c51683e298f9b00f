"""
Bank SMS parsers for smsfin.

Supports transaction alerts from:
- HDFC Bank
- ICICI Bank
- SBI
- Axis Bank
- Kotak Bank
- Generic UPI / wallet alerts (Paytm, PhonePe, GPay)
"""

from smsfin.parsers.sms.models import (
    BankPatternSet,
    ParsedTransaction,
    RawFields,
    TransactionType,
    UNKNOWN_MERCHANT,
)
from smsfin.parsers.sms.patterns import (
    BankPatternRegistry,
    DEFAULT_PATTERN_SETS,
    DEFAULT_REGISTRY,
)
from smsfin.parsers.sms.amounts import parse_amount, select_balance
from smsfin.parsers.sms.detector import SourceDetector, detect_source
from smsfin.parsers.sms.extractor import extract_fields
from smsfin.parsers.sms.parser import DEFAULT_PARSER, SMSParser, parse_sms
from smsfin.parsers.sms.samples import SAMPLE_SMS_MESSAGES
from smsfin.parsers.sms.ingester import (
    ImportResult,
    SMSIngester,
    SMSMessage,
    export_transactions,
    is_bank_sender,
    load_messages,
)

__all__ = [
    "BankPatternSet",
    "ParsedTransaction",
    "RawFields",
    "TransactionType",
    "UNKNOWN_MERCHANT",
    "BankPatternRegistry",
    "DEFAULT_PATTERN_SETS",
    "DEFAULT_REGISTRY",
    "parse_amount",
    "select_balance",
    "SourceDetector",
    "detect_source",
    "extract_fields",
    "DEFAULT_PARSER",
    "SMSParser",
    "parse_sms",
    "SAMPLE_SMS_MESSAGES",
    "ImportResult",
    "SMSIngester",
    "SMSMessage",
    "export_transactions",
    "is_bank_sender",
    "load_messages",
]
