"""
smsfin - offline bank SMS transaction parser.

Turns Indian bank and UPI SMS alerts into structured transactions and tags
expenses with a spending category.

    >>> from smsfin import parse_sms
    >>> txn = parse_sms("HDFC Bank: Rs.1,250.00 debited from A/c XX1234 on 25-Feb at AMAZON. Avl Bal: Rs.45,678.90")
    >>> txn.merchant_name, txn.category.category_id.value
    ('AMAZON', 'shopping')
"""

__version__ = "0.1.0"

from smsfin.parsers.sms import (
    BankPatternRegistry,
    BankPatternSet,
    DEFAULT_REGISTRY,
    ParsedTransaction,
    SMSParser,
    TransactionType,
    detect_source,
    extract_fields,
    parse_sms,
)
from smsfin.services.categorization import (
    CategoryClassification,
    CategoryId,
    MerchantClassifier,
    classify_merchant,
)

__all__ = [
    "__version__",
    "BankPatternRegistry",
    "BankPatternSet",
    "DEFAULT_REGISTRY",
    "ParsedTransaction",
    "SMSParser",
    "TransactionType",
    "detect_source",
    "extract_fields",
    "parse_sms",
    "CategoryClassification",
    "CategoryId",
    "MerchantClassifier",
    "classify_merchant",
]
