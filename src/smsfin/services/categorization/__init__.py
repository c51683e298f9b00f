"""
Merchant categorization for smsfin.

Maps free-text merchant names to a fixed set of spending categories.
"""

from smsfin.services.categorization.models import (
    CATEGORY_LABELS,
    CategoryClassification,
    CategoryId,
)
from smsfin.services.categorization.category_rules import (
    DEFAULT_CLASSIFIER,
    FALLBACK_CONFIDENCE,
    KEYWORD_CONFIDENCE,
    MERCHANT_KEYWORDS,
    OVERRIDE_CONFIDENCE,
    MerchantClassifier,
    classify_merchant,
)

__all__ = [
    "CATEGORY_LABELS",
    "CategoryClassification",
    "CategoryId",
    "DEFAULT_CLASSIFIER",
    "FALLBACK_CONFIDENCE",
    "KEYWORD_CONFIDENCE",
    "MERCHANT_KEYWORDS",
    "OVERRIDE_CONFIDENCE",
    "MerchantClassifier",
    "classify_merchant",
]
