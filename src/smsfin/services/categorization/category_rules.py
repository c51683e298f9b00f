"""
Merchant Category Rules.

Provides keyword-based classification of merchant names (as extracted from
bank SMS) into spending categories.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from smsfin.services.categorization.models import CategoryClassification, CategoryId

logger = logging.getLogger(__name__)


OVERRIDE_CONFIDENCE = 1.0
KEYWORD_CONFIDENCE = 0.95
FALLBACK_CONFIDENCE = 0.3


# Keyword -> category, checked in declaration order (first hit wins).
# Longer, more specific keywords must come before shorter ones they contain.
MERCHANT_KEYWORDS: Tuple[Tuple[str, CategoryId], ...] = (
    # Food & Dining
    ("swiggy", CategoryId.FOOD),
    ("zomato", CategoryId.FOOD),
    ("uber eats", CategoryId.FOOD),
    ("dominos", CategoryId.FOOD),
    ("mcdonalds", CategoryId.FOOD),
    ("starbucks", CategoryId.FOOD),
    ("pizza hut", CategoryId.FOOD),
    ("kfc", CategoryId.FOOD),
    ("subway", CategoryId.FOOD),
    ("cafe", CategoryId.FOOD),
    ("restaurant", CategoryId.FOOD),
    ("food", CategoryId.FOOD),

    # Transport
    ("uber", CategoryId.TRANSPORT),
    ("ola cabs", CategoryId.TRANSPORT),
    ("olacabs", CategoryId.TRANSPORT),
    ("rapido", CategoryId.TRANSPORT),
    ("metro", CategoryId.TRANSPORT),
    ("petrol", CategoryId.TRANSPORT),
    ("fuel", CategoryId.TRANSPORT),
    ("parking", CategoryId.TRANSPORT),
    ("irctc", CategoryId.TRANSPORT),
    ("redbus", CategoryId.TRANSPORT),

    # Shopping ("amazon prime" must precede "amazon")
    ("amazon prime", CategoryId.ENTERTAINMENT),
    ("amazon", CategoryId.SHOPPING),
    ("flipkart", CategoryId.SHOPPING),
    ("myntra", CategoryId.SHOPPING),
    ("ajio", CategoryId.SHOPPING),
    ("nykaa", CategoryId.SHOPPING),
    ("meesho", CategoryId.SHOPPING),
    ("shopping mall", CategoryId.SHOPPING),

    # Entertainment
    ("netflix", CategoryId.ENTERTAINMENT),
    ("spotify", CategoryId.ENTERTAINMENT),
    ("hotstar", CategoryId.ENTERTAINMENT),
    ("youtube", CategoryId.ENTERTAINMENT),
    ("pvr", CategoryId.ENTERTAINMENT),
    ("inox", CategoryId.ENTERTAINMENT),
    ("movie", CategoryId.ENTERTAINMENT),
    ("game", CategoryId.ENTERTAINMENT),

    # Bills & Utilities
    ("electricity", CategoryId.BILLS),
    ("water", CategoryId.BILLS),
    ("gas bill", CategoryId.BILLS),
    ("indane", CategoryId.BILLS),
    ("airtel", CategoryId.BILLS),
    ("jio", CategoryId.BILLS),
    ("vodafone", CategoryId.BILLS),
    ("bsnl", CategoryId.BILLS),
    ("broadband", CategoryId.BILLS),
    ("wifi", CategoryId.BILLS),
    ("recharge", CategoryId.BILLS),
    ("insurance", CategoryId.BILLS),

    # Groceries
    ("bigbasket", CategoryId.GROCERIES),
    ("blinkit", CategoryId.GROCERIES),
    ("zepto", CategoryId.GROCERIES),
    ("instamart", CategoryId.GROCERIES),
    ("dmart", CategoryId.GROCERIES),
    ("reliance", CategoryId.GROCERIES),
    ("grocery", CategoryId.GROCERIES),
    ("supermarket", CategoryId.GROCERIES),
)


def _normalize(merchant_name) -> str:
    if not isinstance(merchant_name, str):
        return ""
    return merchant_name.strip().lower()


class MerchantClassifier:
    """
    Classifies merchant names into spending categories.

    Uses substring keyword matching in table order. Caller-supplied
    overrides are checked before the table. Anything unmatched falls back to
    OTHER at low confidence, so classify() never raises.
    """

    def __init__(
        self,
        keywords: Sequence[Tuple[str, CategoryId]] = MERCHANT_KEYWORDS,
        custom_overrides: Optional[Mapping[str, CategoryId]] = None,
    ):
        """
        Initialize classifier.

        Args:
            keywords: Ordered (keyword, category) pairs
            custom_overrides: Dictionary of keyword -> category overrides,
                e.g. corrections a user made to earlier classifications
        """
        self.keywords = tuple((kw.lower(), cat) for kw, cat in keywords)
        self.custom_overrides: Dict[str, CategoryId] = {
            kw.lower(): cat for kw, cat in (custom_overrides or {}).items()
        }

    def classify(self, merchant_name: str) -> CategoryClassification:
        """
        Classify a merchant name.

        Args:
            merchant_name: Counterparty text from an SMS or manual entry

        Returns:
            CategoryClassification (OTHER at 0.3 when nothing matches)
        """
        normalized = _normalize(merchant_name)

        if normalized:
            for keyword, category in self.custom_overrides.items():
                if keyword in normalized:
                    return CategoryClassification.for_category(category, OVERRIDE_CONFIDENCE)

            for keyword, category in self.keywords:
                if keyword in normalized:
                    return CategoryClassification.for_category(category, KEYWORD_CONFIDENCE)

        logger.debug(f"No category keyword for merchant {normalized!r}, using fallback")
        return CategoryClassification.for_category(CategoryId.OTHER, FALLBACK_CONFIDENCE)

    def with_override(self, keyword: str, category: CategoryId) -> "MerchantClassifier":
        """Return a new classifier with one more override; self is unchanged."""
        overrides = dict(self.custom_overrides)
        overrides[keyword.lower()] = category
        return MerchantClassifier(self.keywords, overrides)

    def keywords_for(self, category: CategoryId) -> List[str]:
        """Get table keywords registered for a category."""
        return [kw for kw, cat in self.keywords if cat == category]


DEFAULT_CLASSIFIER = MerchantClassifier()


def classify_merchant(
    merchant_name: str,
    classifier: Optional[MerchantClassifier] = None,
) -> CategoryClassification:
    """
    Classify a merchant name with the default keyword table.

    Examples:
        >>> classify_merchant("SWIGGY ORDER").category_id
        <CategoryId.FOOD: 'food'>

        >>> classify_merchant("Unknown Store").confidence
        0.3
    """
    return (classifier or DEFAULT_CLASSIFIER).classify(merchant_name)
