"""Spending category models for merchant classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class CategoryId(Enum):
    """Spending categories a merchant can be classified into."""

    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    BILLS = "bills"
    GROCERIES = "groceries"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Human-readable label for the category."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: Dict[CategoryId, str] = {
    CategoryId.FOOD: "Food & Dining",
    CategoryId.TRANSPORT: "Transport",
    CategoryId.SHOPPING: "Shopping",
    CategoryId.ENTERTAINMENT: "Entertainment",
    CategoryId.BILLS: "Bills & Utilities",
    CategoryId.GROCERIES: "Groceries",
    CategoryId.OTHER: "Other",
}


@dataclass(frozen=True)
class CategoryClassification:
    """
    Result of classifying a merchant name.

    Confidence is a fixed constant per match type (override, keyword hit,
    fallback), not a calibrated probability.
    """

    category_id: CategoryId
    category_label: str
    confidence: float
    alternative_categories: Tuple["CategoryClassification", ...] = ()

    @classmethod
    def for_category(cls, category_id: CategoryId, confidence: float) -> "CategoryClassification":
        """Build a classification with the label paired to category_id."""
        return cls(
            category_id=category_id,
            category_label=category_id.label,
            confidence=confidence,
        )

    @property
    def is_fallback(self) -> bool:
        """True when no keyword matched and OTHER was assigned by default."""
        return self.category_id == CategoryId.OTHER and self.confidence < 0.5

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "category_id": self.category_id.value,
            "category_label": self.category_label,
            "confidence": self.confidence,
            "alternative_categories": [a.to_dict() for a in self.alternative_categories],
        }
