r"""
Parser configuration.

Lets deployments extend the SMS pipeline without code changes:
- Onboard a new bank (append a pattern set entry)
- Change detection priority between banks
- Add merchant -> category corrections
- Change which SMS sender IDs are accepted for batch import

Loaded from a JSON file:

    {
        "extra_banks": [
            {
                "bank_id": "yes",
                "bank_name": "Yes Bank",
                "detection_tokens": ["yes bank"],
                "debit": ["(?:INR|Rs\\.?)\\s*(?P<amount>[\\d,]+(?:\\.\\d{2})?)\\s*debited"],
                "credit": [],
                "balance": ["Avl\\s*Bal[:\\s]*(?:INR|Rs\\.?)\\s*(?P<balance>[\\d,]+(?:\\.\\d{2})?)"]
            }
        ],
        "detection_priority": ["sbi", "hdfc"],
        "merchant_overrides": {"chaayos": "food"},
        "sender_filters": ["HDFCBK", "SBIINB"]
    }
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from smsfin.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SMSFIN_CONFIG"


def _string_list(value: Any, field_name: str) -> List[str]:
    """Validate a JSON list of strings; a bare string is rejected."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{field_name} must be a list of strings", field=field_name)
    return list(value)


@dataclass
class ParserConfig:
    """Configuration for the SMS parsing pipeline."""

    # Bank entries in BankPatternSet.from_dict() form, added after defaults
    extra_banks: List[Dict[str, Any]] = field(default_factory=list)

    # Bank ids to move to the front of the detection order
    detection_priority: List[str] = field(default_factory=list)

    # Merchant keyword -> category id ("food", "bills", ...)
    merchant_overrides: Dict[str, str] = field(default_factory=dict)

    # Accepted SMS sender IDs; None keeps the built-in list
    sender_filters: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create config from dictionary."""
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a JSON object")

        extra_banks = data.get("extra_banks", [])
        if not isinstance(extra_banks, list):
            raise ConfigError("extra_banks must be a list", field="extra_banks")

        overrides = data.get("merchant_overrides", {})
        if not isinstance(overrides, dict):
            raise ConfigError("merchant_overrides must be an object", field="merchant_overrides")

        detection_priority = _string_list(data.get("detection_priority", []), "detection_priority")

        sender_filters = data.get("sender_filters")
        if sender_filters is not None:
            sender_filters = _string_list(sender_filters, "sender_filters")

        return cls(
            extra_banks=extra_banks,
            detection_priority=detection_priority,
            merchant_overrides={str(k): str(v) for k, v in overrides.items()},
            sender_filters=sender_filters,
        )

    def build_registry(self):
        """Build the bank pattern registry this config describes."""
        from smsfin.parsers.sms.models import BankPatternSet
        from smsfin.parsers.sms.patterns import DEFAULT_REGISTRY

        registry = DEFAULT_REGISTRY
        for entry in self.extra_banks:
            # New banks outrank the generic UPI fallback
            before = "upi" if "upi" in registry else None
            registry = registry.with_bank(BankPatternSet.from_dict(entry), before=before)

        if self.detection_priority:
            registry = registry.with_priority(self.detection_priority)
        return registry

    def build_classifier(self):
        """Build the merchant classifier with configured overrides."""
        from smsfin.services.categorization import CategoryId, MerchantClassifier

        overrides = {}
        for keyword, category in self.merchant_overrides.items():
            try:
                overrides[keyword] = CategoryId(category.lower())
            except ValueError:
                raise ConfigError(
                    f"Unknown category '{category}' for merchant '{keyword}'",
                    field="merchant_overrides",
                )
        return MerchantClassifier(custom_overrides=overrides)

    def build_parser(self):
        """Build an SMSParser from this config."""
        from smsfin.parsers.sms.parser import SMSParser

        return SMSParser(registry=self.build_registry(), classifier=self.build_classifier())

    def build_ingester(self):
        """Build an SMSIngester using this config's parser and sender filters."""
        from smsfin.parsers.sms.ingester import DEFAULT_BANK_SENDERS, SMSIngester

        filters = self.sender_filters if self.sender_filters is not None else DEFAULT_BANK_SENDERS
        return SMSIngester(parser=self.build_parser(), sender_filters=filters)


def load_config(path: Optional[Union[str, Path]] = None) -> ParserConfig:
    """
    Load parser config.

    Priority:
    1. Explicit path
    2. $SMSFIN_CONFIG
    3. Default built-in config

    A missing or unreadable file falls back to defaults with a warning.
    """
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = os.environ[CONFIG_ENV_VAR]

    if path is None:
        return ParserConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return ParserConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config {config_path}: {e}")
        return ParserConfig()

    config = ParserConfig.from_dict(data)
    logger.debug(f"Loaded parser config from {config_path}")
    return config
