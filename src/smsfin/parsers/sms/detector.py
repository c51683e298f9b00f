"""
SMS Source Detector - identifies which bank's format an SMS uses.

Detection is a case-insensitive substring search over each pattern set's
detection tokens, walked in registry priority order (first match wins).
Priority order, not the order tokens appear in the message, decides when an
SMS mentions more than one bank.

Usage:
    from smsfin.parsers.sms.detector import SourceDetector

    detector = SourceDetector()
    bank_id = detector.detect("HDFC Bank: INR 500.00 has been debited ...")
"""

import logging
from typing import Optional

from smsfin.parsers.sms.models import BankPatternSet
from smsfin.parsers.sms.patterns import BankPatternRegistry, DEFAULT_REGISTRY

logger = logging.getLogger(__name__)


class SourceDetector:
    """Resolves raw SMS text to a bank id from a pattern registry."""

    def __init__(self, registry: BankPatternRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def detect_pattern_set(self, sms_text: str) -> Optional[BankPatternSet]:
        """Return the matching pattern set, or None for an unrecognized sender."""
        if not isinstance(sms_text, str) or not sms_text.strip():
            return None

        text_lower = sms_text.lower()
        for pattern_set in self.registry:
            if pattern_set.matches_source(text_lower):
                return pattern_set

        logger.debug(f"Unrecognized SMS source: {sms_text[:40]!r}")
        return None

    def detect(self, sms_text: str) -> Optional[str]:
        """
        Detect the bank id for an SMS.

        Args:
            sms_text: Raw SMS body

        Returns:
            Bank id (e.g. "hdfc", "upi") or None if nothing matches
        """
        pattern_set = self.detect_pattern_set(sms_text)
        return pattern_set.bank_id if pattern_set else None


def detect_source(
    sms_text: str,
    registry: BankPatternRegistry = DEFAULT_REGISTRY,
) -> Optional[str]:
    """Convenience function to detect the bank id of an SMS."""
    return SourceDetector(registry).detect(sms_text)
