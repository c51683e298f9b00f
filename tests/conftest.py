"""
Shared pytest fixtures for smsfin tests.

Provides reference SMS bodies, parsers and pattern registries.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from smsfin.parsers.sms.parser import SMSParser
from smsfin.parsers.sms.patterns import DEFAULT_REGISTRY
from smsfin.parsers.sms.samples import SAMPLE_SMS_MESSAGES
from smsfin.services.categorization import MerchantClassifier


@pytest.fixture
def parser():
    """Provide a parser with the default pattern table and classifier."""
    return SMSParser(registry=DEFAULT_REGISTRY, classifier=MerchantClassifier())


@pytest.fixture
def registry():
    """Provide the default bank pattern registry."""
    return DEFAULT_REGISTRY


@pytest.fixture
def sample_messages():
    """Provide the built-in reference SMS messages."""
    return list(SAMPLE_SMS_MESSAGES)


@pytest.fixture
def reference_sms():
    """Provide one reference SMS body per supported source, keyed by bank id."""
    by_sender = {m["sender"]: m["message"] for m in SAMPLE_SMS_MESSAGES}
    return {
        "hdfc": by_sender["HDFCBK"],
        "icici": by_sender["ICICIB"],
        "sbi": by_sender["SBIINB"],
        "axis": by_sender["AXISBK"],
        "upi": by_sender["PAYTM"],
        "kotak": by_sender["KOTAKB"],
    }


@pytest.fixture
def yes_bank_entry():
    """Provide a bank entry dict for a bank not in the default table."""
    return {
        "bank_id": "yes",
        "bank_name": "Yes Bank",
        "detection_tokens": ["yes bank"],
        "debit": [r"(?:INR|Rs\.?)\s*(?P<amount>[\d,]+(?:\.\d{2})?)\s*debited"],
        "credit": [],
        "balance": [r"Avl\s*Bal[:\s]*(?:INR|Rs\.?)\s*(?P<balance>[\d,]+(?:\.\d{2})?)"],
    }
