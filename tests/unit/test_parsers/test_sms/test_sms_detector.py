"""
Unit tests for SMS source detection.
"""

import pytest

from smsfin.parsers.sms.detector import SourceDetector, detect_source
from smsfin.parsers.sms.models import BankPatternSet


class TestDetectSource:
    """Tests for detect_source()."""

    @pytest.mark.parametrize("bank_id", ["hdfc", "icici", "sbi", "axis", "kotak", "upi"])
    def test_reference_messages(self, reference_sms, bank_id):
        """Test each reference SMS resolves to its own bank."""
        assert detect_source(reference_sms[bank_id]) == bank_id

    @pytest.mark.parametrize("text,expected", [
        ("hdfc bank: rs 10 debited", "hdfc"),
        ("Dear Customer, STATE BANK of India a/c debited", "sbi"),
        ("Rs 99 paid to merchant@ybl", "upi"),
    ])
    def test_case_insensitive_tokens(self, text, expected):
        assert detect_source(text) == expected

    def test_priority_order_not_text_order(self):
        """Test registry order decides between two bank names, not position."""
        text = "ICICI Bank: Rs 500 transferred to your HDFC Bank account"
        assert detect_source(text) == "hdfc"

    def test_bank_beats_upi(self, reference_sms):
        """Test a bank SMS mentioning UPI is attributed to the bank."""
        assert "UPI" in reference_sms["sbi"]
        assert detect_source(reference_sms["sbi"]) == "sbi"

    @pytest.mark.parametrize("text", [
        "Your OTP for login is 482913. Do not share it with anyone.",
        "Congratulations! You have won a free holiday.",
        "",
        "   ",
        None,
    ])
    def test_unrecognized_returns_none(self, text):
        assert detect_source(text) is None

    def test_custom_priority(self, registry):
        """Test a reordered registry changes the winner."""
        text = "ICICI Bank: Rs 500 transferred to your HDFC Bank account"
        assert detect_source(text, registry.with_priority(["icici"])) == "icici"


class TestSourceDetector:
    """Tests for the SourceDetector class."""

    def test_detect_pattern_set(self, registry, reference_sms):
        detector = SourceDetector(registry)
        pattern_set = detector.detect_pattern_set(reference_sms["kotak"])

        assert isinstance(pattern_set, BankPatternSet)
        assert pattern_set is registry.get("kotak")

    def test_extended_registry(self, registry, yes_bank_entry):
        detector = SourceDetector(
            registry.with_bank(BankPatternSet.from_dict(yes_bank_entry), before="upi")
        )
        assert detector.detect("YES BANK: INR 10 debited") == "yes"
        assert SourceDetector(registry).detect("YES BANK: INR 10 debited") is None
