"""
Unit tests for parser configuration loading.
"""

import json
import pytest
from decimal import Decimal

from smsfin.core.config import CONFIG_ENV_VAR, ParserConfig, load_config
from smsfin.core.exceptions import ConfigError, PatternConfigError
from smsfin.parsers.sms.ingester import DEFAULT_BANK_SENDERS
from smsfin.services.categorization import CategoryId


@pytest.fixture
def config_dict(yes_bank_entry):
    """Provide a full config dictionary."""
    return {
        "extra_banks": [yes_bank_entry],
        "detection_priority": ["sbi"],
        "merchant_overrides": {"chaayos": "food"},
        "sender_filters": ["YESBNK"],
    }


@pytest.fixture
def config_file(tmp_path, config_dict):
    path = tmp_path / "smsfin.json"
    path.write_text(json.dumps(config_dict), encoding="utf-8")
    return path


class TestParserConfigFromDict:
    """Tests for ParserConfig.from_dict()."""

    def test_full_config(self, config_dict):
        config = ParserConfig.from_dict(config_dict)

        assert len(config.extra_banks) == 1
        assert config.detection_priority == ["sbi"]
        assert config.merchant_overrides == {"chaayos": "food"}
        assert config.sender_filters == ["YESBNK"]

    def test_empty_config_is_default(self):
        assert ParserConfig.from_dict({}) == ParserConfig()

    @pytest.mark.parametrize("data", [
        [],
        {"extra_banks": {"bank_id": "yes"}},
        {"merchant_overrides": ["chaayos"]},
        {"detection_priority": None},
        {"detection_priority": "sbi"},
        {"detection_priority": ["sbi", 3]},
        {"sender_filters": "HDFCBK"},
        {"sender_filters": ["HDFCBK", None]},
    ])
    def test_invalid_shapes(self, data):
        with pytest.raises(ConfigError):
            ParserConfig.from_dict(data)

    @pytest.mark.parametrize("key", ["detection_priority", "sender_filters"])
    def test_string_list_errors_name_field(self, key):
        with pytest.raises(ConfigError) as exc_info:
            ParserConfig.from_dict({key: "HDFCBK"})
        assert exc_info.value.field == key

    def test_null_sender_filters_keeps_default(self):
        assert ParserConfig.from_dict({"sender_filters": None}).sender_filters is None


class TestBuildComponents:
    """Tests for build_registry/classifier/parser/ingester."""

    def test_default_registry(self):
        assert ParserConfig().build_registry().bank_ids == (
            "hdfc", "icici", "sbi", "axis", "kotak", "upi"
        )

    def test_extra_bank_before_upi_and_priority(self, config_dict):
        registry = ParserConfig.from_dict(config_dict).build_registry()
        assert registry.bank_ids == ("sbi", "hdfc", "icici", "axis", "kotak", "yes", "upi")

    def test_bad_extra_bank_pattern(self):
        config = ParserConfig(extra_banks=[{
            "bank_id": "bad",
            "bank_name": "Bad Bank",
            "debit": [r"(?P<amount>\d+"],
        }])
        with pytest.raises(PatternConfigError):
            config.build_registry()

    def test_unknown_priority_id(self):
        with pytest.raises(PatternConfigError):
            ParserConfig(detection_priority=["nope"]).build_registry()

    def test_classifier_overrides(self):
        classifier = ParserConfig(merchant_overrides={"chaayos": "FOOD"}).build_classifier()
        result = classifier.classify("CHAAYOS KORAMANGALA")

        assert result.category_id == CategoryId.FOOD
        assert result.confidence == 1.0

    def test_invalid_category(self):
        config = ParserConfig(merchant_overrides={"chaayos": "beverages"})
        with pytest.raises(ConfigError) as exc_info:
            config.build_classifier()
        assert exc_info.value.field == "merchant_overrides"

    def test_build_parser(self, config_dict):
        parser = ParserConfig.from_dict(config_dict).build_parser()
        txn = parser.parse("Yes Bank: INR 250.00 debited from A/c XX3333. Avl Bal: INR 750.00")

        assert txn.bank_id == "yes"
        assert txn.amount == Decimal("250.00")
        assert txn.balance == Decimal("750.00")

    def test_build_ingester_filters(self, config_dict):
        assert ParserConfig.from_dict(config_dict).build_ingester().sender_filters == ("YESBNK",)
        assert ParserConfig().build_ingester().sender_filters == DEFAULT_BANK_SENDERS


class TestLoadConfig:
    """Tests for load_config() resolution."""

    def test_no_path_no_env(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert load_config() == ParserConfig()

    def test_explicit_path(self, config_file):
        config = load_config(config_file)
        assert config.detection_priority == ["sbi"]

    def test_env_var(self, monkeypatch, config_file):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert load_config().sender_filters == ["YESBNK"]

    def test_explicit_path_beats_env(self, monkeypatch, tmp_path, config_file):
        other = tmp_path / "other.json"
        other.write_text(json.dumps({"detection_priority": ["kotak"]}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

        assert load_config(other).detection_priority == ["kotak"]

    def test_missing_file_falls_back(self, tmp_path, caplog):
        config = load_config(tmp_path / "missing.json")

        assert config == ParserConfig()
        assert "Config file not found" in caplog.text

    def test_invalid_json_falls_back(self, tmp_path, caplog):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_config(path) == ParserConfig()
        assert "Failed to load config" in caplog.text
