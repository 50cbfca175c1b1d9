"""Configuration files are seeded on first run and healed when keys go missing."""
from pathlib import Path

import pytest
import yaml

from invoicegen.config import ConfigStore, WordDictionary, backfill
from invoicegen.config.defaults import DEFAULT_CONFIG
from invoicegen.core.errors import InvalidConfigError, MissingConfigKeyError


def test_load_writes_defaults_when_file_is_absent(tmp_path: Path):
    path = tmp_path / "config.yaml"

    store = ConfigStore.load(path)

    assert path.exists()
    assert yaml.safe_load(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG
    assert store.as_dict() == DEFAULT_CONFIG


def test_load_backfills_missing_keys_and_keeps_user_values(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("company:\n  name: Wile E. Coyote Ltd\n", encoding="utf-8")

    store = ConfigStore.load(path)

    persisted = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert persisted["company"]["name"] == "Wile E. Coyote Ltd"
    assert persisted["company"]["address"] == DEFAULT_CONFIG["company"]["address"]
    assert persisted["invoice"]["tax_rate"] == 0.2
    assert store.get_str("company", "name") == "Wile E. Coyote Ltd"


def test_backfill_is_idempotent_across_loads(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("invoice:\n  tax_rate: 0.1\n", encoding="utf-8")

    ConfigStore.load(path)
    first = path.read_text(encoding="utf-8")
    ConfigStore.load(path)
    second = path.read_text(encoding="utf-8")

    assert first == second
    assert yaml.safe_load(second)["invoice"]["tax_rate"] == 0.1


def test_backfill_reports_changes_only_once():
    data = {"company": {"name": "X"}}

    assert backfill(data, DEFAULT_CONFIG) is True
    assert backfill(data, DEFAULT_CONFIG) is False


def test_unknown_key_fails_loudly(config: ConfigStore):
    with pytest.raises(MissingConfigKeyError) as excinfo:
        config.get("company", "vat_number")

    assert "company.vat_number" in str(excinfo.value)

    with pytest.raises(MissingConfigKeyError):
        config.get("shipping", "carrier")


def test_optional_fields_are_empty_strings(config: ConfigStore):
    assert config.get_str("company", "logo") == ""
    assert config.get_str("bank", "iban") == ""


def test_wrong_type_is_reported():
    store = ConfigStore({"invoice": {"tax_enabled": "yes", "tax_rate": "twenty"}})

    with pytest.raises(InvalidConfigError):
        store.get_bool("invoice", "tax_enabled")
    with pytest.raises(InvalidConfigError):
        store.get_float("invoice", "tax_rate")


def test_tax_rate_is_zero_when_disabled(config: ConfigStore):
    assert config.tax_rate("invoice") == 0.2

    data = config.as_dict()
    data["quotation"]["tax_enabled"] = False
    assert ConfigStore(data).tax_rate("quotation") == 0.0


def test_unparsable_file_is_reported(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("company: [unclosed\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError):
        ConfigStore.load(path)


def test_word_dictionary_lookup_and_dates(tmp_path: Path, today):
    words = WordDictionary.load(tmp_path / "lang.yaml")

    assert words.word("invoice", "title") == "Invoice"
    assert words.format_date(today) == "5 March 2024"
    with pytest.raises(MissingConfigKeyError):
        words.word("invoice", "does_not_exist")
