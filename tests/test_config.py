"""
Tests for Settings.validate().

Validation is disabled on import in tests (VALIDATE_CONFIG=false), so each
test patches class attributes and calls validate() directly.
"""

import pytest

from receipt_ledger.config import Settings
from receipt_ledger.errors import ConfigurationMissing


def test_valid_configuration_passes():
    Settings.validate()


def test_missing_required_variables_are_listed(monkeypatch):
    monkeypatch.setattr(Settings, "GOOGLE_SHEET_ID", "")
    monkeypatch.setattr(Settings, "GOOGLE_REFRESH_TOKEN", "")

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings.validate()

    assert exc_info.value.missing == ["GOOGLE_SHEET_ID", "GOOGLE_REFRESH_TOKEN"]
    assert "GOOGLE_SHEET_ID" in str(exc_info.value)


def test_configuration_missing_is_a_value_error(monkeypatch):
    monkeypatch.setattr(Settings, "GOOGLE_API_KEY", "")

    with pytest.raises(ValueError):
        Settings.validate()


def test_end_row_before_start_row(monkeypatch):
    monkeypatch.setattr(Settings, "SHEET_NAME_START_ROW", 10)
    monkeypatch.setattr(Settings, "SHEET_NAME_END_ROW", 5)

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings.validate()

    assert exc_info.value.missing == []
    assert "SHEET_NAME_END_ROW must be >= SHEET_NAME_START_ROW" in exc_info.value.problems


def test_non_integer_row_is_reported(monkeypatch):
    monkeypatch.setattr(Settings, "SHEET_NAME_START_ROW", None)

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings.validate()

    assert "SHEET_NAME_START_ROW must be an integer" in exc_info.value.problems


@pytest.mark.parametrize("column", ["AA", "", "1", "b"])
def test_column_must_be_single_letter(monkeypatch, column):
    monkeypatch.setattr(Settings, "SHEET_MONTH_END_COLUMN", column)

    with pytest.raises(ConfigurationMissing):
        Settings.validate()


def test_unknown_locale_and_timezone(monkeypatch):
    monkeypatch.setattr(Settings, "LEDGER_LOCALE", "fr-FR")
    monkeypatch.setattr(Settings, "LEDGER_TIMEZONE", "Mars/Olympus")

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings.validate()

    assert len(exc_info.value.problems) == 2


def test_separator_must_be_one_character(monkeypatch):
    monkeypatch.setattr(Settings, "SHEETS_FORMULA_SEPARATOR", ";;")

    with pytest.raises(ConfigurationMissing):
        Settings.validate()


def test_month_columns_must_be_in_order(monkeypatch):
    monkeypatch.setattr(Settings, "SHEET_MONTH_START_COLUMN", "L")
    monkeypatch.setattr(Settings, "SHEET_MONTH_END_COLUMN", "B")

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings.validate()

    assert (
        "SHEET_MONTH_END_COLUMN must not come before SHEET_MONTH_START_COLUMN"
        in exc_info.value.problems
    )
