"""
Tests for the row/column locator used by the ledger writer.
"""

import pytest

from receipt_ledger.errors import ColumnNotFound, RowNotFound
from receipt_ledger.services.locator import (
    column_letter,
    find_column,
    find_row,
    locate_column,
    locate_row,
)


class TestFindRow:

    def test_match_ignores_case_and_accents(self):
        assert find_row(["Ana", "joao silva", "Bruno"], "JOÃO SILVA") == 1

    def test_first_match_wins(self):
        assert find_row(["Ana", "ANA"], "ana") == 0

    def test_empty_rows_keep_their_position(self):
        assert find_row(["Ana", None, "", "Bruno"], "Bruno") == 3

    def test_no_match_returns_none(self):
        assert find_row(["Ana", "Bruno"], "Carla") is None

    def test_partial_name_does_not_match(self):
        assert find_row(["João Silva"], "João") is None

    def test_blank_target_does_not_match_empty_row(self):
        assert find_row(["Ana", None, "Bruno"], "   ") is None
        assert find_row(["Ana", "", "Bruno"], "") is None


class TestFindColumn:

    def test_period_is_matched_as_substring(self):
        headers = ["Comp - Janeiro", "Comp - Fevereiro", "Comp - Março"]
        assert find_column(headers, "Fevereiro") == 1

    def test_period_match_ignores_accents(self):
        assert find_column(["Comp - Marco"], "Março") == 0

    def test_marker_is_required_when_given(self):
        headers = ["Fevereiro", "Comp - Fevereiro"]
        assert find_column(headers, "Fevereiro") == 0
        assert find_column(headers, "Fevereiro", marker="Comp") == 1

    def test_marker_is_matched_on_raw_header(self):
        # Normalization would lower-case the header, the marker is literal
        assert find_column(["comp - Fevereiro"], "Fevereiro", marker="Comp") is None

    def test_no_match_returns_none(self):
        assert find_column(["Comp - Janeiro", None], "Abril") is None


class TestColumnLetter:

    def test_offsets_from_start_column(self):
        assert column_letter("B", 0) == "B"
        assert column_letter("B", 10) == "L"

    def test_past_z_is_rejected(self):
        with pytest.raises(ValueError):
            column_letter("Y", 2)

    def test_negative_offset_is_rejected(self):
        with pytest.raises(ValueError):
            column_letter("B", -1)


class TestLocate:

    def test_locate_row_raises_with_searched_range(self):
        with pytest.raises(RowNotFound) as exc_info:
            locate_row(["Ana"], "Carla", "Comprovantes column A (rows 2-29)")

        assert exc_info.value.name == "Carla"
        assert "Comprovantes column A" in str(exc_info.value)

    def test_locate_column_raises_with_period(self):
        with pytest.raises(ColumnNotFound) as exc_info:
            locate_column(["Janeiro"], "Janeiro", "Comprovantes B1:L1", marker="Comp")

        assert exc_info.value.period == "Janeiro"
