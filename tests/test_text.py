"""
Tests for name normalization and capitalization.
"""

from receipt_ledger.utils.text import capitalize_name, normalize_text


class TestNormalizeText:

    def test_accents_and_case_are_ignored(self):
        assert normalize_text("JOÃO SILVA") == normalize_text("joao silva")

    def test_trims_surrounding_whitespace(self):
        assert normalize_text("  Março ") == "marco"

    def test_none_and_empty_become_empty_string(self):
        assert normalize_text(None) == ""
        assert normalize_text("") == ""

    def test_is_idempotent(self):
        for value in ["José De Souza", "  ÇÃO ", "Comp - Março"]:
            once = normalize_text(value)
            assert normalize_text(once) == once


class TestCapitalizeName:

    def test_upper_case_name(self):
        assert capitalize_name("JOSÉ DE SOUZA") == "José De Souza"

    def test_lower_case_name(self):
        assert capitalize_name("maria santos") == "Maria Santos"

    def test_is_idempotent(self):
        once = capitalize_name("joão da silva")
        assert capitalize_name(once) == once == "João Da Silva"
