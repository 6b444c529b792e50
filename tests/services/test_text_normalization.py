"""Unit tests for text normalization."""

import unicodedata

from xenolexia.services import fold_case, normalize_text


class TestTextNormalization:
    """Tests for normalize_text function."""

    def test_trim_both_sides(self):
        """Should remove whitespace from both sides."""
        assert normalize_text("   καλημέρα   ") == "καλημέρα"

    def test_collapse_mixed_whitespace(self):
        """Should collapse mixed whitespace to single space."""
        assert normalize_text("hello \t\n  world") == "hello world"

    def test_composes_to_nfc(self):
        """Decomposed accents should compose so equal-looking strings compare equal."""
        decomposed = unicodedata.normalize("NFD", "café")

        assert decomposed != "café"
        assert normalize_text(decomposed) == "café"


class TestFoldCase:
    """Tests for language-aware word folding."""

    def test_default_lowercases(self):
        assert fold_case("House", "en") == "house"

    def test_straightens_apostrophes(self):
        assert fold_case("Don’t", "en") == "don't"

    def test_turkish_capital_i(self):
        assert fold_case("Iİ", "tr") == "ıi"

    def test_greek_final_sigma(self):
        assert fold_case("Λόγος", "el") == "λόγοσ"

    def test_german_keeps_sharp_s(self):
        assert fold_case("STRAßE", "de") == "straße"
