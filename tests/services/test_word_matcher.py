"""Unit tests for WordMatcher."""

import pytest

from xenolexia.core import DictionaryEntry
from xenolexia.services import WordMatcher


def make_entry(word, target, source_language="en", target_language="el"):
    return DictionaryEntry(
        id=f"{source_language}_{target_language}_{word}",
        source_word=word,
        target_word=target,
        source_language=source_language,
        target_language=target_language,
        proficiency_level="beginner",
        frequency_rank=1,
    )


@pytest.fixture
def matcher():
    return WordMatcher("en", "el")


class TestLanguagePair:
    def test_known_pair_is_supported(self, matcher):
        assert matcher.is_supported
        assert matcher.get_language_pair() == ("en", "el")

    def test_codes_are_cleaned(self):
        assert WordMatcher(" EN ", "El").get_language_pair() == ("en", "el")

    @pytest.mark.parametrize(
        "source,target",
        [("xx", "el"), ("en", "klingon"), ("", "el"), (None, "el"), ("en", "en")],
    )
    def test_unsupported_pair_has_no_candidates(self, source, target):
        matcher = WordMatcher(source, target)

        assert not matcher.is_supported
        assert matcher.normalize("house") is None
        assert matcher.build_lookup_keys(["house"]) == ({}, [])


class TestNormalize:
    def test_lowercases(self, matcher):
        assert matcher.normalize("House") == "house"

    def test_numbers_are_not_candidates(self, matcher):
        assert matcher.normalize("1984") is None
        assert not matcher.is_candidate("42")

    def test_alphanumeric_is_candidate(self, matcher):
        assert matcher.normalize("mp3") == "mp3"

    def test_curly_apostrophe_is_straightened(self, matcher):
        assert matcher.normalize("don’t") == "don't"

    def test_length_bounds(self):
        matcher = WordMatcher("en", "el", min_word_length=3, max_word_length=6)

        assert matcher.normalize("an") is None
        assert matcher.normalize("bridges") is None
        assert matcher.normalize("river") == "river"

    def test_non_string_is_not_candidate(self, matcher):
        assert matcher.normalize(None) is None

    def test_greek_final_sigma_is_folded(self):
        matcher = WordMatcher("el", "en")

        assert matcher.normalize("ΛΟΓΟΣ") == "λογοσ"
        assert matcher.normalize("λόγος") == "λόγοσ"

    def test_turkish_dotless_i(self):
        matcher = WordMatcher("tr", "en")

        assert matcher.normalize("IRMAK") == "ırmak"
        assert matcher.normalize("İSTANBUL") == "istanbul"

    def test_german_sharp_s_is_kept(self):
        assert WordMatcher("de", "en").normalize("Straße") == "straße"


class TestLookupKeys:
    def test_build_lookup_keys_dedupes_keys(self, matcher):
        word_keys, unique_keys = matcher.build_lookup_keys(["hello", "Hello", "don’t", "42", "hello"])

        assert word_keys == {"hello": "hello", "Hello": "hello", "don’t": "don't"}
        assert unique_keys == ["hello", "don't"]

    def test_resolve_projects_entries_onto_words(self, matcher):
        entry = make_entry("hello", "γεια")
        word_keys = {"hello": "hello", "Hello": "hello", "world": "world"}

        resolved = matcher.resolve(word_keys, {"hello": entry, "world": None})

        assert resolved == {"hello": entry, "Hello": entry, "world": None}

    def test_resolve_drops_entries_for_other_pair(self, matcher):
        spanish = make_entry("hello", "hola", target_language="es")

        resolved = matcher.resolve({"hello": "hello"}, {"hello": spanish})

        assert resolved == {"hello": None}

    def test_is_within_level(self):
        assert WordMatcher.is_within_level("beginner", "intermediate")
        assert not WordMatcher.is_within_level("advanced", "beginner")
        assert not WordMatcher.is_within_level("unknown", "advanced")
