"""Unit tests for WordReplacer selection and rewriting."""

import pytest

from xenolexia.core import DictionaryEntry
from xenolexia.services import ReplacerOptions, Tokenizer, WordReplacer
from xenolexia.services.text_processing import reconstruct
from xenolexia.services.translation.word_replacer import create_marker, preserve_case

WORDS = ["cat", "dog", "sun", "sea", "sky", "red", "box", "cup", "pen", "map"]


def make_entry(word, target=None, level="beginner", rank=1, pos="noun", pronunciation=None):
    return DictionaryEntry(
        id=f"en_el_{word}",
        source_word=word,
        target_word=target or f"x{word}",
        source_language="en",
        target_language="el",
        proficiency_level=level,
        frequency_rank=rank,
        part_of_speech=pos,
        pronunciation=pronunciation,
    )


@pytest.fixture
def html():
    return "<p>" + " ".join(WORDS) + "</p>"


@pytest.fixture
def tokens(html):
    return Tokenizer().tokenize(html)


@pytest.fixture
def entries():
    return {word: make_entry(word) for word in WORDS}


def replaced_words(result):
    return [fw.original_word for fw in result.foreign_words]


class TestDensity:
    def test_zero_density_leaves_html_untouched(self, html, tokens, entries):
        result = WordReplacer(density=0.0).replace(html, tokens, entries)

        assert result.html == html
        assert result.foreign_words == []
        assert result.stats.replaced_tokens == 0
        assert result.stats.eligible_tokens == 10

    def test_full_density_without_spacing_replaces_everything(self, html, tokens, entries):
        result = WordReplacer(density=1.0, min_word_spacing=0).replace(html, tokens, entries)

        assert replaced_words(result) == WORDS

    def test_count_is_rounded_fraction_of_candidates(self, html, tokens, entries):
        result = WordReplacer(density=0.25, min_word_spacing=0).replace(html, tokens, entries)

        # 0.25 * 10 = 2.5 rounds half up to 3
        assert result.stats.replaced_tokens == 3
        assert result.stats.density_skipped == 7

    @pytest.mark.parametrize("density,expected", [(-0.5, 0), (3.0, 10)])
    def test_density_is_clamped(self, html, tokens, entries, density, expected):
        result = WordReplacer(density=density, min_word_spacing=0).replace(html, tokens, entries)

        assert result.stats.replaced_tokens == expected

    def test_no_candidates_means_no_replacements(self, html, tokens):
        result = WordReplacer(density=1.0).replace(html, tokens, {})

        assert result.html == html
        assert result.stats.eligible_tokens == 0
        assert result.stats.total_tokens == 10


class TestDistributedSelection:
    def test_one_pick_per_bucket_earliest_first(self, html, tokens, entries):
        result = WordReplacer(density=0.5, min_word_spacing=0).replace(html, tokens, entries)

        assert replaced_words(result) == ["cat", "sun", "sky", "box", "pen"]

    def test_spacing_is_enforced_during_selection(self, html, tokens, entries):
        result = WordReplacer(density=0.5, min_word_spacing=3).replace(html, tokens, entries)

        assert replaced_words(result) == ["cat", "sea", "box", "map"]

    def test_spacing_invariant_holds(self, html, tokens, entries):
        for spacing in range(0, 6):
            result = WordReplacer(density=1.0, min_word_spacing=spacing).replace(
                html, tokens, entries
            )
            positions = [WORDS.index(word) for word in replaced_words(result)]
            for before, after in zip(positions, positions[1:]):
                assert after - before >= spacing

    def test_spacing_larger_than_token_count_is_clamped(self, html, tokens, entries):
        result = WordReplacer(density=1.0, min_word_spacing=1000).replace(html, tokens, entries)

        assert replaced_words(result) == ["cat"]

    def test_selection_is_deterministic(self, html, tokens, entries):
        replacer = WordReplacer(density=0.3)

        first = replacer.replace(html, tokens, entries)
        second = replacer.replace(html, tokens, entries)

        assert first.html == second.html

    def test_unknown_strategy_falls_back_to_distributed(self, html, tokens, entries):
        distributed = WordReplacer(density=0.5, min_word_spacing=0)
        unknown = WordReplacer(density=0.5, min_word_spacing=0, selection_strategy="clever")

        assert unknown.replace(html, tokens, entries).html == distributed.replace(
            html, tokens, entries
        ).html


class TestOtherStrategies:
    def test_frequency_prefers_common_words(self, html, tokens):
        entries = {word: make_entry(word, rank=100 - i) for i, word in enumerate(WORDS)}
        replacer = WordReplacer(density=0.2, min_word_spacing=0, selection_strategy="frequency")

        result = replacer.replace(html, tokens, entries)

        assert replaced_words(result) == ["pen", "map"]

    def test_frequency_respects_spacing(self, html, tokens):
        entries = {word: make_entry(word, rank=100 - i) for i, word in enumerate(WORDS)}
        replacer = WordReplacer(density=0.2, min_word_spacing=2, selection_strategy="frequency")

        result = replacer.replace(html, tokens, entries)

        assert replaced_words(result) == ["cup", "map"]

    def test_preferred_parts_of_speech_come_first(self, html, tokens):
        entries = {word: make_entry(word, rank=1) for word in WORDS}
        entries["sky"] = make_entry("sky", rank=999, pos="verb")
        replacer = WordReplacer(
            density=0.1,
            min_word_spacing=0,
            selection_strategy="frequency",
            preferred_parts_of_speech=["verb"],
        )

        assert replaced_words(replacer.replace(html, tokens, entries)) == ["sky"]

    def test_random_is_reproducible_with_seed(self, html, tokens, entries):
        options = ReplacerOptions(density=0.4, min_word_spacing=1, selection_strategy="random", seed=7)

        first = WordReplacer(options).replace(html, tokens, entries)
        second = WordReplacer(options).replace(html, tokens, entries)

        assert first.html == second.html
        assert first.stats.replaced_tokens == 4
        positions = [WORDS.index(word) for word in replaced_words(first)]
        assert positions == sorted(positions)


class TestEligibility:
    def test_protected_tokens_are_never_replaced(self):
        html = '<p>she said "hello" twice</p>'
        tokens = Tokenizer().tokenize(html)
        entries = {"hello": make_entry("hello"), "twice": make_entry("twice")}

        result = WordReplacer(density=1.0, min_word_spacing=0).replace(html, tokens, entries)

        assert replaced_words(result) == ["twice"]
        assert result.stats.protected_tokens == 1

    def test_proficiency_ceiling(self, html, tokens):
        entries = {"cat": make_entry("cat", level="advanced"), "dog": make_entry("dog")}

        result = WordReplacer(density=1.0, min_word_spacing=0, max_proficiency="beginner").replace(
            html, tokens, entries
        )

        assert replaced_words(result) == ["dog"]

    def test_higher_ceiling_admits_lower_levels(self, html, tokens):
        entries = {"cat": make_entry("cat", level="beginner"), "dog": make_entry("dog", level="intermediate")}

        result = WordReplacer(
            density=1.0, min_word_spacing=0, max_proficiency="intermediate"
        ).replace(html, tokens, entries)

        assert replaced_words(result) == ["cat", "dog"]

    def test_excluded_words_are_skipped(self, html, tokens, entries):
        result = WordReplacer(
            density=1.0, min_word_spacing=0, exclude_words={"Cat", "dog"}
        ).replace(html, tokens, entries)

        assert "cat" not in replaced_words(result)
        assert "dog" not in replaced_words(result)
        assert result.stats.eligible_tokens == 8

    def test_missing_entries_are_not_counted_as_protected(self, html, tokens):
        result = WordReplacer(density=1.0).replace(html, tokens, {"cat": None})

        assert result.stats.protected_tokens == 0
        assert result.stats.eligible_tokens == 0


class TestRewriting:
    def test_marker_replaces_token_and_keeps_everything_else(self):
        html = "<p>The <b>house</b> is big.</p>"
        tokens = Tokenizer().tokenize(html)
        entries = {"house": make_entry("house", target="σπίτι")}

        result = WordReplacer(density=1.0, min_word_spacing=0).replace(html, tokens, entries)

        assert result.html == (
            '<p>The <b><span class="foreign-word" data-original="house" '
            'data-word-id="en_el_house" data-pos="noun">σπίτι</span></b> is big.</p>'
        )

    def test_foreign_word_records_source_positions(self):
        html = "<p>The <b>house</b> is big.</p>"
        tokens = Tokenizer().tokenize(html)
        entries = {"house": make_entry("house", target="σπίτι")}

        result = WordReplacer(density=1.0, min_word_spacing=0).replace(html, tokens, entries)

        record = result.foreign_words[0]
        assert record.original_word == "house"
        assert record.foreign_word == "σπίτι"
        assert html[record.start_index:record.end_index] == "house"
        assert record.word_entry is entries["house"]

    def test_unreplaced_regions_are_verbatim(self, html, tokens, entries):
        result = WordReplacer(density=0.5, min_word_spacing=0).replace(html, tokens, entries)

        for token in tokens:
            if token.original not in replaced_words(result):
                assert token.original in result.html
        assert result.html.startswith("<p>")
        assert result.html.endswith("</p>")
        assert reconstruct(tokens) == html

    def test_case_is_preserved(self):
        html = "<p>House by the HOUSE near the house</p>"
        tokens = Tokenizer(skip_names=False).tokenize(html)
        entries = {"house": make_entry("house", target="σπίτι")}

        result = WordReplacer(density=1.0, min_word_spacing=0).replace(html, tokens, entries)

        assert [fw.foreign_word for fw in result.foreign_words] == ["Σπίτι", "ΣΠΊΤΙ", "σπίτι"]

    def test_marker_attributes_are_escaped(self):
        entry = make_entry("tag", target="<b>", pronunciation='say "it"')
        token = Tokenizer().tokenize("<p>tag</p>")[0]

        marker = create_marker("<b>", entry, token)

        assert 'data-pronunciation="say &quot;it&quot;"' in marker
        assert marker.endswith(">&lt;b&gt;</span>")


class TestPreserveCase:
    @pytest.mark.parametrize(
        "original,replacement,expected",
        [
            ("HOUSE", "casa", "CASA"),
            ("House", "casa", "Casa"),
            ("house", "Casa", "casa"),
            ("McDonald", "Casa", "casa"),
            ("I", "yo", "Yo"),
            ("", "casa", "casa"),
        ],
    )
    def test_preserve_case(self, original, replacement, expected):
        assert preserve_case(original, replacement) == expected
