"""Word Replacer - selects tokens to substitute and rewrites chapter HTML."""

import html as html_lib
import random
from bisect import bisect_left, insort
from dataclasses import dataclass, field, replace
from typing import List, Literal, Mapping, Optional, Sequence, Set

from xenolexia.core import (
    DictionaryEntry,
    ForeignWordData,
    Token,
    coerce_proficiency,
    is_within_level,
)

SelectionStrategy = Literal["distributed", "frequency", "random"]

SELECTION_STRATEGIES = ("distributed", "frequency", "random")

MARKER_CLASS = "foreign-word"


@dataclass
class ReplacerOptions:
    density: float = 0.15
    """Target fraction of eligible tokens to substitute, 0.0 - 1.0"""
    max_proficiency: str = "beginner"
    min_word_spacing: int = 3
    """Minimum distance, in tokens, between two substitutions"""
    selection_strategy: str = "distributed"
    exclude_words: Set[str] = field(default_factory=set)
    """Normalized words that are never substituted"""
    preferred_parts_of_speech: List[str] = field(default_factory=list)
    """Parts of speech ranked first by the frequency and random strategies"""
    seed: Optional[int] = None
    """Seed for the random strategy"""


@dataclass
class ReplacementStats:
    total_tokens: int = 0
    eligible_tokens: int = 0
    replaced_tokens: int = 0
    protected_tokens: int = 0
    density_skipped: int = 0
    """Eligible tokens left untouched by density or spacing"""


@dataclass
class ReplacementResult:
    html: str
    foreign_words: List[ForeignWordData]
    stats: ReplacementStats


@dataclass
class _Candidate:
    index: int
    """Position in the candidate sequence (document order)"""
    token: Token
    entry: DictionaryEntry


class WordReplacer:
    """
    Substitutes a density-limited, evenly spaced subset of eligible tokens.

    A token is eligible when it is unprotected, not excluded, and has a
    dictionary entry at or below the proficiency ceiling. Out-of-range policy
    values are clamped, never rejected.
    """

    def __init__(self, options: Optional[ReplacerOptions] = None, **overrides):
        base = options or ReplacerOptions()
        self.options = replace(base, **overrides) if overrides else base

    def update_options(self, **changes) -> None:
        self.options = replace(self.options, **changes)

    def replace(
        self,
        html: str,
        tokens: Sequence[Token],
        word_entries: Mapping[str, Optional[DictionaryEntry]],
    ) -> ReplacementResult:
        """
        Replace selected tokens with foreign-word markers.

        Args:
            html: The exact string the tokens were produced from.
            tokens: Tokens in document order.
            word_entries: Entry (None for no translation) per token, keyed by
                surface form or by lowercased word. A surface key wins.

        Returns:
            ReplacementResult with the rewritten HTML, one ForeignWordData per
            substitution in document order, and statistics.
        """
        candidates = self._build_candidates(tokens, word_entries)
        spacing = min(max(0, int(self.options.min_word_spacing)), len(tokens))
        selected = self._select(candidates, spacing)

        parts: List[str] = []
        foreign_words: List[ForeignWordData] = []
        cursor = 0
        for candidate in selected:
            token = candidate.token
            foreign_word = preserve_case(token.text, candidate.entry.target_word)
            parts.append(html[cursor:token.start_index])
            parts.append(create_marker(foreign_word, candidate.entry, token))
            cursor = token.end_index
            foreign_words.append(
                ForeignWordData(
                    original_word=token.original,
                    foreign_word=foreign_word,
                    start_index=token.start_index,
                    end_index=token.end_index,
                    word_entry=candidate.entry,
                )
            )
        parts.append(html[cursor:])

        stats = ReplacementStats(
            total_tokens=len(tokens),
            eligible_tokens=len(candidates),
            replaced_tokens=len(selected),
            protected_tokens=sum(1 for token in tokens if token.is_protected),
            density_skipped=len(candidates) - len(selected),
        )
        return ReplacementResult(html="".join(parts), foreign_words=foreign_words, stats=stats)

    def target_count(self, candidate_count: int) -> int:
        """Number of substitutions aimed for among candidate_count candidates."""
        density = min(1.0, max(0.0, float(self.options.density)))
        return int(density * candidate_count + 0.5)

    def _build_candidates(
        self,
        tokens: Sequence[Token],
        word_entries: Mapping[str, Optional[DictionaryEntry]],
    ) -> List[_Candidate]:
        ceiling = coerce_proficiency(self.options.max_proficiency)
        excluded = {word.lower() for word in self.options.exclude_words}
        candidates: List[_Candidate] = []
        for token in tokens:
            if token.is_protected or token.word in excluded:
                continue
            entry = _entry_for(token, word_entries)
            if entry is None or not is_within_level(entry.proficiency_level, ceiling):
                continue
            candidates.append(_Candidate(index=len(candidates), token=token, entry=entry))
        return candidates

    def _select(self, candidates: List[_Candidate], spacing: int) -> List[_Candidate]:
        count = self.target_count(len(candidates))
        if count == 0:
            return []

        strategy = self.options.selection_strategy
        if strategy == "frequency":
            ordered = sorted(
                candidates,
                key=lambda c: (not self._is_preferred(c), c.entry.frequency_rank, c.index),
            )
            return _pick_with_spacing(ordered, count, spacing)
        if strategy == "random":
            ordered = list(candidates)
            random.Random(self.options.seed).shuffle(ordered)
            ordered.sort(key=lambda c: not self._is_preferred(c))
            return _pick_with_spacing(ordered, count, spacing)
        return _pick_distributed(candidates, count, spacing)

    def _is_preferred(self, candidate: _Candidate) -> bool:
        return candidate.entry.part_of_speech in self.options.preferred_parts_of_speech


def _entry_for(
    token: Token, word_entries: Mapping[str, Optional[DictionaryEntry]]
) -> Optional[DictionaryEntry]:
    if token.text in word_entries:
        return word_entries[token.text]
    return word_entries.get(token.word)


def _pick_distributed(candidates: List[_Candidate], count: int, spacing: int) -> List[_Candidate]:
    """One candidate per equal-width bucket: the earliest that respects spacing."""
    total = len(candidates)
    selected: List[_Candidate] = []
    last_index: Optional[int] = None
    for bucket in range(count):
        low = bucket * total // count
        high = (bucket + 1) * total // count
        if last_index is not None:
            low = max(low, last_index + spacing)
        if low < high:
            selected.append(candidates[low])
            last_index = low
    return selected


def _pick_with_spacing(ordered: List[_Candidate], count: int, spacing: int) -> List[_Candidate]:
    """Greedy pick in priority order, rejecting anything too close to an accepted pick."""
    accepted: List[int] = []
    for candidate in ordered:
        if len(accepted) >= count:
            break
        pos = bisect_left(accepted, candidate.index)
        if pos > 0 and candidate.index - accepted[pos - 1] < spacing:
            continue
        if pos < len(accepted) and accepted[pos] - candidate.index < spacing:
            continue
        insort(accepted, candidate.index)
    by_index = {candidate.index: candidate for candidate in ordered}
    return [by_index[index] for index in accepted]


def preserve_case(original: str, replacement: str) -> str:
    """Apply the case pattern of original (ALL CAPS, Title, lower) to replacement."""
    if not original or not replacement:
        return replacement
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[0].isupper() and original[1:] == original[1:].lower():
        return replacement[0].upper() + replacement[1:].lower()
    return replacement.lower()


def create_marker(foreign_word: str, entry: DictionaryEntry, token: Token) -> str:
    """Marker element carrying the foreign word and the recoverable original."""
    attrs = [
        f'class="{MARKER_CLASS}"',
        f'data-original="{html_lib.escape(token.text)}"',
        f'data-word-id="{html_lib.escape(str(entry.id))}"',
        f'data-pos="{html_lib.escape(entry.part_of_speech)}"',
    ]
    if entry.pronunciation:
        attrs.append(f'data-pronunciation="{html_lib.escape(entry.pronunciation)}"')
    return f"<span {' '.join(attrs)}>{html_lib.escape(foreign_word)}</span>"
