"""Translation Engine - orchestrates tokenize, lookup and replace for one chapter."""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Set

from xenolexia.core import DictionaryEntry, ProcessedText, ProcessingStats
from xenolexia.services.text_processing import Tokenizer, TokenizerOptions, WordMatcher
from xenolexia.services.translation.dictionary_service import DictionaryService
from xenolexia.services.translation.word_replacer import ReplacerOptions, WordReplacer

logger = logging.getLogger(__name__)


@dataclass
class TranslationOptions:
    source_language: str = "en"
    """Language the book is written in"""
    target_language: str = "el"
    """Language the reader is learning"""
    proficiency_level: str = "beginner"
    density: float = 0.15
    exclude_words: Set[str] = field(default_factory=set)
    preferred_parts_of_speech: List[str] = field(default_factory=list)
    min_word_spacing: int = 3
    selection_strategy: str = "distributed"

    def to_replacer_options(self) -> ReplacerOptions:
        return ReplacerOptions(
            density=self.density,
            max_proficiency=self.proficiency_level,
            min_word_spacing=self.min_word_spacing,
            selection_strategy=self.selection_strategy,
            exclude_words=set(self.exclude_words),
            preferred_parts_of_speech=list(self.preferred_parts_of_speech),
        )


class TranslationEngine:
    """
    Turns chapter HTML into annotated HTML with foreign-word substitutions.

    Translation is a best-effort enhancement: if the dictionary or the
    replacement step fails, the chapter comes back unchanged with zeroed stats
    and the failure is logged. Each call issues at most one dictionary lookup.
    """

    def __init__(
        self,
        dictionary: DictionaryService,
        options: Optional[TranslationOptions] = None,
        tokenizer_options: Optional[TokenizerOptions] = None,
    ):
        self.dictionary = dictionary
        self.options = options or TranslationOptions()
        self.tokenizer = Tokenizer(tokenizer_options)
        self.replacer = WordReplacer(self.options.to_replacer_options())
        self.matcher = WordMatcher(self.options.source_language, self.options.target_language)

    async def process_content(self, html: str) -> ProcessedText:
        """
        Process one chapter with the engine's current options.

        Args:
            html: Chapter markup.

        Returns:
            ProcessedText with annotated content, substitutions and stats.
        """
        return await self._process(html, self.matcher, self.replacer)

    async def process_content_with_options(self, html: str, **overrides) -> ProcessedText:
        """One-off run with overridden options; the engine's own options are untouched."""
        merged = replace(self.options, **overrides)
        matcher = WordMatcher(merged.source_language, merged.target_language)
        replacer = WordReplacer(merged.to_replacer_options())
        return await self._process(html, matcher, replacer)

    def update_options(self, **changes) -> None:
        self.options = replace(self.options, **changes)
        self.replacer = WordReplacer(self.options.to_replacer_options())
        self.matcher = WordMatcher(self.options.source_language, self.options.target_language)

    def is_language_pair_supported(self) -> bool:
        return self.matcher.is_supported

    async def translate_word(self, word: str) -> Optional[DictionaryEntry]:
        """Look up a single word for the current language pair; None if unavailable."""
        key = self.matcher.normalize(word)
        if key is None:
            return None
        source, target = self.matcher.get_language_pair()
        try:
            results = await self.dictionary.lookup_words([key], source, target)
        except Exception:
            logger.warning("Lookup of %r failed", word, exc_info=True)
            return None
        result = results.get(key)
        return result.entry if result is not None else None

    async def _process(
        self, html: str, matcher: WordMatcher, replacer: WordReplacer
    ) -> ProcessedText:
        started = time.perf_counter()
        tokens = self.tokenizer.tokenize(html)
        if not tokens:
            return ProcessedText.unchanged(html if isinstance(html, str) else "")

        try:
            surfaces = list(dict.fromkeys(t.text for t in tokens if not t.is_protected))
            word_keys, unique_keys = matcher.build_lookup_keys(surfaces)
            entries_by_key: Dict[str, Optional[DictionaryEntry]] = {}
            if unique_keys:
                source, target = matcher.get_language_pair()
                lookups = await self.dictionary.lookup_words(unique_keys, source, target)
                entries_by_key = {key: result.entry for key, result in lookups.items()}
            word_entries = matcher.resolve(word_keys, entries_by_key)
            result = replacer.replace(html, tokens, word_entries)
        except Exception:
            logger.warning("Translation failed, returning chapter unchanged", exc_info=True)
            return ProcessedText.unchanged(html)

        elapsed_ms = (time.perf_counter() - started) * 1000
        stats = ProcessingStats(
            total_words=result.stats.total_tokens,
            eligible_words=result.stats.eligible_tokens,
            replaced_words=result.stats.replaced_tokens,
            protected_words=result.stats.protected_tokens,
            processing_time=elapsed_ms,
        )
        logger.debug(
            "Processed chapter: %d tokens, %d eligible, %d replaced in %.1f ms",
            stats.total_words,
            stats.eligible_words,
            stats.replaced_words,
            elapsed_ms,
        )
        return ProcessedText(content=result.html, foreign_words=result.foreign_words, stats=stats)
