"""Text processing services - tokenization, matching, and normalization."""

from xenolexia.services.text_processing.text_normalization import fold_case, normalize_text
from xenolexia.services.text_processing.tokenizer import Tokenizer, TokenizerOptions, reconstruct
from xenolexia.services.text_processing.word_matcher import WordMatcher

__all__ = [
    "Tokenizer",
    "TokenizerOptions",
    "WordMatcher",
    "fold_case",
    "normalize_text",
    "reconstruct",
]
