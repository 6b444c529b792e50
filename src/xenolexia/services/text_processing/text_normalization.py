"""Text normalization utilities for consistent dictionary keying."""

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")
_APOSTROPHES = str.maketrans({"’": "'", "ʼ": "'", "‘": "'"})


def normalize_text(text: str) -> str:
    """
    Normalize free text for consistent cache keying.

    Rules:
    - Trim leading and trailing whitespace
    - Collapse runs of whitespace (spaces, tabs, newlines) to single spaces
    - Compose to Unicode NFC so visually identical strings compare equal

    Args:
        text: Original text to normalize.

    Returns:
        Normalized text string.
    """
    text = unicodedata.normalize("NFC", text.strip())
    return _WHITESPACE.sub(" ", text)


def fold_case(word: str, language: str) -> str:
    """
    Lowercase a single word following the conventions of its language.

    - Turkish/Azerbaijani: dotted capital I becomes "i", plain capital I becomes dotless "ı"
    - German: "ß" is kept (casefold would expand it to "ss")
    - Greek: final sigma is folded to medial sigma so inflected forms share a key
    - Curly apostrophes are straightened so "don’t" and "don't" match
    """
    word = normalize_text(word).translate(_APOSTROPHES)
    if language in ("tr", "az"):
        word = word.replace("İ", "i").replace("I", "ı")
    word = word.lower()
    if language == "el":
        word = word.replace("ς", "σ")
    return unicodedata.normalize("NFC", word)
