"""Language codes and proficiency scale shared across the reader core."""

from typing import Dict, Literal, Tuple

ProficiencyLevel = Literal["beginner", "intermediate", "advanced"]

PROFICIENCY_ORDER: Tuple[str, ...] = ("beginner", "intermediate", "advanced")

# Frequency rank upper bounds per proficiency level (inclusive).
PROFICIENCY_THRESHOLDS: Dict[str, int] = {
    "beginner": 500,
    "intermediate": 2000,
}

SUPPORTED_LANGUAGES: Dict[str, str] = {
    "en": "English",
    "el": "Greek",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ja": "Japanese",
    "zh": "Chinese",
    "ko": "Korean",
    "ar": "Arabic",
    "nl": "Dutch",
    "pl": "Polish",
    "tr": "Turkish",
    "sv": "Swedish",
    "da": "Danish",
    "fi": "Finnish",
    "no": "Norwegian",
    "cs": "Czech",
    "hu": "Hungarian",
    "ro": "Romanian",
    "uk": "Ukrainian",
    "he": "Hebrew",
    "hi": "Hindi",
    "th": "Thai",
    "vi": "Vietnamese",
    "id": "Indonesian",
}


def is_supported_language(code: object) -> bool:
    """True if code is one of the known two-letter language codes."""
    return isinstance(code, str) and code.strip().lower() in SUPPORTED_LANGUAGES


def proficiency_rank(level: object) -> int:
    """Position of level on the proficiency scale, or -1 if unknown."""
    if not isinstance(level, str):
        return -1
    try:
        return PROFICIENCY_ORDER.index(level.strip().lower())
    except ValueError:
        return -1


def coerce_proficiency(level: object, default: str = "beginner") -> str:
    """Return a valid proficiency level, falling back to default."""
    if proficiency_rank(level) < 0:
        return default
    return str(level).strip().lower()


def is_within_level(level: object, ceiling: object) -> bool:
    """True if level is at or below the ceiling on the proficiency scale."""
    level_idx = proficiency_rank(level)
    ceiling_idx = proficiency_rank(ceiling)
    if level_idx < 0 or ceiling_idx < 0:
        return False
    return level_idx <= ceiling_idx


def proficiency_for_rank(rank: int) -> str:
    """Map a frequency rank to the proficiency level that introduces it."""
    if rank <= PROFICIENCY_THRESHOLDS["beginner"]:
        return "beginner"
    if rank <= PROFICIENCY_THRESHOLDS["intermediate"]:
        return "intermediate"
    return "advanced"
