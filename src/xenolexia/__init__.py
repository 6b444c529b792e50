"""
Xenolexia - learn a language while reading books you already enjoy.

This package provides the reading and review core:
- Foreign-word injection into chapter HTML at a chosen density
- Dictionary lookups with an explicit, invalidatable cache
- Saved vocabulary with SM-2 spaced-repetition review
"""

__version__ = "0.1.0"

# Make key components available at package level
from xenolexia.core import DictionaryEntry, ProcessedText, Token, VocabularyItem
from xenolexia.io import DatabaseManager

__all__ = [
    "DictionaryEntry",
    "ProcessedText",
    "Token",
    "VocabularyItem",
    "DatabaseManager",
]
