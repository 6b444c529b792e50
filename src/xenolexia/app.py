"""Composition root for the reading and review core."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from xenolexia.io import DatabaseManager
from xenolexia.services.caching import InMemoryLookupCache
from xenolexia.services.review import ReviewScheduler, VocabularyService
from xenolexia.services.settings_manager import SettingsManager
from xenolexia.services.translation import DatabaseDictionary, TranslationEngine


@dataclass
class ReaderCore:
    """Wired components handed to a reading surface."""

    db: DatabaseManager
    dictionary: DatabaseDictionary
    engine: TranslationEngine
    vocabulary: VocabularyService

    def close(self) -> None:
        self.db.close()


def create_core(
    settings: Optional[SettingsManager] = None,
    db_path: Optional[Union[Path, str]] = None,
) -> ReaderCore:
    """
    Bootstrap the core following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.

    Args:
        settings: Configuration source; a default SettingsManager if None.
        db_path: Overrides the configured database path (":memory:" for tests).
    """
    # 1. Configuration
    settings = settings or SettingsManager()
    settings.configure_logging()

    # 2. Infrastructure
    db = DatabaseManager(db_path if db_path is not None else settings.get_db_path())
    db.ensure_schema()

    # 3. Services
    dictionary = DatabaseDictionary(db, cache=InMemoryLookupCache())
    engine = TranslationEngine(dictionary, settings.get_translation_options())
    vocabulary = VocabularyService(db, ReviewScheduler(settings.get_scheduler_config()))

    return ReaderCore(db=db, dictionary=dictionary, engine=engine, vocabulary=vocabulary)
