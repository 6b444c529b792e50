"""Settings Manager - Handles language pair, injection policy and storage configuration."""

import logging
import math
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from xenolexia.core import coerce_proficiency
from xenolexia.services.review.review_scheduler import SchedulerConfig
from xenolexia.services.translation.translation_engine import TranslationOptions

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_LANGUAGE = "en"
DEFAULT_TARGET_LANGUAGE = "el"
DEFAULT_PROFICIENCY = "beginner"
DEFAULT_DENSITY = 0.15
DEFAULT_MIN_WORD_SPACING = 3
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LEARNED_THRESHOLD_DAYS = 21

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SettingsManager:
    """
    Manages reader configuration.

    Reads a .env file in the project root, then the XENOLEXIA_* environment
    variables. Bad values never raise: they fall back to defaults with a warning.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, uses the directory above src/.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_source_language(self) -> str:
        return _get_str("XENOLEXIA_SOURCE_LANGUAGE", DEFAULT_SOURCE_LANGUAGE).lower()

    def get_target_language(self) -> str:
        return _get_str("XENOLEXIA_TARGET_LANGUAGE", DEFAULT_TARGET_LANGUAGE).lower()

    def get_proficiency(self) -> str:
        raw = _get_str("XENOLEXIA_PROFICIENCY", DEFAULT_PROFICIENCY).lower()
        level = coerce_proficiency(raw, DEFAULT_PROFICIENCY)
        if level != raw:
            logger.warning("Unknown proficiency %r, using %r", raw, level)
        return level

    def get_density(self) -> float:
        """Substitution density, clamped to [0, 1]."""
        raw = os.getenv("XENOLEXIA_DENSITY")
        if raw is None or not raw.strip():
            return DEFAULT_DENSITY
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Invalid XENOLEXIA_DENSITY %r, using %s", raw, DEFAULT_DENSITY)
            return DEFAULT_DENSITY
        if math.isnan(value):
            logger.warning("Invalid XENOLEXIA_DENSITY %r, using %s", raw, DEFAULT_DENSITY)
            return DEFAULT_DENSITY
        return min(1.0, max(0.0, value))

    def get_min_word_spacing(self) -> int:
        return max(0, _get_int("XENOLEXIA_MIN_WORD_SPACING", DEFAULT_MIN_WORD_SPACING))

    def get_learned_threshold_days(self) -> int:
        return max(1, _get_int("XENOLEXIA_LEARNED_THRESHOLD_DAYS", DEFAULT_LEARNED_THRESHOLD_DAYS))

    def get_db_path(self) -> Path:
        raw = os.getenv("XENOLEXIA_DB_PATH")
        if raw and raw.strip():
            return Path(raw.strip()).expanduser()
        return self._project_root / "xenolexia.db"

    def get_log_level(self) -> int:
        name = _get_str("XENOLEXIA_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning("Unknown log level %r, using %s", name, DEFAULT_LOG_LEVEL)
            return logging.INFO
        return level

    def get_translation_options(self) -> TranslationOptions:
        return TranslationOptions(
            source_language=self.get_source_language(),
            target_language=self.get_target_language(),
            proficiency_level=self.get_proficiency(),
            density=self.get_density(),
            min_word_spacing=self.get_min_word_spacing(),
        )

    def get_scheduler_config(self) -> SchedulerConfig:
        return SchedulerConfig(learned_threshold_days=self.get_learned_threshold_days())

    def configure_logging(self) -> None:
        logging.basicConfig(level=self.get_log_level(), format=LOG_FORMAT)

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)


def _get_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value.strip() if value and value.strip() else default


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Invalid %s %r, using %s", name, raw, default)
        return default
