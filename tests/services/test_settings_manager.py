"""Unit tests for SettingsManager."""

import logging
import os
import tempfile
from pathlib import Path

import pytest

from xenolexia.services import SettingsManager, TranslationOptions


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Remove XENOLEXIA_* variables before and after each test."""
    saved = {key: value for key, value in os.environ.items() if key.startswith("XENOLEXIA_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [key for key in os.environ if key.startswith("XENOLEXIA_")]:
        del os.environ[key]
    os.environ.update(saved)


def settings_with(temp_env_dir, content):
    (temp_env_dir / ".env").write_text(content, encoding="utf-8")
    return SettingsManager(project_root=temp_env_dir)


class TestDefaults:
    def test_defaults_without_env_file(self, temp_env_dir, clean_env):
        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_source_language() == "en"
        assert settings.get_target_language() == "el"
        assert settings.get_proficiency() == "beginner"
        assert settings.get_density() == 0.15
        assert settings.get_min_word_spacing() == 3
        assert settings.get_learned_threshold_days() == 21
        assert settings.get_log_level() == logging.INFO
        assert settings.get_db_path() == temp_env_dir / "xenolexia.db"


class TestEnvFile:
    def test_values_are_read_from_env_file(self, temp_env_dir, clean_env):
        settings = settings_with(
            temp_env_dir,
            "XENOLEXIA_SOURCE_LANGUAGE=DE\n"
            "XENOLEXIA_TARGET_LANGUAGE=es\n"
            "XENOLEXIA_PROFICIENCY=Intermediate\n"
            "XENOLEXIA_DENSITY=0.4\n"
            "XENOLEXIA_MIN_WORD_SPACING=5\n"
            "XENOLEXIA_LOG_LEVEL=debug\n",
        )

        assert settings.get_source_language() == "de"
        assert settings.get_target_language() == "es"
        assert settings.get_proficiency() == "intermediate"
        assert settings.get_density() == 0.4
        assert settings.get_min_word_spacing() == 5
        assert settings.get_log_level() == logging.DEBUG

    def test_db_path_override(self, temp_env_dir, clean_env):
        target = temp_env_dir / "data" / "custom.db"
        settings = settings_with(temp_env_dir, f"XENOLEXIA_DB_PATH={target}\n")

        assert settings.get_db_path() == target

    def test_reload_env_picks_up_changes(self, temp_env_dir, clean_env):
        settings = settings_with(temp_env_dir, "XENOLEXIA_DENSITY=0.2\n")
        assert settings.get_density() == 0.2

        (temp_env_dir / ".env").write_text("XENOLEXIA_DENSITY=0.3\n", encoding="utf-8")
        settings.reload_env()

        assert settings.get_density() == 0.3


class TestInvalidValues:
    @pytest.mark.parametrize("raw,expected", [("1.7", 1.0), ("-0.2", 0.0), ("abc", 0.15), ("nan", 0.15)])
    def test_density_is_clamped_or_defaulted(self, temp_env_dir, clean_env, raw, expected):
        settings = settings_with(temp_env_dir, f"XENOLEXIA_DENSITY={raw}\n")

        assert settings.get_density() == expected

    def test_invalid_density_logs_warning(self, temp_env_dir, clean_env, caplog):
        settings = settings_with(temp_env_dir, "XENOLEXIA_DENSITY=lots\n")

        with caplog.at_level(logging.WARNING):
            settings.get_density()

        assert "XENOLEXIA_DENSITY" in caplog.text

    @pytest.mark.parametrize("raw,expected", [("-4", 0), ("many", 3)])
    def test_spacing_is_clamped_or_defaulted(self, temp_env_dir, clean_env, raw, expected):
        settings = settings_with(temp_env_dir, f"XENOLEXIA_MIN_WORD_SPACING={raw}\n")

        assert settings.get_min_word_spacing() == expected

    def test_unknown_proficiency_falls_back(self, temp_env_dir, clean_env):
        settings = settings_with(temp_env_dir, "XENOLEXIA_PROFICIENCY=expert\n")

        assert settings.get_proficiency() == "beginner"

    def test_unknown_log_level_falls_back(self, temp_env_dir, clean_env):
        settings = settings_with(temp_env_dir, "XENOLEXIA_LOG_LEVEL=loud\n")

        assert settings.get_log_level() == logging.INFO


class TestDerivedConfiguration:
    def test_translation_options(self, temp_env_dir, clean_env):
        settings = settings_with(temp_env_dir, "XENOLEXIA_DENSITY=0.5\nXENOLEXIA_TARGET_LANGUAGE=fr\n")

        options = settings.get_translation_options()

        assert isinstance(options, TranslationOptions)
        assert options.density == 0.5
        assert options.target_language == "fr"
        assert options.min_word_spacing == 3

    def test_scheduler_config(self, temp_env_dir, clean_env):
        settings = settings_with(temp_env_dir, "XENOLEXIA_LEARNED_THRESHOLD_DAYS=30\n")

        assert settings.get_scheduler_config().learned_threshold_days == 30
