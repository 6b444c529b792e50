"""I/O layer - SQLite persistence for vocabulary and the word list."""

from .database_manager import DatabaseManager

__all__ = ["DatabaseManager"]
