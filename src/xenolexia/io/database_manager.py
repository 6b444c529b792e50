"""SQLite-backed persistence for saved vocabulary and the bundled word list."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from xenolexia.core import DictionaryEntry, MemoryState, VocabularyItem

SECONDS_PER_DAY = 86400

# SQLite builds before 3.32 cap bound parameters at 999.
_MAX_PARAMS_PER_QUERY = 500

_STATUS_ORDER_SQL = """
    CASE status
        WHEN 'new' THEN 0
        WHEN 'learning' THEN 1
        WHEN 'review' THEN 2
        ELSE 3
    END
"""


class DatabaseManager:
    """Owns SQLite connection, schema, and persistence helpers."""

    def __init__(self, db_path: Union[Path, str]) -> None:
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        # Shared across threads; callers serialize writes (see VocabularyService).
        self.connection = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys = ON;")

    def ensure_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        cur = self.connection.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS vocabulary (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                source_word TEXT NOT NULL,
                target_word TEXT NOT NULL,
                source_lang TEXT NOT NULL,
                target_lang TEXT NOT NULL,
                context_sentence TEXT,
                book_id TEXT,
                book_title TEXT,
                added_at REAL NOT NULL,
                last_reviewed_at REAL,
                review_count INTEGER NOT NULL DEFAULT 0,
                ease_factor REAL NOT NULL DEFAULT 2.5,
                interval INTEGER NOT NULL DEFAULT 0,
                status TEXT NOT NULL DEFAULT 'new',
                UNIQUE(source_word, target_lang)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS word_list (
                id TEXT PRIMARY KEY,
                lookup_key TEXT NOT NULL,
                source_word TEXT NOT NULL,
                target_word TEXT NOT NULL,
                source_lang TEXT NOT NULL,
                target_lang TEXT NOT NULL,
                proficiency TEXT NOT NULL,
                frequency_rank INTEGER NOT NULL,
                part_of_speech TEXT NOT NULL DEFAULT 'other',
                pronunciation TEXT,
                UNIQUE(lookup_key, source_lang, target_lang)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS word_variants (
                word_id TEXT NOT NULL,
                variant TEXT NOT NULL,
                variant_key TEXT NOT NULL,

                FOREIGN KEY(word_id) REFERENCES word_list(id) ON DELETE CASCADE,
                PRIMARY KEY(word_id, variant_key)
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_vocabulary_status ON vocabulary(status);"
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_vocabulary_book ON vocabulary(book_id);"
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_word_list_lookup
            ON word_list(source_lang, target_lang, lookup_key);
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_word_variants_key ON word_variants(variant_key);"
        )
        self.connection.commit()

    # ------------------------------------------------------------------
    # Vocabulary
    # ------------------------------------------------------------------

    def insert_vocabulary_item(self, item: VocabularyItem) -> VocabularyItem:
        """Insert a saved word.

        Raises:
            ValueError: If the (source word, target language) pair already exists.
        """
        memory = item.memory
        cur = self.connection.cursor()
        try:
            cur.execute(
                """
                INSERT INTO vocabulary (
                    source_word, target_word, source_lang, target_lang,
                    context_sentence, book_id, book_title, added_at,
                    last_reviewed_at, review_count, ease_factor, interval, status
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.source_word,
                    item.target_word,
                    item.source_language,
                    item.target_language,
                    item.context_sentence,
                    item.book_id,
                    item.book_title,
                    _to_timestamp(item.added_at),
                    _to_timestamp(memory.last_reviewed_at),
                    memory.review_count,
                    memory.ease_factor,
                    memory.interval,
                    memory.status,
                ),
            )
        except sqlite3.IntegrityError as exc:
            self.connection.rollback()
            raise ValueError(
                f"Word already saved: {item.source_word!r} ({item.target_language})"
            ) from exc
        self.connection.commit()
        return self.get_vocabulary_item(cur.lastrowid)

    def get_vocabulary_item(self, item_id: int) -> Optional[VocabularyItem]:
        cur = self.connection.cursor()
        cur.execute("SELECT * FROM vocabulary WHERE id = ?", (item_id,))
        row = cur.fetchone()
        return self._row_to_vocabulary_item(row) if row else None

    def find_vocabulary_item(self, source_word: str, target_language: str) -> Optional[VocabularyItem]:
        cur = self.connection.cursor()
        cur.execute(
            """
            SELECT * FROM vocabulary
            WHERE lower(source_word) = lower(?) AND target_lang = ?
            """,
            (source_word, target_language),
        )
        row = cur.fetchone()
        return self._row_to_vocabulary_item(row) if row else None

    def update_memory_state(self, item_id: int, memory: MemoryState) -> bool:
        cur = self.connection.cursor()
        cur.execute(
            """
            UPDATE vocabulary SET
                last_reviewed_at = ?,
                review_count = ?,
                ease_factor = ?,
                interval = ?,
                status = ?
            WHERE id = ?
            """,
            (
                _to_timestamp(memory.last_reviewed_at),
                memory.review_count,
                memory.ease_factor,
                memory.interval,
                memory.status,
                item_id,
            ),
        )
        self.connection.commit()
        return cur.rowcount > 0

    def delete_vocabulary_item(self, item_id: int) -> bool:
        cur = self.connection.cursor()
        cur.execute("DELETE FROM vocabulary WHERE id = ?", (item_id,))
        self.connection.commit()
        return cur.rowcount > 0

    def delete_all_vocabulary(self) -> None:
        self.connection.execute("DELETE FROM vocabulary")
        self.connection.commit()

    def list_vocabulary(
        self, status: Optional[str] = None, book_id: Optional[str] = None
    ) -> List[VocabularyItem]:
        clauses = []
        params: List[object] = []
        if status is not None:
            clauses.append("status = ?")
            params.append(status)
        if book_id is not None:
            clauses.append("book_id = ?")
            params.append(book_id)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        cur = self.connection.cursor()
        cur.execute(
            f"SELECT * FROM vocabulary {where} ORDER BY added_at DESC, id DESC",
            params,
        )
        return [self._row_to_vocabulary_item(row) for row in cur.fetchall()]

    def search_vocabulary(self, query: str) -> List[VocabularyItem]:
        pattern = f"%{query.lower()}%"
        cur = self.connection.cursor()
        cur.execute(
            """
            SELECT * FROM vocabulary
            WHERE lower(source_word) LIKE ? OR lower(target_word) LIKE ?
            ORDER BY added_at DESC, id DESC
            """,
            (pattern, pattern),
        )
        return [self._row_to_vocabulary_item(row) for row in cur.fetchall()]

    def list_due_vocabulary(
        self, now: datetime, limit: int, include_learned: bool = False
    ) -> List[VocabularyItem]:
        """Words never reviewed, or whose last review plus interval has passed."""
        learned_clause = "" if include_learned else "status != 'learned' AND"
        cur = self.connection.cursor()
        cur.execute(
            f"""
            SELECT * FROM vocabulary
            WHERE {learned_clause} (
                last_reviewed_at IS NULL
                OR last_reviewed_at + (interval * {SECONDS_PER_DAY}) <= ?
            )
            ORDER BY {_STATUS_ORDER_SQL},
                last_reviewed_at IS NOT NULL,
                last_reviewed_at ASC,
                id ASC
            LIMIT ?
            """,
            (_to_timestamp(now), limit),
        )
        return [self._row_to_vocabulary_item(row) for row in cur.fetchall()]

    def count_by_status(self) -> Dict[str, int]:
        cur = self.connection.cursor()
        cur.execute("SELECT status, COUNT(*) AS total FROM vocabulary GROUP BY status")
        return {row["status"]: row["total"] for row in cur.fetchall()}

    def count_due(self, now: datetime, include_learned: bool = False) -> int:
        learned_clause = "" if include_learned else "status != 'learned' AND"
        cur = self.connection.cursor()
        cur.execute(
            f"""
            SELECT COUNT(*) AS due FROM vocabulary
            WHERE {learned_clause} (
                last_reviewed_at IS NULL
                OR last_reviewed_at + (interval * {SECONDS_PER_DAY}) <= ?
            )
            """,
            (_to_timestamp(now),),
        )
        return cur.fetchone()["due"]

    # ------------------------------------------------------------------
    # Word list
    # ------------------------------------------------------------------

    def insert_word_entry(
        self, entry: DictionaryEntry, lookup_key: str, variant_keys: Dict[str, str]
    ) -> bool:
        """Insert a word list entry and its variants.

        Args:
            entry: Dictionary entry to store.
            lookup_key: Folded key the entry is found under.
            variant_keys: Mapping of variant spelling -> folded key.

        Returns:
            True if inserted, False if the key already exists for the language pair.
        """
        cur = self.connection.cursor()
        try:
            cur.execute(
                """
                INSERT INTO word_list (
                    id, lookup_key, source_word, target_word, source_lang, target_lang,
                    proficiency, frequency_rank, part_of_speech, pronunciation
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    lookup_key,
                    entry.source_word,
                    entry.target_word,
                    entry.source_language,
                    entry.target_language,
                    entry.proficiency_level,
                    entry.frequency_rank,
                    entry.part_of_speech,
                    entry.pronunciation,
                ),
            )
        except sqlite3.IntegrityError:
            return False
        cur.executemany(
            """
            INSERT OR IGNORE INTO word_variants (word_id, variant, variant_key)
            VALUES (?, ?, ?)
            """,
            [(entry.id, variant, key) for variant, key in variant_keys.items()],
        )
        return True

    def commit(self) -> None:
        self.connection.commit()

    def lookup_word_entries(
        self, keys: Sequence[str], source_language: str, target_language: str
    ) -> Dict[str, DictionaryEntry]:
        """Batch lookup by folded key; variant spellings resolve to their entry."""
        rows: Dict[str, sqlite3.Row] = {}
        unique_keys = list(dict.fromkeys(keys))
        for chunk in _chunks(unique_keys, _MAX_PARAMS_PER_QUERY):
            placeholders = ", ".join("?" for _ in chunk)
            cur = self.connection.cursor()
            cur.execute(
                f"""
                SELECT * FROM word_list
                WHERE source_lang = ? AND target_lang = ? AND lookup_key IN ({placeholders})
                """,
                (source_language, target_language, *chunk),
            )
            for row in cur.fetchall():
                rows[row["lookup_key"]] = row

        missing = [key for key in unique_keys if key not in rows]
        for chunk in _chunks(missing, _MAX_PARAMS_PER_QUERY):
            placeholders = ", ".join("?" for _ in chunk)
            cur = self.connection.cursor()
            cur.execute(
                f"""
                SELECT wl.*, wv.variant_key AS matched_key
                FROM word_variants wv
                JOIN word_list wl ON wl.id = wv.word_id
                WHERE wl.source_lang = ? AND wl.target_lang = ?
                    AND wv.variant_key IN ({placeholders})
                ORDER BY wl.frequency_rank ASC
                """,
                (source_language, target_language, *chunk),
            )
            for row in cur.fetchall():
                rows.setdefault(row["matched_key"], row)

        variants = self._variants_for({row["id"] for row in rows.values()})
        return {
            key: self._row_to_word_entry(row, list(variants.get(row["id"], [])))
            for key, row in rows.items()
        }

    def count_word_entries(self, source_language: str, target_language: str) -> int:
        cur = self.connection.cursor()
        cur.execute(
            "SELECT COUNT(*) AS total FROM word_list WHERE source_lang = ? AND target_lang = ?",
            (source_language, target_language),
        )
        return cur.fetchone()["total"]

    def close(self) -> None:
        self.connection.close()

    def _variants_for(self, word_ids: Iterable[str]) -> Dict[str, List[str]]:
        variants: Dict[str, List[str]] = {}
        for chunk in _chunks(sorted(word_ids), _MAX_PARAMS_PER_QUERY):
            placeholders = ", ".join("?" for _ in chunk)
            cur = self.connection.cursor()
            cur.execute(
                f"SELECT word_id, variant FROM word_variants WHERE word_id IN ({placeholders})"
                " ORDER BY word_id, variant",
                tuple(chunk),
            )
            for row in cur.fetchall():
                variants.setdefault(row["word_id"], []).append(row["variant"])
        return variants

    @staticmethod
    def _row_to_word_entry(row: sqlite3.Row, variants: List[str]) -> DictionaryEntry:
        return DictionaryEntry(
            id=row["id"],
            source_word=row["source_word"],
            target_word=row["target_word"],
            source_language=row["source_lang"],
            target_language=row["target_lang"],
            proficiency_level=row["proficiency"],
            frequency_rank=row["frequency_rank"],
            part_of_speech=row["part_of_speech"],
            variants=variants,
            pronunciation=row["pronunciation"],
        )

    @staticmethod
    def _row_to_vocabulary_item(row: sqlite3.Row) -> VocabularyItem:
        return VocabularyItem(
            id=row["id"],
            source_word=row["source_word"],
            target_word=row["target_word"],
            source_language=row["source_lang"],
            target_language=row["target_lang"],
            added_at=_from_timestamp(row["added_at"]),
            memory=MemoryState(
                review_count=row["review_count"],
                ease_factor=row["ease_factor"],
                interval=row["interval"],
                last_reviewed_at=_from_timestamp(row["last_reviewed_at"]),
                status=row["status"],
            ),
            context_sentence=row["context_sentence"],
            book_id=row["book_id"],
            book_title=row["book_title"],
        )


def _to_timestamp(value: Optional[datetime]) -> Optional[float]:
    return value.timestamp() if value is not None else None


def _from_timestamp(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _chunks(items: Sequence[str], size: int) -> Iterable[Sequence[str]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]
