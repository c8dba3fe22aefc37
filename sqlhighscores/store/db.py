"""
ScoreStore — SQLite-backed persistence layer for the high-score list.

Usage::

    with ScoreStore(db_path="~/.sqlhighscores/scores.db") as store:
        alice = store.create("Alice", 10)
        store.create("Bob", 20)

        for score in store.get_all():        # highest value first
            print(score)

        store.update(alice.id, "Alice", 30)
        store.delete_by_id(alice.id)

The store keeps one connection for its whole open() / close() scope.  Every
public operation is a single statement; there is no caching and no change
notification, so callers re-read with get_all() after each mutation.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from sqlhighscores.exceptions import (
    ScoreNotFoundError,
    ScoreValidationError,
    StoreClosedError,
    StoreUnavailableError,
)
from sqlhighscores.store.models import Score

__all__ = ["ScoreStore", "SCHEMA_VERSION", "TABLE_NAME", "MIN_VALUE", "MAX_VALUE"]

logger = logging.getLogger(__name__)

# Bump whenever the table layout changes. A mismatch on open() rebuilds the
# table from scratch and discards every stored score.
SCHEMA_VERSION = 1

TABLE_NAME = "scores"

# Column names of the current layout, in table order
_COLUMNS = ("id", "name", "value")

# SQLite INTEGER is a signed 64-bit value
MIN_VALUE = -(2 ** 63)
MAX_VALUE = 2 ** 63 - 1

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).parent / "migrations" / "schema.sql"


class ScoreStore:
    """
    CRUD interface for the local SQLite high-score table.

    The database file and schema are created automatically on open().
    Operations called before open() or after close() raise StoreClosedError.
    """

    def __init__(self, db_path: str, schema_version: int = SCHEMA_VERSION) -> None:
        self._db_path = Path(db_path).expanduser()
        self._schema_version = schema_version
        self._conn: Optional[sqlite3.Connection] = None

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"ScoreStore({str(self._db_path)!r}, {state})"

    # ── Lifecycle ─────────────────────────────────────────────────────────

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "ScoreStore":
        """
        Open the database file, creating it and the table if needed.

        Raises:
            StoreUnavailableError: the file or its directory cannot be used.
        """
        if self._conn is not None:
            return self

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._db_path))
        except (OSError, sqlite3.Error) as exc:
            raise StoreUnavailableError(
                f"Cannot open score database {self._db_path}: {exc}"
            ) from exc

        conn.row_factory = sqlite3.Row
        try:
            self._ensure_schema(conn)
        except sqlite3.Error as exc:
            conn.close()
            raise StoreUnavailableError(
                f"Cannot initialise score database {self._db_path}: {exc}"
            ) from exc

        self._conn = conn
        logger.debug("Opened score database %s", self._db_path)
        return self

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.debug("Closed score database %s", self._db_path)

    def __enter__(self) -> "ScoreStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── Internal helpers ──────────────────────────────────────────────────

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        """Create the table, or drop and recreate it on a version mismatch."""
        found = conn.execute("PRAGMA user_version").fetchone()[0]
        if found == self._schema_version:
            return

        if found == 0 and not self._layout_matches(conn):
            logger.warning(
                "Table %r in %s has an unknown layout and will be rebuilt, which "
                "will destroy its rows",
                TABLE_NAME, self._db_path,
            )
            conn.execute(f"DROP TABLE {TABLE_NAME}")
        elif found != 0:
            logger.warning(
                "Upgrading %s from schema version %d to %d, which will destroy "
                "all stored scores",
                self._db_path, found, self._schema_version,
            )
            conn.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
        else:
            logger.info("Creating table %r in %s", TABLE_NAME, self._db_path)

        conn.executescript(_SCHEMA_PATH.read_text(encoding="utf-8"))
        # PRAGMA does not accept bound parameters
        conn.execute(f"PRAGMA user_version = {int(self._schema_version)}")
        conn.commit()

    @staticmethod
    def _layout_matches(conn: sqlite3.Connection) -> bool:
        """True if the table is absent or already has the current columns."""
        columns = tuple(
            row[1] for row in conn.execute(f"PRAGMA table_info({TABLE_NAME})")
        )
        return not columns or columns == _COLUMNS

    def _require_open(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError(
                f"ScoreStore for {self._db_path} is not open; call open() first"
            )
        return self._conn

    def _execute(self, sql: str, params: tuple = (), commit: bool = False) -> sqlite3.Cursor:
        conn = self._require_open()
        try:
            cur = conn.execute(sql, params)
            if commit:
                conn.commit()
        except sqlite3.Error as exc:
            if commit:
                conn.rollback()
            raise StoreUnavailableError(f"Score database error: {exc}") from exc
        return cur

    @staticmethod
    def _validate(name: str, value: int) -> None:
        if not isinstance(name, str):
            raise ScoreValidationError(f"name must be a string, got {type(name).__name__}")
        # bool is an int subclass but never a meaningful score
        if isinstance(value, bool) or not isinstance(value, int):
            raise ScoreValidationError(
                f"value must be an integer, got {type(value).__name__}"
            )
        if not MIN_VALUE <= value <= MAX_VALUE:
            raise ScoreValidationError(
                f"value must be between {MIN_VALUE} and {MAX_VALUE}, got {value}"
            )

    @staticmethod
    def _row_to_score(row: sqlite3.Row) -> Score:
        return Score(
            id=row["id"],
            name=row["name"] if row["name"] is not None else "",
            value=row["value"] if row["value"] is not None else 0,
        )

    # ── Public API ────────────────────────────────────────────────────────

    def create(self, name: str, value: int) -> Score:
        """
        Insert a new score.

        Returns:
            The persisted Score, including its newly assigned id.
        """
        self._validate(name, value)
        cur = self._execute(
            f"INSERT INTO {TABLE_NAME} (name, value) VALUES (?, ?)",
            (name, value),
            commit=True,
        )
        new_id = cur.lastrowid
        logger.debug("Created score id=%s %r=%d", new_id, name, value)
        created = self.get_by_id(new_id)
        if created is None:
            raise StoreUnavailableError(f"Inserted score id={new_id} could not be read back")
        return created

    def add(self, score: Score) -> Score:
        """Persist a transient *score*; its id, if any, is ignored."""
        return self.create(score.name, score.value)

    def get_all(self) -> list[Score]:
        """Return every score, highest value first (ties in insertion order)."""
        rows = self._execute(
            f"SELECT id, name, value FROM {TABLE_NAME} ORDER BY value DESC, id ASC"
        ).fetchall()
        return [self._row_to_score(r) for r in rows]

    def get_by_id(self, score_id: int) -> Optional[Score]:
        """
        Look up a score by id.

        Returns:
            Score if found, None otherwise.
        """
        row = self._execute(
            f"SELECT id, name, value FROM {TABLE_NAME} WHERE id=?", (score_id,)
        ).fetchone()
        return self._row_to_score(row) if row else None

    def update(self, score_id: int, name: str, value: int) -> bool:
        """
        Overwrite name and value of the row with *score_id*.

        Returns:
            True if a row was updated, False if id not found.
        """
        self._validate(name, value)
        cur = self._execute(
            f"UPDATE {TABLE_NAME} SET name=?, value=? WHERE id=?",
            (name, value, score_id),
            commit=True,
        )
        updated = cur.rowcount > 0
        if updated:
            logger.debug("Updated score id=%s to %r=%d", score_id, name, value)
        else:
            logger.debug("Update skipped, no score id=%s", score_id)
        return updated

    def save(self, score: Score) -> Score:
        """
        Create *score* if it is transient, otherwise update it in place.

        Raises:
            ScoreNotFoundError: *score* carries an id that is not in the table.
        """
        if not score.is_persisted:
            return self.add(score)
        if not self.update(score.id, score.name, score.value):
            raise ScoreNotFoundError(score.id)
        return Score(id=score.id, name=score.name, value=score.value)

    def delete_by_id(self, score_id: int) -> bool:
        """
        Delete a single score by id.

        Returns:
            True if a row was deleted, False if id not found.
        """
        cur = self._execute(
            f"DELETE FROM {TABLE_NAME} WHERE id=?", (score_id,), commit=True
        )
        removed = cur.rowcount > 0
        if removed:
            logger.debug("Deleted score id=%s", score_id)
        return removed

    def delete(self, score: Score) -> bool:
        """Delete *score* by its id. Transient scores are never in the table."""
        if score.id is None:
            return False
        return self.delete_by_id(score.id)

    def count(self) -> int:
        """Number of stored scores."""
        return self._execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]

    def clear(self) -> int:
        """
        Delete every score. Ids handed out so far are still never reused.

        Returns:
            Number of rows deleted.
        """
        cur = self._execute(f"DELETE FROM {TABLE_NAME}", commit=True)
        logger.info("Cleared %d scores from %s", cur.rowcount, self._db_path)
        return cur.rowcount
