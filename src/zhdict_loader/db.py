"""Database connection, DDL, and index creation for zhdict-loader."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from zhdict_loader.exceptions import StorageError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

DATA_TABLES = ("lexicon", "entries", "variants", "senses")

# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

DDL = """
-- Meta table
CREATE TABLE IF NOT EXISTS meta (
    key TEXT NOT NULL,
    value TEXT,
    UNIQUE (key)
);

-- CEDICT
CREATE TABLE IF NOT EXISTS lexicon (
    id INTEGER PRIMARY KEY,
    traditional TEXT NOT NULL,
    simplified TEXT NOT NULL,
    romanization TEXT,
    gloss TEXT,
    char_count INTEGER NOT NULL
);

-- MoeDict
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    radical TEXT,
    stroke_count INTEGER NOT NULL,
    non_radical_stroke_count INTEGER NOT NULL,
    UNIQUE (title)
);

CREATE TABLE IF NOT EXISTS variants (
    id INTEGER PRIMARY KEY,
    entry_id INTEGER NOT NULL REFERENCES entries (id),
    idx INTEGER NOT NULL,
    pinyin TEXT,
    bopomofo TEXT,
    bopomofo2 TEXT
);

CREATE TABLE IF NOT EXISTS senses (
    id INTEGER PRIMARY KEY,
    variant_id INTEGER NOT NULL REFERENCES variants (id),
    idx INTEGER NOT NULL,
    definition TEXT,
    quotes TEXT,
    examples TEXT,
    type TEXT,
    links TEXT,
    synonyms TEXT,
    antonyms TEXT
);
"""

LEXICON_INDEXES = (
    "CREATE INDEX IF NOT EXISTS lexicon_traditional_index ON lexicon (traditional)",
    "CREATE INDEX IF NOT EXISTS lexicon_simplified_index ON lexicon (simplified)",
)

DUMP_INDEXES = (
    "CREATE INDEX IF NOT EXISTS entries_title_index ON entries (title)",
    "CREATE INDEX IF NOT EXISTS entries_id_index ON entries (id)",
    "CREATE INDEX IF NOT EXISTS variants_id_index ON variants (id)",
    "CREATE INDEX IF NOT EXISTS senses_id_index ON senses (id)",
)


def connect(
    db_path: str | Path = ":memory:",
    *,
    user: str | None = None,
    password: str | None = None,
) -> sqlite3.Connection:
    """Open a database connection with loader PRAGMA settings.

    SQLite has no accounts; ``user`` and ``password`` are accepted so the
    same configuration works for every backend, and are otherwise unused.
    """
    db_path_str = str(db_path)
    if user or password:
        logger.debug("SQLite ignores user/password settings")
    try:
        conn = sqlite3.connect(db_path_str)
        conn.execute("PRAGMA foreign_keys = ON")
        if db_path_str != ":memory:":
            conn.execute("PRAGMA journal_mode = WAL")
    except sqlite3.Error as e:
        raise StorageError(f"Cannot open database {db_path_str}: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create all tables if they don't exist. Set schema version."""
    check_schema_version(conn)
    try:
        conn.executescript(DDL)
        conn.execute(
            "INSERT OR IGNORE INTO meta (key, value) VALUES ('schema_version', ?)",
            (SCHEMA_VERSION,),
        )
        conn.execute(
            "INSERT OR IGNORE INTO meta (key, value) "
            "VALUES ('created_at', strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
        )
        conn.commit()
    except sqlite3.Error as e:
        raise StorageError(f"Cannot create schema: {e}") from e


def check_schema_version(conn: sqlite3.Connection) -> str | None:
    """Return the schema version recorded in ``meta``.

    ``None`` means the database has never been initialized by this
    loader. Raises :class:`StorageError` if another schema version wrote
    it; such tables are rebuilt with ``--drop-existing``, never migrated.
    """
    has_meta = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'meta'"
    ).fetchone()
    if has_meta is None:
        return None
    row = conn.execute(
        "SELECT value FROM meta WHERE key = 'schema_version'"
    ).fetchone()
    stored = row[0] if row is not None else None
    if stored is not None and stored != SCHEMA_VERSION:
        raise StorageError(
            f"Database was written with schema {stored}, this loader "
            f"writes {SCHEMA_VERSION}; rebuild it with --drop-existing"
        )
    return stored


def drop_tables(conn: sqlite3.Connection) -> None:
    """Drop the loader's tables, children first."""
    try:
        with conn:
            for table in reversed(DATA_TABLES):
                conn.execute(f"DROP TABLE IF EXISTS {table}")
            conn.execute("DROP TABLE IF EXISTS meta")
    except sqlite3.Error as e:
        raise StorageError(f"Cannot drop tables: {e}") from e
    logger.info("Dropped existing tables")


def require_empty(conn: sqlite3.Connection, tables: tuple[str, ...] = DATA_TABLES) -> None:
    """Raise :class:`StorageError` if any of ``tables`` already holds rows."""
    for table in tables:
        row = conn.execute(f"SELECT 1 FROM {table} LIMIT 1").fetchone()
        if row is not None:
            raise StorageError(
                f"Table {table!r} is not empty; each run loads into fresh "
                "tables (drop the existing ones first)"
            )


def create_indexes(conn: sqlite3.Connection, statements: tuple[str, ...]) -> None:
    """Run index DDL statements and commit."""
    try:
        with conn:
            for statement in statements:
                conn.execute(statement)
    except sqlite3.Error as e:
        raise StorageError(f"Cannot create indexes: {e}") from e


def count_rows(conn: sqlite3.Connection, table: str) -> int:
    """Number of rows in one of the loader's tables."""
    if table not in DATA_TABLES:
        raise ValueError(f"Unknown table: {table!r}")
    return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


@contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[None, None, None]:
    """Run the block in one explicit transaction.

    Commits on success; rolls back on any exception and re-raises it.
    """
    conn.execute("BEGIN")
    try:
        yield
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()
