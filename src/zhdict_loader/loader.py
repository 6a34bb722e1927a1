"""Load pipeline for zhdict-loader.

Two write paths with different atomicity:

* the CEDICT lexicon is streamed through a single ``executemany`` inside
  one transaction, so either every row is committed or none is;
* the MoeDict dump is written one statement per row. By default those
  statements share one transaction. With ``atomic=False`` each statement
  commits on its own and a failure leaves the rows written so far.
"""

from __future__ import annotations

import gzip
import logging
import sqlite3
from collections.abc import Iterable
from itertools import groupby
from pathlib import Path
from typing import IO

from zhdict_loader import db as _db
from zhdict_loader.cedict import iter_records
from zhdict_loader.config import LoaderConfig
from zhdict_loader.encoding import insert_sql, row_params
from zhdict_loader.exceptions import StorageError
from zhdict_loader.flattener import iter_rows
from zhdict_loader.models import (
    EntryNode,
    EntryRow,
    LexiconRecord,
    LoadSummary,
    SenseRow,
    VariantRow,
)
from zhdict_loader.moedict import decode_dump

logger = logging.getLogger(__name__)


def open_input(path: str | Path) -> IO[bytes]:
    """Open an input file in binary mode; ``.gz`` files are decompressed.

    Decoding is left to the parsers so that invalid UTF-8 is reported as
    a typed error with its location.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return open(path, "rb")


def read_dump(path: str | Path) -> list[EntryNode]:
    """Read and decode a MoeDict JSON dump file."""
    with open_input(path) as f:
        return decode_dump(f.read())


# ---------------------------------------------------------------------------
# Write paths
# ---------------------------------------------------------------------------

def load_lexicon(
    conn: sqlite3.Connection,
    records: Iterable[LexiconRecord],
) -> int:
    """Bulk-insert lexicon records in one transaction.

    ``records`` is consumed lazily; an exception raised while producing
    it (malformed line, consistency error) rolls back every row streamed
    before it. Returns the number of rows committed.
    """
    count = 0

    def params():
        nonlocal count
        for record in records:
            yield row_params(record)
            count += 1

    try:
        with _db.transaction(conn):
            conn.executemany(insert_sql(LexiconRecord), params())
    except sqlite3.Error as e:
        raise StorageError(f"Lexicon load failed: {e}") from e
    logger.info("Committed %d lexicon rows", count)
    return count


def load_dump(
    conn: sqlite3.Connection,
    entries: Iterable[EntryNode],
    *,
    atomic: bool = True,
) -> LoadSummary:
    """Insert flattened dump rows, one statement per row, in traversal order."""
    summary = LoadSummary()
    rows = iter_rows(entries)
    try:
        if atomic:
            with _db.transaction(conn):
                _insert_rows(conn, rows, summary)
        else:
            _insert_rows(conn, rows, summary, commit_each=True)
    except sqlite3.Error as e:
        if not atomic:
            logger.warning(
                "Dump load stopped; %d entries, %d variants, %d senses "
                "remain written",
                summary.entries, summary.variants, summary.senses,
            )
        raise StorageError(f"Dump load failed: {e}") from e
    logger.info(
        "Wrote %d entries, %d variants, %d senses",
        summary.entries, summary.variants, summary.senses,
    )
    return summary


def _insert_rows(
    conn: sqlite3.Connection,
    rows: Iterable[EntryRow | VariantRow | SenseRow],
    summary: LoadSummary,
    *,
    commit_each: bool = False,
) -> None:
    # Consecutive rows of one type share a statement string
    for row_type, group in groupby(rows, key=type):
        sql = insert_sql(row_type)
        for row in group:
            conn.execute(sql, row_params(row))
            if commit_each:
                conn.commit()
            setattr(summary, row.TABLE, getattr(summary, row.TABLE) + 1)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def read_inputs(
    cedict_path: str | Path,
    moedict_path: str | Path,
) -> list[EntryNode]:
    """Check that the lexicon file exists and decode the dump.

    Nothing is written, so callers run this before touching the database.
    """
    if not Path(cedict_path).exists():
        raise FileNotFoundError(f"File not found: {cedict_path}")
    logger.info("Decoding MoeDict data from %s", moedict_path)
    entries = read_dump(moedict_path)
    logger.info("Decoded %d entries", len(entries))
    return entries


def load_files(
    conn: sqlite3.Connection,
    cedict_path: str | Path,
    moedict_path: str | Path,
    *,
    atomic_dump: bool = True,
) -> LoadSummary:
    """Load both sources into an initialized, empty database.

    The dump is decoded before anything is written, so a missing file or
    a decode error leaves the database untouched.
    """
    _db.require_empty(conn)
    entries = read_inputs(cedict_path, moedict_path)
    return _load_sources(conn, cedict_path, entries, atomic_dump)


def _load_sources(
    conn: sqlite3.Connection,
    cedict_path: str | Path,
    entries: list[EntryNode],
    atomic_dump: bool,
) -> LoadSummary:
    logger.info("Loading CEDICT data from %s", cedict_path)
    with open_input(cedict_path) as f:
        lexicon_count = load_lexicon(conn, iter_records(f))
    logger.info("Creating lexicon indexes")
    _db.create_indexes(conn, _db.LEXICON_INDEXES)

    logger.info("Loading MoeDict data")
    summary = load_dump(conn, entries, atomic=atomic_dump)
    summary.lexicon = lexicon_count
    logger.info("Creating dump indexes")
    _db.create_indexes(conn, _db.DUMP_INDEXES)
    return summary


def run(
    config: LoaderConfig,
    cedict_path: str | Path,
    moedict_path: str | Path,
) -> LoadSummary:
    """Decode the inputs, then connect, prepare the schema and load.

    Inputs are read before ``drop_existing`` takes effect, so a missing
    file or a bad dump keeps the previous load intact.
    """
    config.require_database()
    entries = read_inputs(cedict_path, moedict_path)
    conn = _db.connect(
        config.database, user=config.user, password=config.password,
    )
    try:
        if config.drop_existing:
            _db.drop_tables(conn)
        _db.init_db(conn)
        _db.require_empty(conn)
        return _load_sources(conn, cedict_path, entries, config.atomic_dump)
    finally:
        conn.close()
