"""Export of a full load as a standalone SQL script."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from zhdict_loader import db as _db
from zhdict_loader.encoding import render_insert
from zhdict_loader.flattener import iter_rows
from zhdict_loader.models import EntryNode, LexiconRecord, LoadSummary

logger = logging.getLogger(__name__)


def write_sql_script(
    destination: str | Path,
    records: Iterable[LexiconRecord],
    entries: Iterable[EntryNode],
) -> LoadSummary:
    """Write DDL, every row as a literal INSERT, and the index statements.

    The script is written to a temporary file next to ``destination`` and
    moved into place only once complete, so a parse or consistency error
    leaves no script behind.
    """
    destination = Path(destination)
    summary = LoadSummary()
    fd, tmp_path = tempfile.mkstemp(
        suffix=".sql", dir=destination.parent,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as out:
            out.write(_db.DDL.strip() + "\n\n")
            out.write(
                "INSERT OR IGNORE INTO meta (key, value) "
                f"VALUES ('schema_version', '{_db.SCHEMA_VERSION}');\n\n"
            )
            out.write("BEGIN;\n")
            for record in records:
                out.write(render_insert(record) + "\n")
                summary.lexicon += 1
            for row in iter_rows(entries):
                out.write(render_insert(row) + "\n")
                setattr(summary, row.TABLE, getattr(summary, row.TABLE) + 1)
            out.write("COMMIT;\n\n")
            for statement in _db.LEXICON_INDEXES + _db.DUMP_INDEXES:
                out.write(statement + ";\n")
        # mkstemp creates the file 0600; give it the mode open() would
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, destination)
    except BaseException:
        os.unlink(tmp_path)
        raise

    logger.info(
        "Wrote SQL script %s (%d lexicon rows, %d entries, %d variants, "
        "%d senses)",
        destination, summary.lexicon, summary.entries, summary.variants,
        summary.senses,
    )
    return summary


def _current_umask() -> int:
    # The umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask
