"""CC-CEDICT line grammar parsing and headword consistency checks.

CC-CEDICT format (one entry per line)::

    Traditional Simplified [pin1 yin1] /gloss 1/gloss 2/

Lines starting with ``#`` are comments.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from zhdict_loader.exceptions import ConsistencyError, MalformedLineError
from zhdict_loader.models import LexiconRecord

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"

# Gloss is greedy up to the last slash; anything after it is ignored.
_LINE_RE = re.compile(r"(\S+) (\S+) \[(.*?)\] /(.*)/")


def normalize_romanization(romanization: str) -> str:
    """Write ``u:`` (u with umlaut) as ``v``."""
    return romanization.replace("u:", "v")


def space_gloss(gloss: str) -> str:
    """Put spaces around the slashes separating the senses of a gloss."""
    return gloss.replace("/", " / ")


def check_consistency(
    traditional: str,
    simplified: str,
    line_number: int = 0,
) -> int:
    """Return the shared character count of a headword pair.

    Counts are Unicode code points. Raises :class:`ConsistencyError` if
    the two forms differ.
    """
    count = len(traditional)
    if count != len(simplified):
        raise ConsistencyError(line_number, traditional, simplified)
    return count


def parse_line(line: str, line_number: int = 0) -> LexiconRecord | None:
    """Parse one CEDICT line.

    Returns ``None`` for blank and comment lines. Raises
    :class:`MalformedLineError` if the line does not match the grammar and
    :class:`ConsistencyError` if the headword forms differ in length.
    """
    line = line.rstrip("\r\n")
    if not line or line.startswith(COMMENT_MARKER):
        return None

    match = _LINE_RE.match(line)
    if match is None:
        raise MalformedLineError(line_number, line)

    traditional, simplified, romanization, gloss = match.groups()
    char_count = check_consistency(traditional, simplified, line_number)
    return LexiconRecord(
        traditional=traditional,
        simplified=simplified,
        romanization=normalize_romanization(romanization),
        gloss=space_gloss(gloss),
        char_count=char_count,
    )


def iter_records(lines: Iterable[str | bytes]) -> Iterator[LexiconRecord]:
    """Lazily parse lines, numbering them from 1.

    ``lines`` may be text or raw UTF-8 bytes (a file opened in binary
    mode). A byte line that is not valid UTF-8 raises
    :class:`MalformedLineError`. Nothing past a failing line is read.
    """
    for line_number, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            line = _decode_line(line, line_number)
        if line_number == 1:
            line = line.lstrip("\ufeff")
        record = parse_line(line, line_number)
        if record is None:
            continue
        logger.debug("Line %d: %s", line_number, record.traditional)
        yield record


def _decode_line(raw: bytes, line_number: int) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        text = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        raise MalformedLineError(line_number, text) from e
