"""Flattening of the nested entry dump into relational rows.

Entries own variants, variants own senses. The walk is depth-first and
keeps input order at every level, so identifiers follow document order:

* ``id`` values are corpus-wide, one counter per relation, never reset;
* ``idx`` values are the 0-based position of a child under its parent.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from zhdict_loader.models import (
    EntryNode,
    EntryRow,
    FlattenedDump,
    SenseRow,
    VariantRow,
)


@dataclass(slots=True)
class IdAllocator:
    """Next free identifier for each relation."""

    entry: int = 1
    variant: int = 1
    sense: int = 1

    def next_entry(self) -> int:
        value = self.entry
        self.entry += 1
        return value

    def next_variant(self) -> int:
        value = self.variant
        self.variant += 1
        return value

    def next_sense(self) -> int:
        value = self.sense
        self.sense += 1
        return value


def iter_rows(
    entries: Iterable[EntryNode],
    ids: IdAllocator | None = None,
) -> Iterator[EntryRow | VariantRow | SenseRow]:
    """Yield rows in traversal order, each parent before its children."""
    if ids is None:
        ids = IdAllocator()

    for entry in entries:
        entry_id = ids.next_entry()
        yield EntryRow(
            id=entry_id,
            title=entry.title,
            radical=entry.radical,
            stroke_count=entry.stroke_count,
            non_radical_stroke_count=entry.non_radical_stroke_count,
        )
        for variant_idx, variant in enumerate(entry.variants):
            variant_id = ids.next_variant()
            yield VariantRow(
                id=variant_id,
                entry_id=entry_id,
                idx=variant_idx,
                pinyin=variant.pinyin,
                bopomofo=variant.bopomofo,
                bopomofo2=variant.bopomofo2,
            )
            for sense_idx, sense in enumerate(variant.senses):
                yield SenseRow(
                    id=ids.next_sense(),
                    variant_id=variant_id,
                    idx=sense_idx,
                    definition=sense.definition,
                    quotes=sense.quotes,
                    examples=sense.examples,
                    type=sense.type,
                    links=sense.links,
                    synonyms=sense.synonyms,
                    antonyms=sense.antonyms,
                )


def flatten(
    entries: Iterable[EntryNode],
    ids: IdAllocator | None = None,
) -> FlattenedDump:
    """Collect :func:`iter_rows` into three ordered relations."""
    dump = FlattenedDump()
    for row in iter_rows(entries, ids):
        if isinstance(row, EntryRow):
            dump.entries.append(row)
        elif isinstance(row, VariantRow):
            dump.variants.append(row)
        else:
            dump.senses.append(row)
    return dump
