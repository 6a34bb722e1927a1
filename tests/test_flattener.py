"""Tests for flattening entry trees into relational rows."""

from zhdict_loader import (
    EntryNode,
    EntryRow,
    IdAllocator,
    SenseNode,
    SenseRow,
    VariantNode,
    VariantRow,
    flatten,
    iter_rows,
)


def _entry(title, *sense_counts):
    """Entry with one variant per count, each with that many senses."""
    return EntryNode(
        title=title,
        variants=tuple(
            VariantNode(
                pinyin=f"{title}{v}",
                senses=tuple(SenseNode(definition=f"{title}{v}.{s}") for s in range(n)),
            )
            for v, n in enumerate(sense_counts)
        ),
    )


class TestSingleEntry:
    def test_one_variant_two_senses(self):
        dump = flatten([_entry("愛", 2)])

        assert len(dump.entries) == 1
        assert len(dump.variants) == 1
        assert len(dump.senses) == 2

        entry = dump.entries[0]
        variant = dump.variants[0]
        assert entry.title == "愛"
        assert variant.entry_id == entry.id
        assert variant.idx == 0
        assert [s.idx for s in dump.senses] == [0, 1]
        assert {s.variant_id for s in dump.senses} == {variant.id}

    def test_absent_fields_carried_through(self):
        dump = flatten([EntryNode(title="好", variants=(VariantNode(senses=(SenseNode(),)),))])
        assert dump.entries[0].radical is None
        assert dump.variants[0].pinyin is None
        assert dump.variants[0].bopomofo is None
        sense = dump.senses[0]
        assert sense.definition is None
        assert sense.quotes == ()
        assert sense.synonyms is None


class TestIdentifiers:
    def test_ids_global_and_gap_free(self):
        dump = flatten([_entry("a", 2, 1), _entry("b", 3), _entry("c"), _entry("d", 1)])

        assert [e.id for e in dump.entries] == [1, 2, 3, 4]
        assert [v.id for v in dump.variants] == [1, 2, 3, 4]
        assert [s.id for s in dump.senses] == [1, 2, 3, 4, 5, 6, 7]

    def test_second_entry_continues_variant_ids(self):
        dump = flatten([_entry("a", 1, 1, 1), _entry("b", 1)])
        b_variants = [v for v in dump.variants if v.entry_id == 2]
        assert [v.id for v in b_variants] == [4]

    def test_idx_restarts_per_parent(self):
        dump = flatten([_entry("a", 2, 3), _entry("b", 2)])

        assert [v.idx for v in dump.variants] == [0, 1, 0]
        assert [s.idx for s in dump.senses] == [0, 1, 0, 1, 2, 0, 1]
        assert [s.variant_id for s in dump.senses] == [1, 1, 2, 2, 2, 3, 3]

    def test_allocator_continues_numbering(self):
        ids = IdAllocator(entry=10, variant=20, sense=30)
        dump = flatten([_entry("a", 1)], ids)
        assert dump.entries[0].id == 10
        assert dump.variants[0].id == 20
        assert dump.senses[0].id == 30
        assert (ids.entry, ids.variant, ids.sense) == (11, 21, 31)

    def test_separate_calls_do_not_share_state(self):
        first = flatten([_entry("a", 1)])
        second = flatten([_entry("b", 1)])
        assert first.entries[0].id == second.entries[0].id == 1


class TestTraversalOrder:
    def test_depth_first_document_order(self):
        rows = list(iter_rows([_entry("a", 2, 1), _entry("b", 1)]))
        kinds = [type(r).__name__ for r in rows]
        assert kinds == [
            "EntryRow", "VariantRow", "SenseRow", "SenseRow",
            "VariantRow", "SenseRow",
            "EntryRow", "VariantRow", "SenseRow",
        ]

    def test_sense_definitions_keep_input_order(self):
        rows = list(iter_rows([_entry("a", 2, 1)]))
        definitions = [r.definition for r in rows if isinstance(r, SenseRow)]
        assert definitions == ["a0.0", "a0.1", "a1.0"]

    def test_row_types(self):
        rows = list(iter_rows([_entry("a", 1)]))
        assert isinstance(rows[0], EntryRow)
        assert isinstance(rows[1], VariantRow)
        assert isinstance(rows[2], SenseRow)
