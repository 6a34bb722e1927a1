"""Domain model dataclasses for zhdict-loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

# ---------------------------------------------------------------------------
# CEDICT
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LexiconRecord:
    """A traditional/simplified headword pair with romanization and gloss."""

    TABLE: ClassVar[str] = "lexicon"
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "traditional", "simplified", "romanization", "gloss", "char_count",
    )

    traditional: str
    simplified: str
    romanization: str
    gloss: str
    char_count: int


# ---------------------------------------------------------------------------
# MoeDict nodes (decoded input tree)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SenseNode:
    """One definition of a variant."""

    definition: str | None = None
    quotes: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    type: str | None = None
    links: tuple[str, ...] = ()
    synonyms: str | None = None
    antonyms: str | None = None


@dataclass(frozen=True, slots=True)
class VariantNode:
    """A pronunciation reading of an entry."""

    pinyin: str | None = None
    bopomofo: str | None = None
    bopomofo2: str | None = None
    senses: tuple[SenseNode, ...] = ()


@dataclass(frozen=True, slots=True)
class EntryNode:
    """A headword of the nested dump, identified by its title."""

    title: str
    radical: str | None = None
    stroke_count: int = 0
    non_radical_stroke_count: int = 0
    variants: tuple[VariantNode, ...] = ()


# ---------------------------------------------------------------------------
# Relational rows (flattened output)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EntryRow:
    """A row of the ``entries`` relation."""

    TABLE: ClassVar[str] = "entries"
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "id", "title", "radical", "stroke_count", "non_radical_stroke_count",
    )

    id: int
    title: str
    radical: str | None
    stroke_count: int
    non_radical_stroke_count: int


@dataclass(frozen=True, slots=True)
class VariantRow:
    """A row of the ``variants`` relation."""

    TABLE: ClassVar[str] = "variants"
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "id", "entry_id", "idx", "pinyin", "bopomofo", "bopomofo2",
    )

    id: int
    entry_id: int
    idx: int
    pinyin: str | None
    bopomofo: str | None
    bopomofo2: str | None


@dataclass(frozen=True, slots=True)
class SenseRow:
    """A row of the ``senses`` relation.

    List-valued fields stay tuples here; they are joined into one
    delimited string only when encoded for storage.
    """

    TABLE: ClassVar[str] = "senses"
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "id", "variant_id", "idx", "definition", "quotes", "examples",
        "type", "links", "synonyms", "antonyms",
    )

    id: int
    variant_id: int
    idx: int
    definition: str | None
    quotes: tuple[str, ...]
    examples: tuple[str, ...]
    type: str | None
    links: tuple[str, ...]
    synonyms: str | None
    antonyms: str | None


Row = LexiconRecord | EntryRow | VariantRow | SenseRow


@dataclass(slots=True)
class FlattenedDump:
    """The three ordered relations produced from a decoded dump."""

    entries: list[EntryRow] = field(default_factory=list)
    variants: list[VariantRow] = field(default_factory=list)
    senses: list[SenseRow] = field(default_factory=list)


@dataclass(slots=True)
class LoadSummary:
    """Row counts written by one run."""

    lexicon: int = 0
    entries: int = 0
    variants: int = 0
    senses: int = 0
