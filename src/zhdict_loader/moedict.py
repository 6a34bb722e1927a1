"""Decoding of the MoeDict JSON dump into entry trees."""

from __future__ import annotations

import json
from typing import Any

from zhdict_loader.exceptions import DataDecodeError
from zhdict_loader.models import EntryNode, SenseNode, VariantNode


def decode_dump(data: str | bytes) -> list[EntryNode]:
    """Decode a whole dump.

    The root must be a JSON array of entry objects. Raises
    :class:`DataDecodeError` on malformed JSON or unexpected structure.
    """
    try:
        root = json.loads(data)
    except json.JSONDecodeError as e:
        raise DataDecodeError(
            f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise DataDecodeError(f"Invalid UTF-8: {e}") from e

    if not isinstance(root, list):
        raise DataDecodeError("Root must be a JSON array of entries")
    return [_decode_entry(obj, f"[{i}]") for i, obj in enumerate(root)]


def _decode_entry(obj: Any, path: str) -> EntryNode:
    _require_object(obj, path)
    title = _str_field(obj, "title", path)
    if not title:
        raise DataDecodeError("Missing required field 'title'", path)
    variants = tuple(
        _decode_variant(v, f"{path}.heteronyms[{i}]")
        for i, v in enumerate(_array_field(obj, "heteronyms", path))
    )
    return EntryNode(
        title=title,
        radical=_str_field(obj, "radical", path),
        stroke_count=_int_field(obj, "stroke_count", path),
        non_radical_stroke_count=_int_field(obj, "non_radical_stroke_count", path),
        variants=variants,
    )


def _decode_variant(obj: Any, path: str) -> VariantNode:
    _require_object(obj, path)
    senses = tuple(
        _decode_sense(s, f"{path}.definitions[{i}]")
        for i, s in enumerate(_array_field(obj, "definitions", path))
    )
    return VariantNode(
        pinyin=_str_field(obj, "pinyin", path),
        bopomofo=_str_field(obj, "bopomofo", path),
        bopomofo2=_str_field(obj, "bopomofo2", path),
        senses=senses,
    )


def _decode_sense(obj: Any, path: str) -> SenseNode:
    _require_object(obj, path)
    return SenseNode(
        definition=_str_field(obj, "def", path),
        quotes=_str_list_field(obj, "quote", path),
        examples=_str_list_field(obj, "example", path),
        type=_str_field(obj, "type", path),
        links=_str_list_field(obj, "link", path),
        synonyms=_str_field(obj, "synonyms", path),
        antonyms=_str_field(obj, "antonyms", path),
    )


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _require_object(obj: Any, path: str) -> None:
    if not isinstance(obj, dict):
        raise DataDecodeError("Expected a JSON object", path)


def _str_field(obj: dict, key: str, path: str) -> str | None:
    value = obj.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DataDecodeError("Expected a string", f"{path}.{key}")


def _int_field(obj: dict, key: str, path: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataDecodeError("Expected an integer", f"{path}.{key}")
    return value


def _array_field(obj: dict, key: str, path: str) -> list:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DataDecodeError("Expected an array", f"{path}.{key}")
    return value


def _str_list_field(obj: dict, key: str, path: str) -> tuple[str, ...]:
    values = _array_field(obj, key, path)
    for i, value in enumerate(values):
        if not isinstance(value, str):
            raise DataDecodeError("Expected a string", f"{path}.{key}[{i}]")
    return tuple(values)
