"""Custom exception hierarchy for zhdict-loader."""

from __future__ import annotations


class ZhdictLoaderError(Exception):
    """Base exception for all zhdict-loader errors."""


class ConfigError(ZhdictLoaderError):
    """Missing or invalid configuration (bad YAML, no database)."""


class MalformedLineError(ZhdictLoaderError):
    """A lexicon line does not match the CEDICT line grammar."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Malformed line {line_number}: {line!r}")


class ConsistencyError(ZhdictLoaderError):
    """Traditional and simplified forms differ in character count."""

    def __init__(
        self,
        line_number: int,
        traditional: str,
        simplified: str,
    ) -> None:
        self.line_number = line_number
        self.traditional = traditional
        self.simplified = simplified
        self.traditional_count = len(traditional)
        self.simplified_count = len(simplified)
        super().__init__(
            f"Line {line_number}: character count of {traditional!r} "
            f"({self.traditional_count}) and {simplified!r} "
            f"({self.simplified_count}) unequal"
        )


class DataDecodeError(ZhdictLoaderError):
    """Failed to decode the entry dump (malformed JSON or structure)."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class StorageError(ZhdictLoaderError):
    """Write or connection failure, non-empty target, schema mismatch."""
