"""
Loader configuration from the environment and YAML files.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from zhdict_loader.exceptions import ConfigError

ENV_DATABASE = "ZHDICT_DB"
ENV_USER = "ZHDICT_USER"
ENV_PASSWORD = "ZHDICT_PASSWORD"


@dataclass
class LoaderConfig:
    """Connection and load settings for one run."""
    database: str | None = None
    user: str | None = None
    password: str | None = None
    atomic_dump: bool = True
    drop_existing: bool = False

    def __repr__(self) -> str:
        password = "***" if self.password else None
        return (
            f"LoaderConfig(database={self.database!r}, user={self.user!r}, "
            f"password={password!r}, atomic_dump={self.atomic_dump!r}, "
            f"drop_existing={self.drop_existing!r})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LoaderConfig:
        """Build a config from ``ZHDICT_*`` environment variables."""
        if environ is None:
            environ = os.environ
        return cls(
            database=environ.get(ENV_DATABASE) or None,
            user=environ.get(ENV_USER) or None,
            password=environ.get(ENV_PASSWORD) or None,
        )

    def merge(self, **overrides: Any) -> LoaderConfig:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def require_database(self) -> None:
        """Raise ConfigError if no database is configured."""
        if not self.database:
            raise ConfigError(
                f"No database configured (set {ENV_DATABASE}, "
                "use --database or a config file)"
            )


_FIELD_TYPES = {
    "database": str,
    "user": str,
    "password": str,
    "atomic_dump": bool,
    "drop_existing": bool,
}


def load_config_file(
    path: str | Path,
    base: LoaderConfig | None = None,
) -> LoaderConfig:
    """Load settings from a YAML file on top of ``base``.

    Args:
        path: Path to YAML file
        base: Settings the file overrides (defaults to an empty config)

    Returns:
        LoaderConfig object

    Raises:
        ConfigError: If the file cannot be parsed or is invalid
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    data = _load_yaml_file(path)
    return (base or LoaderConfig()).merge(**_parse_settings(data))


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load YAML from a file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1})" if mark else ""
        raise ConfigError(f"Invalid YAML in {path}{where}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping (dictionary)")

    return data


def _parse_settings(data: dict[str, Any]) -> dict[str, Any]:
    """Validate keys and value types of a settings mapping."""
    known = {f.name for f in fields(LoaderConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

    settings = {}
    for key, value in data.items():
        if value is None:
            continue
        expected = _FIELD_TYPES[key]
        if expected is str and isinstance(value, (int, float)) and not isinstance(value, bool):
            # YAML reads unquoted numeric passwords as numbers
            value = str(value)
        if not isinstance(value, expected):
            raise ConfigError(
                f"Setting '{key}' must be a {expected.__name__}"
            )
        settings[key] = value
    return settings
