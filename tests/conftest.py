"""Shared test fixtures for zhdict-loader."""

from pathlib import Path

import pytest

from zhdict_loader import db

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def conn():
    """In-memory database connection with the schema created."""
    conn = db.connect(":memory:")
    db.init_db(conn)
    yield conn
    conn.close()


@pytest.fixture
def cedict_file():
    return FIXTURES / "sample_cedict.u8"


@pytest.fixture
def moedict_file():
    return FIXTURES / "sample_moedict.json"


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ZHDICT_DB", "ZHDICT_USER", "ZHDICT_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
