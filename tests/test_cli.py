"""Tests for the zhdict-load command line."""

import sqlite3

import pytest

from zhdict_loader.cli import main


class TestUsage:
    def test_missing_arguments(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code != 0
        assert "usage" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "zhdict-load" in capsys.readouterr().out


class TestLoad:
    def test_load_with_database_flag(self, tmp_path, cedict_file, moedict_file, capsys):
        path = tmp_path / "dict.db"
        code = main([str(cedict_file), str(moedict_file), "--database", str(path), "-q"])
        assert code == 0

        out = capsys.readouterr().out
        assert "Rows written" in out
        assert "lexicon" in out

        conn = sqlite3.connect(path)
        try:
            assert conn.execute("SELECT COUNT(*) FROM lexicon").fetchone()[0] == 5
        finally:
            conn.close()

    def test_database_from_environment(self, tmp_path, cedict_file, moedict_file, monkeypatch):
        path = tmp_path / "env.db"
        monkeypatch.setenv("ZHDICT_DB", str(path))
        assert main([str(cedict_file), str(moedict_file), "-q"]) == 0
        assert path.exists()

    def test_database_from_config_file(self, tmp_path, cedict_file, moedict_file, write_file):
        path = tmp_path / "cfg.db"
        config = write_file("loader.yaml", f"database: {path}\n")
        assert main([str(cedict_file), str(moedict_file), "--config", str(config), "-q"]) == 0
        assert path.exists()

    def test_no_database(self, cedict_file, moedict_file, capsys):
        assert main([str(cedict_file), str(moedict_file), "-q"]) == 1
        assert "No database configured" in capsys.readouterr().out

    def test_consistency_error(self, tmp_path, moedict_file, write_file, capsys):
        cedict = write_file("bad.u8", "你 你们 [ni3] /you/\n")
        path = tmp_path / "dict.db"
        code = main([str(cedict), str(moedict_file), "--database", str(path), "-q"])
        assert code == 1

        out = capsys.readouterr().out
        assert "[LEXICON ERROR]" in out
        assert "Line: 1" in out

        conn = sqlite3.connect(path)
        try:
            assert conn.execute("SELECT COUNT(*) FROM lexicon").fetchone()[0] == 0
        finally:
            conn.close()

    def test_missing_input(self, tmp_path, moedict_file, capsys):
        code = main([
            str(tmp_path / "missing.u8"), str(moedict_file),
            "--database", str(tmp_path / "dict.db"), "-q",
        ])
        assert code == 1
        assert "File not found" in capsys.readouterr().out

    def test_invalid_utf8_dump(self, tmp_path, cedict_file, capsys):
        bad = tmp_path / "bad.json"
        bad.write_bytes(b'[{"title": "\xff\xfe"}]')
        code = main([str(cedict_file), str(bad), "--database", str(tmp_path / "dict.db"), "-q"])
        assert code == 1
        assert "[ERROR] Invalid UTF-8" in capsys.readouterr().out

    def test_invalid_utf8_lexicon_line(self, tmp_path, moedict_file, capsys):
        cedict = tmp_path / "bad.u8"
        cedict.write_bytes("好 好 [hao3] /good/\n".encode("utf-8") + b"\xff\xfe [x] /y/\n")
        code = main([str(cedict), str(moedict_file), "--database", str(tmp_path / "dict.db"), "-q"])
        assert code == 1
        out = capsys.readouterr().out
        assert "[LEXICON ERROR]" in out
        assert "Line: 2" in out

    def test_drop_existing_with_missing_dump_keeps_rows(self, tmp_path, cedict_file, moedict_file, capsys):
        path = tmp_path / "dict.db"
        assert main([str(cedict_file), str(moedict_file), "--database", str(path), "-q"]) == 0
        code = main([
            str(cedict_file), str(tmp_path / "typo.json"),
            "--database", str(path), "--drop-existing", "-q",
        ])
        assert code == 1
        assert "File not found" in capsys.readouterr().out

        conn = sqlite3.connect(path)
        try:
            assert conn.execute("SELECT COUNT(*) FROM lexicon").fetchone()[0] == 5
        finally:
            conn.close()

    def test_drop_existing(self, tmp_path, cedict_file, moedict_file):
        args = [str(cedict_file), str(moedict_file), "--database", str(tmp_path / "dict.db"), "-q"]
        assert main(args) == 0
        assert main(args) == 1
        assert main(args + ["--drop-existing"]) == 0


class TestSqlOut:
    def test_writes_script(self, tmp_path, cedict_file, moedict_file, capsys):
        out = tmp_path / "load.sql"
        assert main([str(cedict_file), str(moedict_file), "--sql-out", str(out), "-q"]) == 0
        assert out.exists()
        assert "INSERT INTO entries" in out.read_text(encoding="utf-8")
        assert "Rows written" in capsys.readouterr().out
