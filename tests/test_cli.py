"""Tests for the command-line interface."""

import io
import json

import pytest
from drive_images.cli import build_parser, main


@pytest.fixture
def run(registry_path, capsys):
    """Run the CLI against a temporary registry file and parse its JSON output."""
    def _run(*args):
        code = main(["--storage-path", registry_path, *args])
        captured = capsys.readouterr()
        output = captured.out if code == 0 else captured.err
        return code, json.loads(output)

    return _run


class TestCLI:
    """Test CLI commands."""

    def test_add_and_get(self, run):
        code, data = run("add", "https://drive.google.com/file/d/1AbC-23xYz/view", "--title", "Sunset")

        assert code == 0
        assert data["success"] is True
        assert data["key"] == "sunset"
        assert data["url"] == "https://drive.google.com/uc?export=view&id=1AbC-23xYz"

        code, data = run("get", "sunset")
        assert code == 0
        assert data["title"] == "Sunset"

    def test_add_empty(self, run):
        code, data = run("add", "  ")

        assert code == 1
        assert data == {"success": False, "error": "Image URL or File ID required"}

    def test_import_file(self, run, tmp_path):
        links = tmp_path / "links.txt"
        links.write_text("ID1\nID2\n\nID3\n", encoding="utf-8")

        code, data = run("import", str(links))
        assert code == 0
        assert data["inserted"] == 3

        code, data = run("list")
        assert data["count"] == 3
        assert [img["key"] for img in data["images"]] == ["id1", "id2", "id3"]

    def test_import_stdin(self, run, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("1AbCdEfGhIjK\r\n2AbCdEfGhIjK\r\n"))

        code, data = run("import")

        assert code == 0
        assert data["inserted"] == 2

    def test_delete(self, run):
        run("add", "1AbCdEfGhIjK", "--title", "Sunset")

        code, data = run("delete", "sunset")
        assert code == 0
        assert data["deleted"] is True

        code, data = run("delete", "sunset")
        assert code == 1
        assert "not found" in data["error"]

    def test_get_missing(self, run):
        code, data = run("get", "missing")
        assert code == 1
        assert data["success"] is False

    def test_normalize(self, run):
        code, data = run("normalize", "https://drive.google.com/open?id=0B7_abcDEF12")

        assert code == 0
        assert data["url"] == "https://drive.google.com/uc?export=view&id=0B7_abcDEF12"
        assert data["file_id"] == "0B7_abcDEF12"

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_parser_commands(self):
        parser = build_parser()
        args = parser.parse_args(["add", "FILEID", "--title", "T"])
        assert (args.command, args.raw, args.title) == ("add", "FILEID", "T")
