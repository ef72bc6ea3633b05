"""
Tests for the application entry point.
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from todo_finder.config import RepoContext
from todo_finder.main import main
from todo_finder.walker import ScanError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestMain:
    """Tests for main()."""

    @patch("todo_finder.main.load_repo_context")
    def test_no_todos_prints_nothing(self, mock_context, temp_dir, monkeypatch, capsys):
        mock_context.return_value = None
        (temp_dir / "app.py").write_text("print('clean')\n")
        monkeypatch.chdir(temp_dir)

        assert main() == 0
        assert capsys.readouterr().out == ""

    @patch("todo_finder.main.load_repo_context")
    def test_report_with_links(self, mock_context, temp_dir, monkeypatch, capsys):
        mock_context.return_value = RepoContext("acme", "widgets", "main")
        (temp_dir / "src").mkdir()
        (temp_dir / "src" / "a.js").write_text("\n" * 9 + "// TODO (alice): ship it\n")
        monkeypatch.chdir(temp_dir)

        assert main() == 0
        out = capsys.readouterr().out
        assert "| @alice | _ship it_ | [Open](https://github.com/acme/widgets/blob/main/src/a.js#L10) |" in out

    @patch("todo_finder.main.load_repo_context")
    def test_report_without_context(self, mock_context, temp_dir, monkeypatch, capsys):
        mock_context.return_value = None
        (temp_dir / "a.py").write_text("x = 1  # Todo: later\n")
        monkeypatch.chdir(temp_dir)

        assert main() == 0
        assert "[Open](a.py:1:10)" in capsys.readouterr().out

    @patch("todo_finder.main.scan_root")
    @patch("todo_finder.main.load_repo_context")
    def test_unreadable_root_is_fatal(self, mock_context, mock_scan, capsys):
        mock_context.return_value = None
        mock_scan.side_effect = ScanError("unable to scan /gone: No such file or directory")

        assert main() == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: unable to scan /gone" in captured.err
