"""
Interactive selection tests

Run:
    pytest tests/test_selection.py -v
"""

import io
from pathlib import Path

import pytest

from image_downloader.selection import select_url_files


FILES = [Path("albums/a.txt"), Path("albums/b.txt"), Path("albums/c.txt")]


def answers(*lines):
    """input_func returning ``lines`` in order, then None (EOF)."""
    it = iter(lines)
    return lambda: next(it, None)


class TestSelectUrlFiles:
    """select_url_files"""

    def test_skip_on_first_includes_all_three(self):
        out = io.StringIO()

        selected = select_url_files(FILES, answers("s"), out)

        assert selected == FILES
        assert out.getvalue().count("Remove file") == 1

    def test_yes_removes_file(self):
        selected = select_url_files(FILES, answers("y", "n", "y"), io.StringIO())

        assert selected == [Path("albums/b.txt")]

    def test_anything_else_keeps_file(self):
        selected = select_url_files(FILES, answers("n", "", "whatever"), io.StringIO())

        assert selected == FILES

    @pytest.mark.parametrize("answer", ["Y", "yes", "YES please"])
    def test_prefix_match_is_case_insensitive(self, answer):
        selected = select_url_files(FILES[:1], answers(answer), io.StringIO())

        assert selected == []

    def test_skip_after_removals(self):
        out = io.StringIO()

        selected = select_url_files(FILES, answers("y", "Skip"), out)

        assert selected == [Path("albums/b.txt"), Path("albums/c.txt")]
        assert out.getvalue().count("Remove file") == 2

    def test_prompt_names_the_file(self):
        out = io.StringIO()

        select_url_files(FILES[:1], answers("n"), out)

        assert out.getvalue() == "Remove file a.txt?: [y,n,s]"

    def test_eof_is_fatal(self):
        with pytest.raises(EOFError):
            select_url_files(FILES, answers("n"), io.StringIO())

    def test_eof_error_from_input_propagates(self):
        def closed_input():
            raise EOFError

        with pytest.raises(EOFError):
            select_url_files(FILES, closed_input, io.StringIO())

    def test_no_files_no_prompt(self):
        out = io.StringIO()

        assert select_url_files([], answers(), out) == []
        assert out.getvalue() == ""

    def test_reads_stdin_by_default(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("y\nn\n"))

        selected = select_url_files(FILES[:2])

        assert selected == [Path("albums/b.txt")]
        assert "Remove file a.txt?" in capsys.readouterr().out
