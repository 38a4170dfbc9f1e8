"""Unit tests for vimgrep output parsing."""

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from wherewolf.search.parser import parse_line, parse_output
from wherewolf.search.types import SearchMatch


@pytest.mark.unit
class TestParseLine:
    """Test parse_line() on individual output lines."""

    def test_simple_line(self):
        assert parse_line("src/app.py:12:5:print('hi')") == SearchMatch("src/app.py", 12, 5, "print('hi')")

    def test_text_containing_colons(self):
        match = parse_line("a/b.txt:12:5:hello:world")

        assert match == SearchMatch("a/b.txt", 12, 5, "hello:world")

    def test_windows_drive_path(self):
        match = parse_line("C:\\src\\x.py:3:1:foo")

        assert match is not None
        assert match.file_path == "C:\\src\\x.py"
        assert match.line_number == 3
        assert match.column == 1
        assert match.line_text == "foo"

    def test_path_containing_colon_and_text_with_numbers(self):
        match = parse_line("dir:name/file.txt:7:2:value 10:20")

        assert match == SearchMatch("dir:name/file.txt", 7, 2, "value 10:20")

    def test_numeric_path_segment_taken_as_position(self):
        """The first adjacent pair of positive integers wins, even inside a path."""
        match = parse_line("bk:1:2:x.py:9:3:t")

        assert match == SearchMatch("bk", 1, 2, "x.py:9:3:t")

    def test_empty_text(self):
        assert parse_line("file.txt:1:1:") == SearchMatch("file.txt", 1, 1, "")

    def test_trailing_carriage_return_stripped(self):
        assert parse_line("file.txt:4:9:text\r") == SearchMatch("file.txt", 4, 9, "text")

    def test_preserves_whitespace_in_text(self):
        assert parse_line("f.py:1:5:    indented  ").line_text == "    indented  "

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "onlytwo:colons",
            "three:parts:here",
            "file.txt:abc:1:text",
            "file.txt:0:1:text",
            "file.txt:1:0:text",
            ":1:1",
            "\r",
        ],
    )
    def test_malformed_lines_return_none(self, line):
        assert parse_line(line) is None

    def test_missing_path_returns_none(self):
        """The numeric pair must follow at least one path token."""
        assert parse_line("12:5:text") is None

    def test_non_ascii_digits_not_treated_as_numbers(self):
        assert parse_line("file.txt:\u0663:1:text") is None


@pytest.mark.unit
class TestParseLineProperties:
    """Property-based tests for parse_line()."""

    @given(
        path=st.text(alphabet=st.characters(blacklist_characters=":\r\n"), min_size=1, max_size=30),
        line_number=st.integers(min_value=1, max_value=10**6),
        column=st.integers(min_value=1, max_value=10**4),
        text=st.text(alphabet=st.characters(blacklist_characters="\r\n"), max_size=60),
    )
    def test_well_formed_lines_parse(self, path, line_number, column, text):
        """A path without colons always round-trips through the vimgrep format."""
        match = parse_line(f"{path}:{line_number}:{column}:{text}")

        assert match == SearchMatch(path, line_number, column, text)

    @given(st.text(max_size=80))
    def test_never_raises(self, line):
        result = parse_line(line)
        assert result is None or (result.line_number > 0 and result.column > 0)

    @given(st.text(alphabet=st.characters(blacklist_characters=":"), max_size=40))
    def test_lines_without_colons_rejected(self, line):
        assume(":" not in line)
        assert parse_line(line) is None


@pytest.mark.unit
class TestParseOutput:
    """Test parse_output() on blocks of output."""

    def test_skips_blank_and_malformed_lines(self):
        output = "a.txt:1:1:first\n\nnot a match\nb.txt:2:3:second\n"

        assert parse_output(output) == [
            SearchMatch("a.txt", 1, 1, "first"),
            SearchMatch("b.txt", 2, 3, "second"),
        ]

    def test_crlf_output(self):
        output = "a.txt:1:1:first\r\nb.txt:2:3:second\r\n"

        assert [m.line_text for m in parse_output(output)] == ["first", "second"]

    def test_empty_output(self):
        assert parse_output("") == []

    def test_form_feed_kept_in_text(self):
        output = "a.txt:1:1:page\x0cbreak\nb.txt:2:1:x\u2028y\n"

        assert [m.line_text for m in parse_output(output)] == ["page\x0cbreak", "x\u2028y"]
