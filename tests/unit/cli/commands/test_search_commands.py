"""Unit tests for the search and replace CLI commands."""

import json
import sys

import pytest

from wherewolf.cli.builder import EXIT_DEPENDENCY_ERROR, EXIT_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from wherewolf.cli.commands.search import EXIT_NO_MATCHES, handle_replace_command, handle_search_command

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake rg scripts rely on a shebang line")


def _never_called(prompt):
    raise AssertionError(f"unexpected prompt: {prompt}")


@pytest.mark.unit
@pytest.mark.cli
class TestSearchCommand:
    """Test handle_search_command()."""

    def test_lists_matches_grouped_by_file(self, project_dir, grep_config_file, capsys):
        result = handle_search_command(["TODO", str(project_dir), "--config", str(grep_config_file)])

        out = capsys.readouterr().out
        assert result == EXIT_SUCCESS
        assert "Found 3 matches in 2 files" in out
        assert f"▼ {project_dir / 'src' / 'app.py'} (2)" in out
        assert "       1:   # TODO: fix" in out

    def test_no_matches(self, project_dir, grep_config_file, capsys):
        result = handle_search_command(["NOTHING_HERE", str(project_dir), "--config", str(grep_config_file)])

        assert result == EXIT_NO_MATCHES
        assert "No matches found." in capsys.readouterr().out

    def test_replacement_preview(self, project_dir, grep_config_file, capsys):
        result = handle_search_command(
            ["TODO", str(project_dir), "-r", "DONE", "-g", "*.py", "--config", str(grep_config_file)]
        )

        out = capsys.readouterr().out
        assert result == EXIT_SUCCESS
        assert "       1: - # TODO: fix" in out
        assert "       1: + # DONE: fix" in out
        assert "util.lua" not in out

    def test_regex_preview_with_invalid_template(self, project_dir, grep_config_file, capsys):
        result = handle_search_command(
            ["TODO", str(project_dir), "-r", r"\1", "--regex", "--config", str(grep_config_file)]
        )

        captured = capsys.readouterr()
        assert result == EXIT_VALIDATION_ERROR
        assert "Invalid replacement template" in captured.err
        assert "Found" not in captured.out

    def test_exclude_glob(self, project_dir, grep_config_file, capsys):
        handle_search_command(["TODO", str(project_dir), "-x", "*.py", "--config", str(grep_config_file)])

        out = capsys.readouterr().out
        assert "Found 1 matches in 1 files" in out
        assert "app.py" not in out

    def test_denylisted_flag(self, project_dir, grep_config_file, capsys):
        result = handle_search_command(
            ["TODO", str(project_dir), "--rg-flag=--json", "--config", str(grep_config_file)]
        )

        assert result == EXIT_VALIDATION_ERROR
        assert "Blacklisted ripgrep flag: --json" in capsys.readouterr().err

    def test_invalid_max_results(self, project_dir, grep_config_file, capsys):
        result = handle_search_command(["TODO", str(project_dir), "-m", "0", "--config", str(grep_config_file)])

        assert result == EXIT_VALIDATION_ERROR
        assert "max_results must be positive" in capsys.readouterr().err

    def test_missing_ripgrep(self, project_dir, tmp_path, capsys):
        config_file = tmp_path / "missing.json"
        config_file.write_text(json.dumps({"executable": str(tmp_path / "no-such-rg")}))

        result = handle_search_command(["TODO", str(project_dir), "--config", str(config_file)])

        assert result == EXIT_DEPENDENCY_ERROR
        assert "ripgrep not found" in capsys.readouterr().err

    def test_ripgrep_failure(self, project_dir, tmp_path, fake_rg, capsys):
        config_file = tmp_path / "failing.json"
        rg = fake_rg(stderr="regex parse error: unclosed group\n", exit_code=2)
        config_file.write_text(json.dumps({"executable": str(rg)}))

        result = handle_search_command(["(", str(project_dir), "--config", str(config_file)])

        assert result == EXIT_ERROR
        assert "ripgrep error: regex parse error: unclosed group" in capsys.readouterr().err

    def test_invalid_config_file(self, project_dir, tmp_path, capsys):
        config_file = tmp_path / "bad.json"
        config_file.write_text('{"debounce_ms": -1}')

        result = handle_search_command(["TODO", str(project_dir), "--config", str(config_file)])

        assert result == EXIT_VALIDATION_ERROR
        assert "Invalid configuration" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestReplaceCommand:
    """Test handle_replace_command()."""

    def test_confirmed_replacement(self, project_dir, grep_config_file, capsys):
        prompts = []

        def answer(prompt):
            prompts.append(prompt)
            return "y"

        result = handle_replace_command(
            ["TODO", "DONE", str(project_dir), "--config", str(grep_config_file)], input_func=answer
        )

        assert result == EXIT_SUCCESS
        assert prompts == ["Apply 3 replacements in 2 files? (y/n): "]
        assert "Applied 3 replacements" in capsys.readouterr().out
        assert (project_dir / "src" / "app.py").read_text() == "# DONE: fix\nprint('ok')\n# DONE: test\n"
        assert (project_dir / "src" / "util.lua").read_text() == "-- DONE later\nreturn {}\n"

    def test_declined_replacement(self, project_dir, grep_config_file, capsys):
        result = handle_replace_command(
            ["TODO", "DONE", str(project_dir), "--config", str(grep_config_file)], input_func=lambda prompt: "n"
        )

        assert result == EXIT_SUCCESS
        assert "Replacement cancelled" in capsys.readouterr().out
        assert "TODO" in (project_dir / "src" / "app.py").read_text()

    def test_end_of_input_declines(self, project_dir, grep_config_file, capsys):
        def eof(prompt):
            raise EOFError

        result = handle_replace_command(
            ["TODO", "DONE", str(project_dir), "--config", str(grep_config_file)], input_func=eof
        )

        assert result == EXIT_SUCCESS
        assert "TODO" in (project_dir / "src" / "app.py").read_text()

    def test_yes_skips_prompt(self, project_dir, grep_config_file):
        result = handle_replace_command(
            ["TODO", "DONE", str(project_dir), "--yes", "--config", str(grep_config_file)],
            input_func=_never_called,
        )

        assert result == EXIT_SUCCESS
        assert "TODO" not in (project_dir / "src" / "app.py").read_text()

    def test_dry_run_does_not_write(self, project_dir, grep_config_file, capsys):
        result = handle_replace_command(
            ["TODO", "DONE", str(project_dir), "--dry-run", "--config", str(grep_config_file)],
            input_func=_never_called,
        )

        out = capsys.readouterr().out
        assert result == EXIT_SUCCESS
        assert "+ # DONE: fix" in out
        assert "TODO" in (project_dir / "src" / "app.py").read_text()

    def test_regex_replacement(self, project_dir, grep_config_file):
        result = handle_replace_command(
            [r"TODO: (\w+)", r"DONE(\1)", str(project_dir), "--regex", "--yes", "--config", str(grep_config_file)]
        )

        assert result == EXIT_SUCCESS
        assert (project_dir / "src" / "app.py").read_text() == "# DONE(fix)\nprint('ok')\n# DONE(test)\n"
        assert (project_dir / "src" / "util.lua").read_text() == "-- TODO later\nreturn {}\n"

    def test_literal_pattern_is_not_a_regex(self, tmp_path, grep_config_file):
        target = tmp_path / "calls.py"
        target.write_text("f(x)\nf(y)\n", encoding="utf-8")

        result = handle_replace_command(
            ["f(x)", "g(x)", str(tmp_path / "calls.py"), "--yes", "--config", str(grep_config_file)]
        )

        assert result == EXIT_SUCCESS
        assert target.read_text() == "g(x)\nf(y)\n"

    def test_invalid_regex(self, project_dir, grep_config_file, capsys):
        result = handle_replace_command(
            ["foo(", "bar", str(project_dir), "--regex", "--yes", "--config", str(grep_config_file)]
        )

        assert result == EXIT_VALIDATION_ERROR
        assert "Invalid regular expression" in capsys.readouterr().err

    def test_invalid_template(self, project_dir, grep_config_file, capsys):
        result = handle_replace_command(
            ["TODO", r"\1", str(project_dir), "--regex", "--yes", "--config", str(grep_config_file)]
        )

        assert result == EXIT_VALIDATION_ERROR
        assert "Invalid replacement template" in capsys.readouterr().err
        assert (project_dir / "src" / "app.py").read_text() == "# TODO: fix\nprint('ok')\n# TODO: test\n"

    def test_lowercase_pattern_only_matches_exact_case(self, tmp_path, grep_config_file, capsys):
        target = tmp_path / "notes.txt"
        target.write_text("todo: a\nTODO: b\nTodo: c\n", encoding="utf-8")

        result = handle_replace_command(
            ["todo", "done", str(target), "--config", str(grep_config_file)],
            input_func=lambda prompt: "y",
        )

        out = capsys.readouterr().out
        assert result == EXIT_SUCCESS
        assert "Found 1 matches in 1 files" in out
        assert "Applied 1 replacements" in out
        assert target.read_text(encoding="utf-8") == "done: a\nTODO: b\nTodo: c\n"

    def test_no_matches(self, project_dir, grep_config_file, capsys):
        result = handle_replace_command(
            ["NOTHING_HERE", "x", str(project_dir), "--yes", "--config", str(grep_config_file)]
        )

        assert result == EXIT_NO_MATCHES
        assert "No results to replace" in capsys.readouterr().err

    def test_empty_replacement_rejected(self, project_dir, grep_config_file, capsys):
        result = handle_replace_command(["TODO", "", str(project_dir), "--config", str(grep_config_file)])

        assert result == EXIT_VALIDATION_ERROR
        assert "Error: No replacement text specified" in capsys.readouterr().err
