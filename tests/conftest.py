"""Pytest configuration and shared fixtures for the wherewolf test suite.

Most orchestrator and CLI tests run against a fake ``rg`` executable: a small
Python script written into the test's temporary directory. The ``fake_rg``
factory produces canned output, and ``grep_rg`` performs a real (if minimal)
directory search so that search and replace can be exercised end to end.
"""

import json
import logging
import os
import stat
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

from wherewolf.options.config import WherewolfConfig

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


FAKE_RG_SCRIPT = """#!{python}
import json
import sys
import time

with open({argv_file!r}, "w", encoding="utf-8") as f:
    json.dump(sys.argv[1:], f)

sys.stdout.write({stdout!r})
sys.stdout.flush()
sys.stderr.write({stderr!r})
sys.stderr.flush()
time.sleep({sleep!r})
sys.exit({exit_code!r})
"""

GREP_RG_SCRIPT = """#!{python}
import fnmatch
import os
import re
import sys

args = sys.argv[1:]
separator = args.index("--")
flags, rest = args[:separator], args[separator + 1:]
pattern = rest[0]
root = rest[1] if len(rest) > 1 else "."

includes = [f[len("--glob="):] for f in flags if f.startswith("--glob=") and not f.startswith("--glob=!")]
excludes = [f[len("--glob=!"):] for f in flags if f.startswith("--glob=!")]

source = re.escape(pattern) if "--fixed-strings" in flags else pattern
ignore_case = "--case-sensitive" not in flags and pattern == pattern.lower()
regex = re.compile(source, re.IGNORECASE if ignore_case else 0)


def wanted(name):
    if includes and not any(fnmatch.fnmatch(name, g) for g in includes):
        return False
    return not any(fnmatch.fnmatch(name, g) for g in excludes)


if os.path.isfile(root):
    candidates = [root]
else:
    candidates = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if wanted(name):
                path = os.path.join(dirpath, name)
                candidates.append(os.path.relpath(path) if root == "." else path)

found = False
for path in candidates:
    with open(path, encoding="utf-8", newline="") as f:
        for number, line in enumerate(f.read().splitlines(), start=1):
            for match in regex.finditer(line):
                found = True
                sys.stdout.write("%s:%d:%d:%s\\n" % (path, number, match.start() + 1, line))

sys.exit(0 if found else 1)
"""


def _write_script(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo handler changes made by ``configure_logging`` during CLI tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path) -> None:
    """Keep config discovery away from the developer's real files."""
    monkeypatch.delenv("WHEREWOLF_CONFIG", raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)


@pytest.fixture
def fake_rg(tmp_path) -> Callable[..., Path]:
    """Return a factory writing a fake ripgrep that prints canned output.

    The arguments the fake was called with are written to ``<script>.argv``
    as a JSON list.
    """
    counter = {"n": 0}

    def factory(stdout: str = "", stderr: str = "", exit_code: int = 0, sleep: float = 0.0) -> Path:
        counter["n"] += 1
        script = tmp_path / f"fake_rg_{counter['n']}"
        content = FAKE_RG_SCRIPT.format(
            python=sys.executable,
            argv_file=str(script) + ".argv",
            stdout=stdout,
            stderr=stderr,
            sleep=sleep,
            exit_code=exit_code,
        )
        return _write_script(script, content)

    return factory


@pytest.fixture
def grep_rg(tmp_path) -> Path:
    """Write a fake ripgrep that really searches files."""
    return _write_script(tmp_path / "grep_rg", GREP_RG_SCRIPT.format(python=sys.executable))


@pytest.fixture
def grep_config(grep_rg) -> WherewolfConfig:
    """Provide a configuration that runs the searching fake ripgrep."""
    return WherewolfConfig(executable=str(grep_rg))


@pytest.fixture
def grep_config_file(tmp_path, grep_rg) -> Path:
    """Write a JSON config file pointing ``executable`` at the searching fake."""
    config_file = tmp_path / "wherewolf.json"
    config_file.write_text(json.dumps({"executable": str(grep_rg)}), encoding="utf-8")
    return config_file


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Create a small project tree with TODO markers."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "app.py").write_text("# TODO: fix\nprint('ok')\n# TODO: test\n", encoding="utf-8")
    (root / "src" / "util.lua").write_text("-- TODO later\nreturn {}\n", encoding="utf-8")
    (root / "README.md").write_text("Nothing to see here\n", encoding="utf-8")
    return root
