"""Pytest configuration and shared fixtures."""

import stat
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from jqlive.cli import cli

FAKE_JQ = Path(__file__).parent / "fake_jq.py"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point JQLIVE_HOME at a fresh directory for every test.

    Keeps tests away from ~/.local/jqlive and from any .jqlive directory
    above the working tree.
    """
    home = tmp_path / "jqlive_home"
    home.mkdir()
    monkeypatch.setenv("JQLIVE_HOME", str(home))
    monkeypatch.delenv("JQLIVE_JQ", raising=False)
    return home


@pytest.fixture
def fake_jq_command():
    """argv prefix that runs the fake jq with the current interpreter."""
    return [sys.executable, str(FAKE_JQ)]


@pytest.fixture
def fake_jq_binary(tmp_path):
    """A single executable file wrapping the fake jq, usable as jqPath."""
    wrapper = tmp_path / "bin" / "jq"
    wrapper.parent.mkdir()
    wrapper.write_text(
        f"#!{sys.executable}\n"
        "import runpy, sys\n"
        f"sys.argv[0] = {str(FAKE_JQ)!r}\n"
        f"runpy.run_path({str(FAKE_JQ)!r}, run_name='__main__')\n",
        encoding="utf-8",
    )
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture
def fake_jq_env(fake_jq_binary, monkeypatch):
    """Make the fake jq the one jqlive resolves through $JQLIVE_JQ."""
    monkeypatch.setenv("JQLIVE_JQ", str(fake_jq_binary))
    return fake_jq_binary


@pytest.fixture
def jq_delay(monkeypatch):
    """Set FAKE_JQ_DELAY (seconds) for subprocesses started afterwards."""

    def _set(seconds: float) -> None:
        monkeypatch.setenv("FAKE_JQ_DELAY", str(seconds))

    return _set


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["run", ".a", "data.json"])
        result = invoke(["run", ".a"], input_data='{"a": 1}')
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke
