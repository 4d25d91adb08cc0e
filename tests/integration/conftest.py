"""Fixtures for command-line tests."""

import pytest
from click.testing import CliRunner
from pushup.cli.main import cli


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def cli_repo(runner, temp_dir, monkeypatch):
    """A repository created with `pushup init`, used as current directory."""
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 0
    return temp_dir


@pytest.fixture
def run(runner, cli_repo):
    """Invoke pushup with arguments inside the test repository."""
    def invoke(*args):
        return runner.invoke(cli, list(args))
    return invoke
