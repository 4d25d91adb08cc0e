"""Shared pytest fixtures for PushUP tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from pushup.core.config import Config
from pushup.core.repository import Repository
from pushup.operations.porcelain import Porcelain


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's global config and PUSHUP_* variables out of tests."""
    global_dir = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', global_dir / '.pushupconfig')
    for name in ('PUSHUP_CORE_LOCK', 'PUSHUP_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def ops(repo, monkeypatch):
    """Repository operations, with the work tree as current directory."""
    monkeypatch.chdir(repo.work_tree)
    return Porcelain(repo)


@pytest.fixture
def write_file(repo):
    """Return a helper that writes a file into the work tree and returns its path."""
    def write(name, content):
        path = repo.work_tree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return write


@pytest.fixture
def repo_with_commits(ops, write_file):
    """
    Repository with two commits on main.

    file1.txt is committed first, file2.txt second. The fixture returns
    the operations object; commit digests are kept on it for tests.
    """
    write_file('file1.txt', 'Hello, World!\n')
    ops.add('file1.txt')
    ops.first_commit = ops.commit('First commit').commit_hash

    write_file('file2.txt', 'Second file\n')
    ops.add('file2.txt')
    ops.second_commit = ops.commit('Second commit').commit_hash

    return ops
