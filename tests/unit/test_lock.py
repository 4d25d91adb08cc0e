"""Repository lock tests."""

import os
import pytest
from pushup.core.errors import RepositoryLocked, InvalidOperation
from pushup.core.lock import RepositoryLock


def test_lock_acquire_release(tmp_path):
    path = tmp_path / 'pushup.lock'
    lock = RepositoryLock(path)

    lock.acquire()
    assert lock.held
    assert path.read_text() == str(os.getpid())

    lock.release()
    assert not lock.held
    assert not path.exists()


def test_lock_context_manager(tmp_path):
    path = tmp_path / 'pushup.lock'
    with RepositoryLock(path) as lock:
        assert lock.held
        assert path.exists()
    assert not path.exists()


def test_lock_released_on_error(tmp_path):
    path = tmp_path / 'pushup.lock'
    with pytest.raises(RuntimeError):
        with RepositoryLock(path):
            raise RuntimeError('boom')
    assert not path.exists()


def test_second_writer_is_refused(tmp_path):
    path = tmp_path / 'pushup.lock'
    with RepositoryLock(path):
        with pytest.raises(RepositoryLocked):
            RepositoryLock(path).acquire()


def test_repository_locked_is_invalid_operation():
    assert issubclass(RepositoryLocked, InvalidOperation)


def test_disabled_lock_creates_nothing(tmp_path):
    path = tmp_path / 'pushup.lock'
    path.write_text('stale')
    with RepositoryLock(path, enabled=False) as lock:
        assert not lock.held
    assert path.read_text() == 'stale'


def test_operation_refused_while_locked(repo_with_commits, write_file):
    ops = repo_with_commits
    ops.repo.lock_file.write_text(str(os.getpid()))
    write_file('new.txt', 'new\n')

    with pytest.raises(RepositoryLocked):
        ops.add('new.txt')
    assert ops.repo.lock_file.read_text() == str(os.getpid())
    assert ops.status().clean


def test_lock_disabled_by_config(repo_with_commits, write_file, monkeypatch):
    ops = repo_with_commits
    ops.repo.lock_file.write_text(str(os.getpid()))
    monkeypatch.setenv('PUSHUP_CORE_LOCK', 'false')
    write_file('new.txt', 'new\n')

    ops.add('new.txt')
    assert len(ops.status().staged) == 1


def dead_pid():
    """A pid that no running process has."""
    pid = 2 ** 22 + 1
    while True:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return pid
        except PermissionError:
            pass
        pid += 1


@pytest.mark.skipif(os.name != 'posix', reason='stale lock detection needs POSIX process checks')
def test_stale_lock_is_broken(tmp_path):
    path = tmp_path / 'pushup.lock'
    path.write_text(str(dead_pid()))

    lock = RepositoryLock(path)
    assert lock.is_stale()
    with lock:
        assert path.read_text() == str(os.getpid())
    assert not path.exists()


@pytest.mark.skipif(os.name != 'posix', reason='stale lock detection needs POSIX process checks')
def test_add_after_crashed_writer(repo_with_commits, write_file):
    ops = repo_with_commits
    ops.repo.lock_file.write_text(str(dead_pid()))
    write_file('new.txt', 'new\n')

    assert ops.add('new.txt').path == 'new.txt'
    assert not ops.repo.lock_file.exists()


def test_unreadable_pid_is_not_stale(tmp_path):
    path = tmp_path / 'pushup.lock'
    path.write_text('not a pid')

    assert RepositoryLock(path).holder_pid() is None
    assert not RepositoryLock(path).is_stale()
    with pytest.raises(RepositoryLocked):
        RepositoryLock(path).acquire()
