"""Single-writer lock for a repository."""

import os
import logging
from pathlib import Path
from typing import Optional
from .errors import RepositoryLocked, IoError

logger = logging.getLogger(__name__)


class RepositoryLock:
    """
    Exclusive lock file guarding repository writes.

    The lock file is created with O_CREAT | O_EXCL, so only one process can
    hold it. It records the holder's pid and is removed on release.

    Usage:
        with RepositoryLock(repo.lock_file):
            ...
    """

    def __init__(self, path, enabled: bool = True):
        """
        Args:
            path: Lock file path
            enabled: When False, acquiring and releasing do nothing
        """
        self.path = Path(path)
        self.enabled = enabled
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def holder_pid(self) -> Optional[int]:
        """Pid recorded in the lock file, or None if missing or unreadable."""
        try:
            return int(self.path.read_text().strip())
        except (OSError, ValueError):
            return None

    def is_stale(self) -> bool:
        """
        True when the lock file names a process that no longer exists.

        Only checked on POSIX; elsewhere an existing lock is never stale.
        """
        pid = self.holder_pid()
        if pid is None or pid <= 0 or os.name != 'posix':
            return False
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return True
        except PermissionError:
            return False
        return False

    def _create(self) -> int:
        return os.open(str(self.path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)

    def acquire(self) -> None:
        """
        Take the lock.

        A lock left behind by a process that has exited is removed first.

        Raises:
            RepositoryLocked: If another writer holds it
            IoError: If the lock file cannot be created
        """
        if not self.enabled or self._held:
            return

        try:
            try:
                fd = self._create()
            except FileExistsError:
                if not self.is_stale():
                    raise
                logger.warning("Removing stale lock %s (pid %s is gone)", self.path, self.holder_pid())
                self.path.unlink(missing_ok=True)
                fd = self._create()
        except FileExistsError:
            raise RepositoryLocked(
                f"Repository is locked by another process ({self.path}). "
                f"If no other pushup command is running, remove the lock file."
            )
        except OSError as e:
            raise IoError(f"Cannot create lock file {self.path}: {e}") from e

        with os.fdopen(fd, 'w') as f:
            f.write(str(os.getpid()))

        self._held = True
        logger.debug("Acquired lock %s", self.path)

    def release(self) -> None:
        """Drop the lock if held."""
        if not self._held:
            return

        self._held = False
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.warning("Lock file %s vanished before release", self.path)
        logger.debug("Released lock %s", self.path)

    def __enter__(self) -> 'RepositoryLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"RepositoryLock(path={self.path}, held={self._held})"
