"""Reference management for PushUP."""

import logging
from dataclasses import dataclass, replace
from typing import Optional, List
from .errors import NotFound, AlreadyExists, InvalidOperation, IoError
from .repository import DEFAULT_BRANCH
from pushup.utils.fs import write_atomic, read_text

logger = logging.getLogger(__name__)

PROTECTED_BRANCH = DEFAULT_BRANCH


@dataclass(frozen=True)
class RepositoryState:
    """
    Snapshot of the mutable pointers: active branch and HEAD.

    Operations never edit a state in place; they derive a new one and hand
    it to RefManager.store_state.
    """
    branch: str
    head: str = ''

    @property
    def has_commits(self) -> bool:
        return bool(self.head)

    def advance(self, digest: str) -> 'RepositoryState':
        """Move HEAD (and with it the active branch) to a commit."""
        return replace(self, head=digest)

    def switch(self, branch: str, head: str) -> 'RepositoryState':
        """Make another branch active, with HEAD at its tip."""
        return RepositoryState(branch=branch, head=head)


@dataclass(frozen=True)
class BranchInfo:
    """A branch, its tip and whether it is the active one."""
    name: str
    tip: str
    is_current: bool = False


def validate_branch_name(name: str) -> None:
    """
    Reject names that cannot be stored as a single ref file.

    Raises:
        InvalidOperation: If the name is not usable
    """
    if not name or not name.strip():
        raise InvalidOperation("Branch name cannot be empty")
    if name.startswith('.') or name.startswith('-'):
        raise InvalidOperation(f"Invalid branch name '{name}'")
    if any(c in name for c in '/\\') or any(c.isspace() for c in name):
        raise InvalidOperation(f"Invalid branch name '{name}'")
    if name.upper() == 'HEAD':
        raise InvalidOperation("'HEAD' is not a valid branch name")


class RefManager:
    """
    Manages references: branch tips, HEAD and the current-branch pointer.

    Handles:
    - Branch references (refs/heads/<name>, one file per branch)
    - HEAD (raw digest of the checked-out commit, or empty)
    - CURRENT_BRANCH (name of the active branch)
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file
        self.current_branch_file = repo.current_branch_file

    def _write(self, path, content: str) -> None:
        try:
            write_atomic(path, content)
        except OSError as e:
            raise IoError(f"Cannot write {path.name}: {e}") from e

    # HEAD

    def read_head(self) -> str:
        """
        Read HEAD.

        Returns:
            Digest of the checked-out commit, or '' if there is none
        """
        try:
            return read_text(self.head_file)
        except FileNotFoundError:
            return ''
        except OSError as e:
            raise IoError(f"Cannot read HEAD: {e}") from e

    def write_head(self, digest: str) -> None:
        """Point HEAD at a commit ('' clears it)."""
        self._write(self.head_file, digest)
        logger.debug("HEAD -> %s", digest or '(empty)')

    # Current branch

    def get_current_branch_name(self) -> str:
        """
        Get the name of the active branch.

        Falls back to the default branch when CURRENT_BRANCH is missing,
        unreadable or empty.
        """
        try:
            name = read_text(self.current_branch_file)
        except OSError as e:
            logger.debug("CURRENT_BRANCH unreadable (%s), using '%s'", e, DEFAULT_BRANCH)
            return DEFAULT_BRANCH
        return name or DEFAULT_BRANCH

    def set_current_branch_name(self, name: str) -> None:
        """Make a branch the active one."""
        self._write(self.current_branch_file, name)
        logger.debug("CURRENT_BRANCH -> %s", name)

    # Branches

    def branch_path(self, name: str):
        return self.heads_dir / name

    def branch_exists(self, name: str) -> bool:
        """Check if a branch exists."""
        if not name or any(c in name for c in '/\\') or name in ('.', '..'):
            return False
        return self.branch_path(name).is_file()

    def read_branch(self, name: str) -> str:
        """
        Read a branch tip.

        Args:
            name: Branch name

        Returns:
            Tip digest, or '' for a branch without commits

        Raises:
            NotFound: If the branch does not exist
        """
        if not self.branch_exists(name):
            raise NotFound(f"Branch '{name}' does not exist")
        try:
            return read_text(self.branch_path(name))
        except OSError as e:
            raise IoError(f"Cannot read branch '{name}': {e}") from e

    def set_branch_tip(self, name: str, digest: str) -> None:
        """
        Point a branch at a commit.

        Args:
            name: Branch name
            digest: Commit digest ('' for a branch without commits)

        Raises:
            NotFound: If a non-empty digest does not name a stored commit
        """
        if digest and not self.repo.is_commit(digest):
            raise NotFound(f"Commit {digest} not found")

        self._write(self.branch_path(name), digest)
        logger.debug("refs/heads/%s -> %s", name, digest or '(empty)')

    def create_branch(self, name: str) -> str:
        """
        Create a new branch at the current HEAD.

        Args:
            name: Branch name

        Returns:
            The tip the branch was created at ('' when there are no commits)

        Raises:
            AlreadyExists: If the branch already exists
            InvalidOperation: If the name is invalid
        """
        validate_branch_name(name)
        if self.branch_path(name).exists():
            raise AlreadyExists(f"Branch '{name}' already exists")

        head = self.read_head()
        self._write(self.branch_path(name), head)
        logger.debug("Created branch %s at %s", name, head or '(empty)')
        return head

    def list_branches(self) -> List[BranchInfo]:
        """
        List all branches.

        Returns:
            BranchInfo list sorted by name, with the active branch marked
        """
        if not self.heads_dir.exists():
            return []

        current = self.get_current_branch_name()
        branches = []
        for branch_file in self.heads_dir.iterdir():
            if branch_file.is_file() and not branch_file.name.startswith('.'):
                tip = read_text(branch_file)
                branches.append(BranchInfo(branch_file.name, tip, branch_file.name == current))

        return sorted(branches, key=lambda b: b.name)

    def delete_branch(self, name: str) -> None:
        """
        Delete a branch.

        Args:
            name: Branch name

        Raises:
            InvalidOperation: For the active branch or the protected branch
            NotFound: If the branch does not exist
        """
        if name == self.get_current_branch_name():
            raise InvalidOperation(f"Cannot delete the current branch '{name}'")

        if name == PROTECTED_BRANCH:
            raise InvalidOperation(f"Cannot delete the {PROTECTED_BRANCH} branch")

        if not self.branch_exists(name):
            raise NotFound(f"Branch '{name}' does not exist")

        try:
            self.branch_path(name).unlink()
        except OSError as e:
            raise IoError(f"Cannot delete branch '{name}': {e}") from e
        logger.debug("Deleted branch %s", name)

    # State

    def load_state(self) -> RepositoryState:
        """Read the active branch and HEAD into a RepositoryState."""
        return RepositoryState(branch=self.get_current_branch_name(), head=self.read_head())

    def store_state(self, state: RepositoryState, previous: Optional[RepositoryState] = None) -> None:
        """
        Persist a RepositoryState.

        Writes HEAD first, then the branch ref, then CURRENT_BRANCH if the
        active branch changed. A crash part way leaves HEAD ahead of the
        branch ref, never the other way round.

        Args:
            state: State to persist
            previous: State it was derived from, if known
        """
        self.write_head(state.head)

        if previous is None or previous.branch == state.branch:
            self.set_branch_tip(state.branch, state.head)

        if previous is None or previous.branch != state.branch:
            self.set_current_branch_name(state.branch)
