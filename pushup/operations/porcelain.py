"""User-facing repository operations.

Each operation composes the object store, commit graph, index and refs.
Mutating operations run under the repository lock and persist state in a
fixed order: objects, commit, HEAD, branch ref, index.
"""

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path
from typing import Optional, List
from pushup.core.errors import NotFound, InvalidOperation, IoError, EmptyOperation
from pushup.core.index import Index
from pushup.core.lock import RepositoryLock
from pushup.core.objects import Commit, StagedEntry
from pushup.core.refs import BranchInfo
from pushup.core.repository import Repository, REPO_DIR_NAME
from pushup.operations.diff import FileDiff
from pushup.operations.merge import MergeResult

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    commit_hash: str
    branch: str
    parent: Optional[str]
    files: List[StagedEntry]
    message: str


@dataclass
class LogResult:
    branch: str
    head: str
    commits: List[Commit] = field(default_factory=list)


@dataclass
class ShowResult:
    commit_hash: str
    commit: Commit
    files: List[FileDiff]


@dataclass
class StatusEntry:
    path: str
    digest: str
    label: str


@dataclass
class StatusResult:
    branch: str
    head: str
    staged: List[StatusEntry]

    @property
    def clean(self) -> bool:
        return not self.staged


@dataclass
class CheckoutResult:
    branch: str
    head: str


@dataclass
class ResetResult:
    commit_hash: str
    branch: str
    previous_head: str
    discarded: int


class Porcelain:
    """
    Repository operations behind the pushup commands.

    Usage:
        ops = Porcelain.open()
        ops.add('notes.txt')
        ops.commit('Add notes')
    """

    def __init__(self, repo: Repository):
        """
        Args:
            repo: Repository instance
        """
        self.repo = repo

    @classmethod
    def init(cls, path: str = '.') -> 'Porcelain':
        """
        Create a repository and return operations on it.

        Raises:
            AlreadyExists: If a repository already exists at path
        """
        return cls(Repository(path).init())

    @classmethod
    def open(cls, path: str = '.') -> 'Porcelain':
        """
        Open the repository containing path.

        Raises:
            NotFound: If path is not inside a repository
        """
        repo = Repository.find_repository(path)
        if repo is None:
            raise NotFound("Not a pushup repository (or any of the parent directories)")
        return cls(repo)

    @contextmanager
    def _locked(self):
        with RepositoryLock(self.repo.lock_file, enabled=self.repo.config.lock_enabled):
            yield

    def _load_index(self) -> Index:
        return Index.load(self.repo.index_file)

    def _relative_path(self, path: str) -> Path:
        """Resolve a user path to an absolute file path inside the work tree."""
        file_path = Path(os.path.abspath(path))

        try:
            rel_path = file_path.relative_to(self.repo.work_tree)
        except ValueError:
            raise InvalidOperation(f"'{path}' is outside the repository")

        if rel_path.parts and rel_path.parts[0] == REPO_DIR_NAME:
            raise InvalidOperation(f"'{path}' is inside the {REPO_DIR_NAME} directory")

        return file_path

    # Recording

    def add(self, path: str) -> StagedEntry:
        """
        Stage a working file.

        The file content goes to the object store and the index records the
        path (relative to the work tree) with its digest.

        Args:
            path: File path (absolute or relative to the current directory)

        Returns:
            StagedEntry: The staged entry

        Raises:
            IoError: If the file cannot be read (nothing is staged)
            InvalidOperation: If the path is outside the work tree
        """
        file_path = self._relative_path(path)

        if not file_path.is_file():
            raise IoError(f"File not found: {path}")

        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise IoError(f"Cannot read {path}: {e}") from e

        rel_path = file_path.relative_to(self.repo.work_tree).as_posix()

        with self._locked():
            digest = self.repo.put(content)
            index = self._load_index()
            entry = index.stage(rel_path, digest)
            index.save(self.repo.index_file)

        logger.debug("Staged %s as %s", rel_path, digest)
        return entry

    def commit(self, message: str) -> CommitResult:
        """
        Record the staged files as a new commit on the active branch.

        Args:
            message: Commit message

        Returns:
            CommitResult

        Raises:
            EmptyOperation: If nothing is staged (nothing is written)
            InvalidOperation: If the message is empty
        """
        with self._locked():
            index = self._load_index()
            if index.is_empty():
                raise EmptyOperation("No changes to commit. Staging area is empty.")

            if not message or not message.strip():
                raise InvalidOperation("Commit message cannot be empty")

            state = self.repo.refs.load_state()
            files = index.entries()
            commit_hash = self.repo.create_commit(message, files, parent=state.head or None)

            self.repo.refs.store_state(state.advance(commit_hash), state)

            index.clear()
            index.save(self.repo.index_file)

        return CommitResult(commit_hash=commit_hash, branch=state.branch,
                            parent=state.head or None, files=files, message=message)

    # Reading

    def log(self, max_count: Optional[int] = None) -> LogResult:
        """
        First-parent history of HEAD, newest first.

        An empty result (no commits) is not an error.

        Args:
            max_count: Limit the number of commits
        """
        state = self.repo.refs.load_state()
        history = self.repo.walk_history(state.head)
        if max_count is not None:
            history = islice(history, max_count)
        return LogResult(branch=state.branch, head=state.head, commits=list(history))

    def show(self, ref: str = 'HEAD') -> ShowResult:
        """
        A commit and the per-file changes it introduced.

        Args:
            ref: Commit digest, unique prefix, branch name or HEAD

        Raises:
            NotFound: If the commit does not exist
        """
        commit_hash = self.repo.resolve_commit(ref)
        commit = self.repo.get_commit(commit_hash)
        return ShowResult(commit_hash=commit_hash, commit=commit,
                          files=self.repo.diff.diff_commit(commit))

    def status(self) -> StatusResult:
        """Active branch and staged entries, labelled against HEAD."""
        state = self.repo.refs.load_state()
        index = self._load_index()
        head_commit = self.repo.get_commit(state.head) if state.head else None

        staged = []
        for entry in index.entries():
            committed = head_commit.file_digest(entry.path) if head_commit else None
            if committed is None:
                label = 'new file'
            elif committed == entry.digest:
                label = 'unchanged'
            else:
                label = 'modified'
            staged.append(StatusEntry(entry.path, entry.digest, label))

        return StatusResult(branch=state.branch, head=state.head, staged=staged)

    def diff(self) -> List[FileDiff]:
        """Staged content against the HEAD version of each staged path."""
        index = self._load_index()
        if index.is_empty():
            return []
        return self.repo.diff.diff_index_to_head(index, self.repo.refs.read_head())

    # Branches

    def branches(self) -> List[BranchInfo]:
        """All branches, with the active one marked."""
        return self.repo.refs.list_branches()

    def branch(self, name: Optional[str] = None):
        """
        List branches, or create one at HEAD.

        Args:
            name: Branch to create; None lists branches

        Returns:
            List of BranchInfo when listing, the new branch tip when creating

        Raises:
            AlreadyExists: If the branch already exists
        """
        if name is None:
            return self.branches()

        with self._locked():
            return self.repo.refs.create_branch(name)

    def checkout(self, name: str) -> CheckoutResult:
        """
        Switch the active branch.

        Raises:
            NotFound: If the branch does not exist
            InvalidOperation: If anything is staged
        """
        with self._locked():
            if not self.repo.refs.branch_exists(name):
                raise NotFound(f"Branch '{name}' does not exist")

            if not self._load_index().is_empty():
                raise InvalidOperation("Cannot switch branches with uncommitted changes")

            state = self.repo.refs.load_state()
            new_state = state.switch(name, self.repo.refs.read_branch(name))
            self.repo.refs.store_state(new_state, state)

        return CheckoutResult(branch=new_state.branch, head=new_state.head)

    def merge(self, name: str) -> MergeResult:
        """
        Merge a branch into the active branch (fast-forward-by-replacement).

        Raises:
            InvalidOperation: On self-merge or if the branch has no commits
            NotFound: If the branch does not exist
        """
        with self._locked():
            state = self.repo.refs.load_state()
            result = self.repo.merge.merge(state, name)
            if not result.up_to_date:
                self.repo.refs.store_state(result.state, state)
        return result

    def delete_branch(self, name: str) -> None:
        """
        Delete a branch.

        Raises:
            InvalidOperation: For the active branch or main
            NotFound: If the branch does not exist
        """
        with self._locked():
            self.repo.refs.delete_branch(name)

    def reset(self, ref: str) -> ResetResult:
        """
        Move HEAD and the active branch to a commit and empty the index.

        Staged changes are always discarded.

        Raises:
            NotFound: If the commit does not exist
        """
        with self._locked():
            commit_hash = self.repo.resolve_commit(ref)
            index = self._load_index()
            discarded = len(index)

            state = self.repo.refs.load_state()
            self.repo.refs.store_state(state.advance(commit_hash), state)

            index.clear()
            index.save(self.repo.index_file)

        return ResetResult(commit_hash=commit_hash, branch=state.branch,
                           previous_head=state.head, discarded=discarded)
