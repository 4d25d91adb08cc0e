"""Merge operations for PushUP."""

import logging
from dataclasses import dataclass, field
from typing import Optional, List
from pushup.core.errors import InvalidOperation
from pushup.core.objects import StagedEntry
from pushup.core.refs import RepositoryState

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Result of a merge operation."""
    branch: str
    into: str
    target_tip: str
    up_to_date: bool = False
    commit_hash: Optional[str] = None
    files: List[StagedEntry] = field(default_factory=list)
    state: Optional[RepositoryState] = None
    message: str = ""

    def __repr__(self) -> str:
        """String representation."""
        if self.up_to_date:
            return f"MergeResult(up-to-date, branch={self.branch})"
        return f"MergeResult(commit={self.commit_hash[:7]}, files={len(self.files)})"


class MergeEngine:
    """
    Handles merge operations for PushUP.

    Merging uses fast-forward-by-replacement: the merge commit takes the
    incoming branch tip's file list as-is. Files that exist only on the
    current branch are dropped, and there is no per-file conflict
    detection. The merge commit records the current HEAD as parent and the
    incoming tip as merge parent.
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    @staticmethod
    def merge_message(branch: str, into: str) -> str:
        return f"Merge branch '{branch}' into {into}"

    def merge(self, state: RepositoryState, branch: str) -> MergeResult:
        """
        Merge a branch into the active branch.

        The merge commit is written to the object store, but HEAD and the
        branch ref are left alone: the caller persists result.state.

        Args:
            state: Current repository state
            branch: Name of the branch to merge

        Returns:
            MergeResult (up_to_date=True when nothing needs to be done)

        Raises:
            InvalidOperation: On self-merge or when the branch has no commits
            NotFound: If the branch does not exist
        """
        if branch == state.branch:
            raise InvalidOperation("Cannot merge a branch into itself")

        target_tip = self.repo.refs.read_branch(branch)
        if not target_tip:
            raise InvalidOperation(f"Branch '{branch}' has no commits")

        if target_tip == state.head:
            return MergeResult(branch=branch, into=state.branch, target_tip=target_tip,
                               up_to_date=True, state=state, message="Already up to date")

        target_commit = self.repo.get_commit(target_tip)
        message = self.merge_message(branch, state.branch)

        commit_hash = self.repo.create_commit(
            message=message,
            files=target_commit.files,
            parent=state.head or None,
            merge_parent=target_tip
        )
        logger.debug("Merge of %s into %s recorded as %s", branch, state.branch, commit_hash)

        return MergeResult(
            branch=branch,
            into=state.branch,
            target_tip=target_tip,
            commit_hash=commit_hash,
            files=list(target_commit.files),
            state=state.advance(commit_hash),
            message=message
        )
