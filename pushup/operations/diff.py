"""Diff engine for comparing file versions."""

from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import List, Optional

UNCHANGED = 'unchanged'
ADDED = 'added'
REMOVED = 'removed'


@dataclass(frozen=True)
class DiffRun:
    """A run of consecutive lines that are unchanged, added or removed."""
    kind: str
    value: str

    @property
    def added(self) -> bool:
        return self.kind == ADDED

    @property
    def removed(self) -> bool:
        return self.kind == REMOVED

    def lines(self) -> List[str]:
        """Lines of the run without their line endings."""
        return [line.rstrip('\r\n') for line in split_lines(self.value)]


def split_lines(text: str) -> List[str]:
    """
    Split text into lines, keeping each line's '\\n'.

    Only '\\n' ends a line; form feeds and other separators that
    str.splitlines honours stay inside the line.
    """
    parts = text.split('\n')
    lines = [part + '\n' for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def diff_lines(before: str, after: str) -> List[DiffRun]:
    """
    Line-level diff of two texts.

    Removed runs come before the added runs that replace them.

    Args:
        before: Old text
        after: New text

    Returns:
        List of DiffRun in document order
    """
    old_lines = split_lines(before)
    new_lines = split_lines(after)

    runs = []
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            runs.append(DiffRun(UNCHANGED, ''.join(old_lines[i1:i2])))
            continue
        if tag in ('delete', 'replace'):
            runs.append(DiffRun(REMOVED, ''.join(old_lines[i1:i2])))
        if tag in ('insert', 'replace'):
            runs.append(DiffRun(ADDED, ''.join(new_lines[j1:j2])))
    return runs


@dataclass
class FileDiff:
    """
    Represents the diff for a single file.

    A file with no earlier version is reported as new and carries no runs.
    """
    path: str
    old_content: Optional[str]
    new_content: str
    initial: bool = False
    runs: List[DiffRun] = field(default_factory=list)

    @property
    def is_new(self) -> bool:
        return self.old_content is None

    @property
    def is_modified(self) -> bool:
        return any(run.kind != UNCHANGED for run in self.runs)

    def compute_diff(self) -> 'FileDiff':
        """Compute runs for a file that has an earlier version."""
        if not self.is_new:
            self.runs = diff_lines(self.old_content, self.new_content)
        return self

    def added_lines(self) -> List[str]:
        return [line for run in self.runs if run.added for line in run.lines()]

    def removed_lines(self) -> List[str]:
        return [line for run in self.runs if run.removed for line in run.lines()]


class DiffEngine:
    """
    Engine for computing diffs between file versions.

    Supports:
    - Blob diffing (file content comparison)
    - Commit diffing against the first parent (show)
    - Staged entries against HEAD (diff)
    """

    def __init__(self, repo):
        """
        Initialize diff engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def _text(self, digest: str) -> str:
        return self.repo.read_blob(digest).text()

    def diff_blobs(self, path: str, old_digest: Optional[str], new_digest: str, initial: bool = False) -> FileDiff:
        """
        Compute diff between two blobs.

        Args:
            path: File path
            old_digest: Digest of the old version (None for new files)
            new_digest: Digest of the new version
            initial: Whether the file belongs to a root commit

        Returns:
            FileDiff object
        """
        old_content = self._text(old_digest) if old_digest else None
        file_diff = FileDiff(path, old_content, self._text(new_digest), initial=initial)
        return file_diff.compute_diff()

    def diff_commit(self, commit) -> List[FileDiff]:
        """
        Diff every file of a commit against its first parent.

        Files missing from the parent are reported as new. For a root commit
        every file is new.

        Args:
            commit: Commit object

        Returns:
            List of FileDiff objects, in the commit's file order
        """
        parent = self.repo.get_commit(commit.parent) if commit.parent else None

        diffs = []
        for entry in commit.files:
            old_digest = parent.file_digest(entry.path) if parent else None
            diffs.append(self.diff_blobs(entry.path, old_digest, entry.digest, initial=parent is None))
        return diffs

    def diff_index_to_head(self, index, head: Optional[str]) -> List[FileDiff]:
        """
        Compute diff between staged entries and HEAD.

        Args:
            index: Index instance
            head: HEAD digest ('' or None when there are no commits)

        Returns:
            List of FileDiff objects, in staging order
        """
        head_commit = self.repo.get_commit(head) if head else None

        diffs = []
        for entry in index.entries():
            old_digest = head_commit.file_digest(entry.path) if head_commit else None
            diffs.append(self.diff_blobs(entry.path, old_digest, entry.digest))
        return diffs

    def format_diff(self, diffs: List[FileDiff], color: bool = True) -> str:
        """
        Format diffs for the terminal.

        Args:
            diffs: List of FileDiff objects
            color: Whether to use color output

        Returns:
            Formatted diff string
        """
        from colorama import Fore, Style

        def paint(text, colour):
            return f"{colour}{text}{Style.RESET_ALL}" if color else text

        output = []

        for diff in diffs:
            output.append(paint(diff.path, Style.BRIGHT))

            if diff.is_new:
                label = '+ New file (initial commit)' if diff.initial else '+ New file'
                output.append(paint(label, Fore.GREEN))
                output.append('')
                continue

            for run in diff.runs:
                for line in run.lines():
                    if run.added:
                        output.append(paint(f"+ {line}", Fore.GREEN))
                    elif run.removed:
                        output.append(paint(f"- {line}", Fore.RED))
                    else:
                        output.append(paint(f"  {line}", Style.DIM))
            output.append('')

        return '\n'.join(output)
