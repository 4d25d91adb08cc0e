"""Index (staging area) implementation."""

import json
import logging
from pathlib import Path
from typing import Optional, List, Iterator
from .errors import IoError
from .objects import StagedEntry
from pushup.utils.fs import write_atomic

logger = logging.getLogger(__name__)


class Index:
    """
    PushUP index (staging area) implementation.

    The index is an ordered list of files to be included in the next commit.
    Paths are unique: staging a path again drops its old entry and appends
    the new one at the end.

    On disk it is a JSON array of {filePath, fileHash} records, rewritten in
    full on every save.
    """

    def __init__(self, entries: Optional[List[StagedEntry]] = None):
        """Initialize index, optionally with existing entries."""
        self._entries: List[StagedEntry] = []
        for entry in entries or []:
            self.stage(entry.path, entry.digest)

    def stage(self, path: str, digest: str) -> StagedEntry:
        """
        Add or replace the entry for a path.

        Args:
            path: File path relative to the work tree
            digest: Digest of the staged blob

        Returns:
            StagedEntry: The new entry
        """
        self._entries = [entry for entry in self._entries if entry.path != path]
        entry = StagedEntry(path=path, digest=digest)
        self._entries.append(entry)
        return entry

    def entries(self) -> List[StagedEntry]:
        """Staged entries in staging order."""
        return list(self._entries)

    def get(self, path: str) -> Optional[StagedEntry]:
        """Get entry by path."""
        for entry in self._entries:
            if entry.path == path:
                return entry
        return None

    def clear(self) -> None:
        """Clear all entries from index."""
        self._entries = []

    def is_empty(self) -> bool:
        return not self._entries

    def to_json(self) -> str:
        return json.dumps([entry.to_dict() for entry in self._entries])

    @classmethod
    def load(cls, index_path) -> 'Index':
        """
        Read index from disk.

        A missing index file reads as an empty index.

        Args:
            index_path: Path to index file

        Returns:
            Index: Loaded index

        Raises:
            IoError: If the file cannot be read or is not a valid index
        """
        index_path = Path(index_path)
        if not index_path.exists():
            return cls()

        try:
            raw = index_path.read_text(encoding='utf-8')
        except OSError as e:
            raise IoError(f"Cannot read index: {e}") from e

        if not raw.strip():
            return cls()

        try:
            records = json.loads(raw)
            entries = [StagedEntry.from_dict(record) for record in records]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise IoError(f"Corrupt index file {index_path}: {e}") from e

        return cls(entries)

    def save(self, index_path) -> None:
        """
        Write index to disk.

        Args:
            index_path: Path to index file

        Raises:
            IoError: If the file cannot be written
        """
        try:
            write_atomic(index_path, self.to_json())
        except OSError as e:
            raise IoError(f"Cannot write index: {e}") from e
        logger.debug("Wrote index with %d entries", len(self._entries))

    def __len__(self) -> int:
        """Number of entries in index."""
        return len(self._entries)

    def __iter__(self) -> Iterator[StagedEntry]:
        return iter(list(self._entries))

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not None

    def __repr__(self) -> str:
        """String representation."""
        return f"Index(entries={len(self._entries)})"
