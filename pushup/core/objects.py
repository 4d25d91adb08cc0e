"""PushUP objects: blobs, staged entries and commits."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List
from .hash import hash_object


class PushupObject(ABC):
    """Base class for all objects kept in the object store."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are addressed by the SHA-1 of their serialized bytes with no
        header, so blobs and commits share one address space.

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """Get object hash."""
        return self.compute_hash()


class Blob(PushupObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    def text(self) -> str:
        """Decode blob content as UTF-8 text."""
        return self.data.decode('utf-8', errors='replace')

    def __repr__(self) -> str:
        """String representation of blob."""
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


@dataclass(frozen=True)
class StagedEntry:
    """A path in the staging area and the digest of its staged content."""
    path: str
    digest: str

    def to_dict(self) -> dict:
        """Serialize to the on-disk record shape."""
        return {'filePath': self.path, 'fileHash': self.digest}

    @classmethod
    def from_dict(cls, data: dict) -> 'StagedEntry':
        """Build an entry from an on-disk record."""
        return cls(path=data['filePath'], digest=data['fileHash'])

    def __repr__(self) -> str:
        return f"StagedEntry({self.digest[:7]} {self.path})"


def current_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class Commit(PushupObject):
    """
    Represents a snapshot of the staged files.

    A commit captures:
    - The flat list of staged files (path and blob digest)
    - Parent commit for first-parent history
    - Merge parent, only for commits created by merge
    - Timestamp and message

    The serialized form is a compact JSON record. Because the parent digest
    is part of it, rewriting any ancestor changes every descendant's digest.
    """

    def __init__(self):
        """Initialize empty commit."""
        super().__init__()
        self.timestamp: str = ''
        self.message: str = ''
        self.files: List[StagedEntry] = []
        self.parent: Optional[str] = None
        self.merge_parent: Optional[str] = None

    @property
    def digest(self) -> str:
        """Digest under which the commit is stored."""
        return self.hash

    @property
    def is_merge(self) -> bool:
        return self.merge_parent is not None

    def file_digest(self, path: str) -> Optional[str]:
        """
        Look up the blob digest recorded for a path.

        Args:
            path: File path as staged

        Returns:
            Blob digest, or None if the commit has no such file
        """
        for entry in self.files:
            if entry.path == path:
                return entry.digest
        return None

    def to_dict(self) -> dict:
        """Record in canonical key order."""
        record = {
            'timestamp': self.timestamp,
            'message': self.message,
            'files': [entry.to_dict() for entry in self.files],
            'parent': self.parent,
        }
        if self.merge_parent is not None:
            record['mergeParent'] = self.merge_parent
        return record

    def serialize(self) -> bytes:
        """
        Serialize commit to its canonical JSON form.

        Format:
        {"timestamp":...,"message":...,"files":[{"filePath":...,"fileHash":...}],
         "parent":...,"mergeParent":...}

        Returns:
            bytes: UTF-8 encoded JSON
        """
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False).encode('utf-8')

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from its JSON form.

        Args:
            data: Serialized commit data

        Raises:
            ValueError: If the data is not a commit record
        """
        try:
            record = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"Not a commit record: {e}")

        if not isinstance(record, dict) or not {'timestamp', 'message', 'files'} <= record.keys():
            raise ValueError("Not a commit record: missing fields")

        try:
            self.files = [StagedEntry.from_dict(item) for item in record['files']]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Not a commit record: bad file list ({e})")

        self.timestamp = record['timestamp']
        self.message = record['message']
        self.parent = record.get('parent') or None
        self.merge_parent = record.get('mergeParent') or None
        self._hash = None

    @classmethod
    def create(
        cls,
        message: str,
        files: List[StagedEntry],
        parent: Optional[str] = None,
        merge_parent: Optional[str] = None,
        timestamp: Optional[str] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            message: Commit message
            files: Staged entries frozen into the commit
            parent: First parent digest (None for a root commit)
            merge_parent: Second parent digest, only for merge commits
            timestamp: ISO-8601 timestamp (defaults to now, UTC)

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.message = message
        commit.files = list(files)
        commit.parent = parent or None
        commit.merge_parent = merge_parent or None
        commit.timestamp = timestamp or current_timestamp()
        return commit

    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
