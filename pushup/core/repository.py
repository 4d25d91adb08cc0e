"""Repository management for PushUP."""

import logging
from pathlib import Path
from typing import Optional, List, Iterator
from .errors import NotFound, AlreadyExists, IoError
from .hash import hash_object, is_hex, is_digest
from .objects import Blob, Commit, StagedEntry
from pushup.utils.fs import write_atomic

logger = logging.getLogger(__name__)

REPO_DIR_NAME = '.pushup'
DEFAULT_BRANCH = 'main'
MIN_PREFIX_LENGTH = 4


class Repository:
    """
    Represents a PushUP repository.

    A repository manages the .pushup directory structure and provides the
    object store (content-addressed blobs and commits) and the commit graph
    built on top of it.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.repo_dir = self.work_tree / REPO_DIR_NAME
        self.objects_dir = self.repo_dir / 'objects'
        self.refs_dir = self.repo_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.repo_dir / 'HEAD'
        self.index_file = self.repo_dir / 'index'
        self.current_branch_file = self.repo_dir / 'CURRENT_BRANCH'
        self.config_file = self.repo_dir / 'config'
        self.lock_file = self.repo_dir / 'pushup.lock'

        # Initialize managers (lazy loading to avoid circular import)
        self._ref_manager = None
        self._diff_engine = None
        self._merge_engine = None
        self._config = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from pushup.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self)
        return self._diff_engine

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from pushup.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    def exists(self) -> bool:
        """Check whether the .pushup directory has been created."""
        return self.repo_dir.is_dir()

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .pushup directory structure:
        .pushup/
        ├── objects/         # Object database (blobs and commits)
        ├── refs/
        │   └── heads/       # Branch references
        │       └── main     # Empty until the first commit
        ├── HEAD             # Digest of the checked-out commit
        ├── CURRENT_BRANCH   # Name of the active branch
        ├── index            # Staging area
        └── config           # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            AlreadyExists: If repository already exists
        """
        if self.repo_dir.exists():
            raise AlreadyExists(f"Repository already exists at {self.repo_dir}")

        try:
            self.objects_dir.mkdir(parents=True)
            self.heads_dir.mkdir(parents=True)

            write_atomic(self.head_file, '')
            write_atomic(self.index_file, '[]')
            write_atomic(self.current_branch_file, DEFAULT_BRANCH)
            write_atomic(self.heads_dir / DEFAULT_BRANCH, '')

            config_content = '[core]\n\trepositoryformatversion = 0\n'
            write_atomic(self.config_file, config_content)
        except OSError as e:
            raise IoError(f"Cannot initialize repository at {self.work_tree}: {e}") from e

        logger.debug("Initialized repository at %s", self.repo_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / REPO_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    # Object store

    def object_path(self, digest: str) -> Path:
        """
        Get filesystem path for an object.

        Objects live directly under objects/, named by their full digest.

        Args:
            digest: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / digest

    def put(self, content: bytes) -> str:
        """
        Store content under its digest.

        Writing content that is already present is a no-op.

        Args:
            content: Raw bytes to store

        Returns:
            str: SHA-1 digest of the content

        Raises:
            IoError: If the object cannot be written
        """
        digest = hash_object(content)
        path = self.object_path(digest)

        if path.exists():
            return digest

        try:
            write_atomic(path, content)
        except OSError as e:
            raise IoError(f"Cannot write object {digest}: {e}") from e

        logger.debug("Stored object %s (%d bytes)", digest, len(content))
        return digest

    def get(self, digest: str) -> bytes:
        """
        Read stored content by digest.

        Args:
            digest: Object digest

        Returns:
            bytes: Stored content

        Raises:
            NotFound: If no object with that digest exists
            IoError: If the object exists but cannot be read
        """
        if not is_digest(digest):
            raise NotFound(f"Object {digest} not found")

        path = self.object_path(digest)
        if not path.is_file():
            raise NotFound(f"Object {digest} not found")

        try:
            return path.read_bytes()
        except OSError as e:
            raise IoError(f"Cannot read object {digest}: {e}") from e

    def has_object(self, digest: str) -> bool:
        """Check if object exists in repository."""
        return is_digest(digest) and self.object_path(digest).is_file()

    def write_object(self, obj) -> str:
        """
        Write a Blob or Commit to the object store.

        Returns:
            str: Digest of the object
        """
        return self.put(obj.serialize())

    def read_blob(self, digest: str) -> Blob:
        """Read a blob object by digest."""
        return Blob(self.get(digest))

    # Commit graph

    def create_commit(
        self,
        message: str,
        files: List[StagedEntry],
        parent: Optional[str] = None,
        merge_parent: Optional[str] = None,
        timestamp: Optional[str] = None
    ) -> str:
        """
        Record a commit in the object store.

        Args:
            message: Commit message
            files: Staged entries to freeze
            parent: Digest of the first parent (None for a root commit)
            merge_parent: Digest of the merged branch tip
            timestamp: Override for the commit timestamp

        Returns:
            str: Digest of the new commit
        """
        commit = Commit.create(
            message=message,
            files=files,
            parent=parent,
            merge_parent=merge_parent,
            timestamp=timestamp
        )
        digest = self.write_object(commit)
        logger.debug("Created commit %s (parent=%s, merge_parent=%s)", digest, parent, merge_parent)
        return digest

    def get_commit(self, digest: str) -> Commit:
        """
        Read a commit by digest.

        Args:
            digest: Commit digest

        Returns:
            Commit: Deserialized commit

        Raises:
            NotFound: If the object is missing or is not a commit
        """
        data = self.get(digest)

        commit = Commit()
        try:
            commit.deserialize(data)
        except ValueError:
            raise NotFound(f"Object {digest} is not a commit")

        commit._hash = digest
        return commit

    def is_commit(self, digest: str) -> bool:
        """Check whether a digest names a stored commit."""
        try:
            self.get_commit(digest)
        except NotFound:
            return False
        return True

    def walk_history(self, start: Optional[str]) -> Iterator[Commit]:
        """
        Walk first-parent history starting at a commit.

        Merge parents are not followed, so history after a merge only shows
        the side the merge was made on.

        Args:
            start: Digest of the newest commit (None or empty yields nothing)

        Yields:
            Commit objects, newest first
        """
        digest = start
        while digest:
            commit = self.get_commit(digest)
            yield commit
            digest = commit.parent

    def find_commits_by_prefix(self, prefix: str) -> List[str]:
        """
        Find commit digests starting with a prefix.

        Args:
            prefix: Lowercase hex prefix

        Returns:
            Sorted list of matching commit digests
        """
        if not self.objects_dir.exists():
            return []

        matches = []
        for obj_file in self.objects_dir.iterdir():
            if obj_file.name.startswith(prefix) and is_digest(obj_file.name):
                if self.is_commit(obj_file.name):
                    matches.append(obj_file.name)
        return sorted(matches)

    def resolve_commit(self, ref: str) -> str:
        """
        Resolve a reference to a commit digest.

        Supports:
        - HEAD
        - Branch names (main, feature)
        - Full commit digests
        - Unique digest prefixes of at least 4 characters

        Args:
            ref: Reference string

        Returns:
            str: Commit digest

        Raises:
            NotFound: If the reference does not name a commit
        """
        if ref.upper() == 'HEAD':
            head = self.refs.read_head()
            if not head:
                raise NotFound("HEAD does not point to a commit yet")
            return head

        if self.refs.branch_exists(ref):
            tip = self.refs.read_branch(ref)
            if not tip:
                raise NotFound(f"Branch '{ref}' has no commits")
            return tip

        candidate = ref.lower()
        if is_digest(candidate):
            if self.is_commit(candidate):
                return candidate
            raise NotFound(f"Commit {ref} not found")

        if len(candidate) >= MIN_PREFIX_LENGTH and is_hex(candidate):
            matches = self.find_commits_by_prefix(candidate)
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise NotFound(f"Ambiguous commit prefix {ref} ({len(matches)} matches)")

        raise NotFound(f"Commit {ref} not found")

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
