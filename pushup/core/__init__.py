"""Core functionality for PushUP.

This module contains the core data structures:
- PushUP objects (Blob, StagedEntry, Commit)
- Repository management (object store and commit graph)
- Index/staging area
- Reference management
- Repository lock
- Configuration management
- Hashing utilities
- Error types

For user-facing operations (add, commit, merge, ...), see pushup.operations
"""

from pushup.core.objects import PushupObject, Blob, StagedEntry, Commit
from pushup.core.repository import Repository, DEFAULT_BRANCH
from pushup.core.hash import hash_object
from pushup.core.index import Index
from pushup.core.refs import RefManager, RepositoryState, BranchInfo
from pushup.core.lock import RepositoryLock
from pushup.core.config import Config, get_config
from pushup.core.errors import (PushupError, NotFound, AlreadyExists, InvalidOperation,
                                IoError, EmptyOperation, RepositoryLocked)

__all__ = [
    'PushupObject',
    'Blob',
    'StagedEntry',
    'Commit',
    'Repository',
    'DEFAULT_BRANCH',
    'Index',
    'RefManager',
    'RepositoryState',
    'BranchInfo',
    'RepositoryLock',
    'Config',
    'get_config',
    'hash_object',
    'PushupError',
    'NotFound',
    'AlreadyExists',
    'InvalidOperation',
    'IoError',
    'EmptyOperation',
    'RepositoryLocked',
]
