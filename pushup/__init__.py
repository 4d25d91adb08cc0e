"""PushUP - a small content-addressed version control system in Python."""

__version__ = '0.1.0'

from pushup.core.repository import Repository
from pushup.core.objects import PushupObject, Blob, StagedEntry, Commit

__all__ = [
    'Repository',
    'PushupObject',
    'Blob',
    'StagedEntry',
    'Commit',
]
