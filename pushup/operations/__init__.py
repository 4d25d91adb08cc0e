"""Operations module for high-level PushUP operations.

This module contains the business logic for PushUP operations like:
- Diff computation
- Merging (fast-forward-by-replacement)
- The add/commit/log/show/status/branch/checkout/merge/reset/diff workflow
"""

from pushup.operations.diff import DiffEngine, FileDiff, DiffRun, diff_lines
from pushup.operations.merge import MergeEngine, MergeResult
from pushup.operations.porcelain import (Porcelain, CommitResult, LogResult, ShowResult,
                                         StatusResult, StatusEntry, CheckoutResult, ResetResult)

__all__ = [
    'DiffEngine', 'FileDiff', 'DiffRun', 'diff_lines',
    'MergeEngine', 'MergeResult',
    'Porcelain', 'CommitResult', 'LogResult', 'ShowResult',
    'StatusResult', 'StatusEntry', 'CheckoutResult', 'ResetResult',
]
