"""Utilities module for common helper functions.

This module contains:
- Filesystem utilities (whole-file replacement of state files)
"""

from pushup.utils.fs import write_atomic, read_text

__all__ = [
    'write_atomic', 'read_text',
]
