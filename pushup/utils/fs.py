"""Filesystem helpers for repository state files."""

import os
from pathlib import Path
from typing import Union


def write_atomic(path: Union[str, Path], data: Union[str, bytes]) -> None:
    """
    Replace a file's content in one step.

    The data is written to a temporary sibling and moved over the target
    with os.replace, so readers see either the old or the new content.

    Args:
        path: Target file
        data: New content (str is encoded as UTF-8)
    """
    path = Path(path)
    if isinstance(data, str):
        data = data.encode('utf-8')

    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def read_text(path: Union[str, Path]) -> str:
    """Read a small UTF-8 state file and strip surrounding whitespace."""
    return Path(path).read_text(encoding='utf-8').strip()
