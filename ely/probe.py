"""
Filesystem probe: stat a path and sum directory sizes.

size_of() is fail-soft. A child that cannot be stat'ed or a directory that
cannot be listed is logged as a warning and contributes 0 bytes; the
enclosing sum carries on. Symlinks are never followed.
"""
from __future__ import annotations

import logging
import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path

from .errors import DirectoryNotFoundError, NotADirectoryPathError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    is_directory: bool
    size: int


def probe(path: str) -> ProbeResult:
    """Stat `path` without following symlinks. Raises OSError on failure."""
    st = os.stat(path, follow_symlinks=False)
    if statmod.S_ISDIR(st.st_mode):
        return ProbeResult(is_directory=True, size=0)
    if statmod.S_ISLNK(st.st_mode):
        return ProbeResult(is_directory=False, size=0)
    return ProbeResult(is_directory=False, size=int(st.st_size))


def size_of(path: str) -> int:
    """Total bytes of every readable file below the directory `path`."""
    total = 0
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        logger.warning("Cannot read directory %s: %s", path, e)
        return 0

    for entry in entries:
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                total += size_of(entry.path)
            else:
                total += int(entry.stat(follow_symlinks=False).st_size)
        except OSError as e:
            logger.warning("Cannot access %s: %s", entry.path, e)
    return total


def has_marker(path: str, marker: str) -> bool:
    return os.path.isfile(os.path.join(path, marker))


def validate_directory(path: str) -> Path:
    """Resolve a scan root, raising InvalidDirectoryError subclasses for bad input."""
    if not os.path.exists(path):
        raise DirectoryNotFoundError(path)
    if not os.path.isdir(path):
        raise NotADirectoryPathError(path)
    return Path(path).resolve()
