from __future__ import annotations

"""
Defaults and environment overrides for the ely commands.

Nothing here is persisted; every value comes from the constants below,
optionally overridden through ELY_* environment variables.
"""

import os
import shlex
from dataclasses import dataclass
from typing import FrozenSet, List, Mapping, Optional, Tuple

from .models import DepthLimit

DEFAULT_DIRECTORY = "."
DEFAULT_MAX_DEPTH = 2
DEFAULT_TOP_COUNT = 10

# Directory names the exec walk never emits nor descends into.
DEFAULT_SKIP_DIRS: FrozenSet[str] = frozenset({"node_modules", ".git", ".next", "dist", "build"})

DEFAULT_MANIFEST_FILE = "package.json"
DEFAULT_ARCHIVE_SUFFIX = ".tgz"
DEFAULT_BUILD_COMMAND = "pnpm run build"
DEFAULT_PACK_COMMAND = "pnpm pack"
DEFAULT_CLIPBOARD_COMMAND: Tuple[str, ...] = ("pbcopy",)


@dataclass(frozen=True)
class Settings:
    skip_dirs: FrozenSet[str] = DEFAULT_SKIP_DIRS
    manifest_file: str = DEFAULT_MANIFEST_FILE
    archive_suffix: str = DEFAULT_ARCHIVE_SUFFIX
    build_command: str = DEFAULT_BUILD_COMMAND
    pack_command: str = DEFAULT_PACK_COMMAND
    clipboard_command: Tuple[str, ...] = DEFAULT_CLIPBOARD_COMMAND


def _split_names(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the defaults plus any ELY_* overrides.

    ELY_SKIP_DIRS extends the deny-list (comma separated) rather than
    replacing it. ELY_CLIPBOARD_COMMAND is split with shlex.
    """
    env = os.environ if environ is None else environ

    skip_dirs = set(DEFAULT_SKIP_DIRS)
    skip_dirs.update(_split_names(env.get("ELY_SKIP_DIRS", "")))

    clip_raw = env.get("ELY_CLIPBOARD_COMMAND", "").strip()
    clipboard_command = tuple(shlex.split(clip_raw)) if clip_raw else DEFAULT_CLIPBOARD_COMMAND

    return Settings(
        skip_dirs=frozenset(skip_dirs),
        manifest_file=env.get("ELY_MANIFEST_FILE", "").strip() or DEFAULT_MANIFEST_FILE,
        archive_suffix=env.get("ELY_ARCHIVE_SUFFIX", "").strip() or DEFAULT_ARCHIVE_SUFFIX,
        build_command=env.get("ELY_BUILD_COMMAND", "").strip() or DEFAULT_BUILD_COMMAND,
        pack_command=env.get("ELY_PACK_COMMAND", "").strip() or DEFAULT_PACK_COMMAND,
        clipboard_command=clipboard_command,
    )


def size_depth_limit(max_depth: int) -> DepthLimit:
    """`ds`: 0 means no depth bound."""
    if max_depth < 0:
        raise ValueError(f"max depth must be >= 0, got {max_depth}")
    return DepthLimit.unlimited() if max_depth == 0 else DepthLimit.bounded(max_depth)


def exec_depth_limit(max_depth: int) -> DepthLimit:
    """`exec`: 0 means immediate children only."""
    if max_depth < 0:
        raise ValueError(f"max depth must be >= 0, got {max_depth}")
    return DepthLimit.bounded(max_depth)
