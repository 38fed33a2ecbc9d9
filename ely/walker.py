"""
Depth-bounded, pre-order directory walks.

walk() backs the size report: every subdirectory becomes a DirectoryNode
carrying its recursive size, emitted before its own children.
find_targets() backs batch exec: no sizes, a deny-list of directory names
that are neither emitted nor descended into, and an optional marker file
that a directory must contain to be emitted.

Neither function raises for unreadable directories; failures are logged and
the affected subtree is skipped.
"""
from __future__ import annotations

import logging
import os
from typing import List, Optional

from .models import DepthLimit, DirectoryNode, ScanConfiguration, SubDirectory
from .probe import has_marker, probe, size_of

logger = logging.getLogger(__name__)


def _list_names(dir_path: str) -> List[str]:
    return sorted(os.listdir(dir_path))


def walk(
    dir_path: str,
    depth_limit: DepthLimit,
    current_depth: int = 0,
    *,
    root: Optional[str] = None,
) -> List[DirectoryNode]:
    if not depth_limit.allows(current_depth):
        return []

    root = dir_path if root is None else root
    try:
        names = _list_names(dir_path)
    except OSError as e:
        logger.error("Error reading directory %s: %s", dir_path, e)
        return []

    nodes: List[DirectoryNode] = []
    for name in names:
        item_path = os.path.join(dir_path, name)
        try:
            info = probe(item_path)
        except OSError as e:
            logger.warning("Cannot access %s: %s", item_path, e)
            continue
        if not info.is_directory:
            continue

        nodes.append(
            DirectoryNode(
                name=name,
                path=item_path,
                relative_path=os.path.relpath(item_path, root),
                depth=current_depth,
                size=size_of(item_path),
            )
        )
        nodes.extend(walk(item_path, depth_limit, current_depth + 1, root=root))
    return nodes


def scan(config: ScanConfiguration) -> List[DirectoryNode]:
    """Size walk from the configured scan root."""
    root = str(config.root_directory)
    logger.debug("scan: root=%s depth=%s", root, config.depth_limit.describe())
    return walk(root, config.depth_limit, 0, root=root)


def find_targets(config: ScanConfiguration) -> List[SubDirectory]:
    """Directories eligible for batch exec, in pre-order."""
    root = str(config.root_directory)
    targets: List[SubDirectory] = []

    def visit(dir_path: str, depth: int) -> None:
        if not config.depth_limit.allows(depth):
            return
        try:
            names = _list_names(dir_path)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", dir_path, e)
            return

        for name in names:
            item_path = os.path.join(dir_path, name)
            try:
                info = probe(item_path)
            except OSError as e:
                logger.debug("Skipping %s: %s", item_path, e)
                continue
            if not info.is_directory or name in config.skip_dirs:
                continue

            if config.marker_file is None or has_marker(item_path, config.marker_file):
                targets.append(
                    SubDirectory(
                        name=name,
                        path=item_path,
                        relative_path=os.path.relpath(item_path, root),
                        depth=depth,
                    )
                )
            visit(item_path, depth + 1)

    visit(root, 0)
    return targets
