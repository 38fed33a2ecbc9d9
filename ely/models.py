from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class DepthLimit:
    """
    How deep a walk may go below the scan root.

    The scan root's direct children sit at depth 0. ``max_depth=None`` means
    no bound; otherwise depths ``0..max_depth`` (inclusive) are visited.
    """

    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

    @classmethod
    def unlimited(cls) -> "DepthLimit":
        return cls(None)

    @classmethod
    def bounded(cls, max_depth: int) -> "DepthLimit":
        return cls(int(max_depth))

    @property
    def is_unlimited(self) -> bool:
        return self.max_depth is None

    def allows(self, depth: int) -> bool:
        return self.max_depth is None or depth <= self.max_depth

    def describe(self) -> str:
        return "unlimited" if self.max_depth is None else str(self.max_depth)


@dataclass(frozen=True)
class SubDirectory:
    name: str
    path: str
    relative_path: str
    depth: int


@dataclass(frozen=True)
class DirectoryNode(SubDirectory):
    # Recursive sum of every readable file below ``path``.
    size: int = 0


@dataclass(frozen=True)
class ExecutionResult:
    success: bool
    output: str = ""
    error_message: Optional[str] = None
    return_code: Optional[int] = None


@dataclass(frozen=True)
class DispatchSummary:
    succeeded: int
    failed: int

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def __str__(self) -> str:
        return f"{self.succeeded} successful, {self.failed} failed"


@dataclass(frozen=True)
class ScanConfiguration:
    root_directory: Path
    depth_limit: DepthLimit = field(default_factory=DepthLimit.unlimited)
    top_count: int = 10
    skip_dirs: FrozenSet[str] = frozenset()
    marker_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.top_count < 0:
            raise ValueError(f"top_count must be >= 0, got {self.top_count}")
