from .models import (
    DepthLimit,
    DirectoryNode,
    DispatchSummary,
    ExecutionResult,
    ScanConfiguration,
    SubDirectory,
)
from .size_utils import format_bytes
from .walker import find_targets, scan, walk
from .report import rank_nodes, render_report, total_size
from .dispatch import SequentialDispatcher, run_in_directory, summarize

__version__ = "1.0.0"

__all__ = [
    "DepthLimit",
    "DirectoryNode",
    "DispatchSummary",
    "ExecutionResult",
    "ScanConfiguration",
    "SubDirectory",
    "format_bytes",
    "find_targets",
    "scan",
    "walk",
    "rank_nodes",
    "render_report",
    "total_size",
    "SequentialDispatcher",
    "run_in_directory",
    "summarize",
]
