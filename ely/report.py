from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from .models import DirectoryNode, DispatchSummary, ExecutionResult, ScanConfiguration, SubDirectory
from .size_utils import format_bytes


def rank_nodes(nodes: Sequence[DirectoryNode], top_count: int) -> List[DirectoryNode]:
    """
    Largest nodes first, truncated to `top_count`.

    sorted() is stable, so equal sizes keep their pre-order discovery order.
    """
    ranked = sorted(nodes, key=lambda n: n.size, reverse=True)
    return ranked[: max(0, top_count)]


def total_size(nodes: Sequence[DirectoryNode]) -> int:
    """
    True size of the scanned tree, independent of top-K truncation.

    Nested nodes are already part of their ancestors' sizes, so only the
    shallowest nodes in the set are summed.
    """
    if not nodes:
        return 0
    top_depth = min(n.depth for n in nodes)
    return sum(n.size for n in nodes if n.depth == top_depth)


def render_report(ranked: Sequence[DirectoryNode]) -> List[str]:
    lines = []
    for rank, node in enumerate(ranked, start=1):
        indent = "  " * node.depth
        lines.append(f"{rank:>2}. {indent}📁 {node.name} ({format_bytes(node.size)})")
    return lines


def _node_dict(node: SubDirectory) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": node.name,
        "path": node.path,
        "relative_path": node.relative_path,
        "depth": node.depth,
    }
    if isinstance(node, DirectoryNode):
        data["size_bytes"] = node.size
        data["size_human"] = format_bytes(node.size)
    return data


def size_report_payload(
    config: ScanConfiguration,
    nodes: Sequence[DirectoryNode],
    elapsed_ms: int,
) -> Dict[str, Any]:
    ranked = rank_nodes(nodes, config.top_count)
    total = total_size(nodes)
    return {
        "root": str(config.root_directory),
        "max_depth": config.depth_limit.max_depth,
        "top_count": config.top_count,
        "discovered": len(nodes),
        "top": [_node_dict(n) for n in ranked],
        "total_bytes": total,
        "total_human": format_bytes(total),
        "elapsed_ms": elapsed_ms,
    }


def exec_report_payload(
    command: str,
    results: Sequence[Tuple[SubDirectory, ExecutionResult]],
    summary: DispatchSummary,
    elapsed_ms: int,
) -> Dict[str, Any]:
    return {
        "command": command,
        "results": [
            {
                **_node_dict(target),
                "success": result.success,
                "output": result.output,
                "error": result.error_message,
                "return_code": result.return_code,
            }
            for target, result in results
        ],
        "succeeded": summary.succeeded,
        "failed": summary.failed,
        "elapsed_ms": elapsed_ms,
    }
