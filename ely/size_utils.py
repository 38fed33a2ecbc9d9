"""
Byte-count formatting for report lines.

format_bytes uses base-1024 units (B, KB, MB, GB, TB) and drops trailing
zeros after rounding to two decimals, so 1536 renders as "1.5 KB" and
1048576 as "1 MB".
"""
from __future__ import annotations

_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(num_bytes: int) -> str:
    """
    Format a byte count with the largest unit whose scaled value is >= 1.

    Examples:
        0 -> "0 B"
        1536 -> "1.5 KB"
        1048576 -> "1 MB"
    """
    if num_bytes < 0:
        raise ValueError(f"Byte count must be non-negative: {num_bytes}")
    if num_bytes == 0:
        return "0 B"

    value = float(num_bytes)
    idx = 0
    while value >= 1024.0 and idx < len(_UNITS) - 1:
        value /= 1024.0
        idx += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_UNITS[idx]}"
