"""
ui.py

Console output for the ely commands, built on Rich:
  - log_info, log_warning, log_error, log_success with a shared theme.
  - echo() for plain report lines (paths are escaped, never parsed as markup).
  - indent_block() and elapsed_ms() helpers used by the command handlers.

log_info is suppressed unless set_verbose(True) was called.
"""

from __future__ import annotations

import time
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

_THEME = Theme(
    {
        "ui.info": "cyan",
        "ui.success": "green bold",
        "ui.warn": "yellow bold",
        "ui.error": "red bold",
        "ui.header": "bold blue",
        "ui.dim": "dim",
    }
)

# soft_wrap keeps long paths on a single line when output is redirected.
console = Console(theme=_THEME, highlight=False, soft_wrap=True, emoji=False)

VERBOSE = False


def set_verbose(verbose: bool) -> None:
    global VERBOSE
    VERBOSE = bool(verbose)


def log_info(message: str) -> None:
    if VERBOSE:
        console.print(f"[ui.info]ℹ  {escape(message)}[/]")


def log_warning(message: str) -> None:
    console.print(f"[ui.warn]⚠️  {escape(message)}[/]")


def log_error(message: str) -> None:
    console.print(f"[ui.error]❌ {escape(message)}[/]")


def log_success(message: str) -> None:
    console.print(f"[ui.success]✅ {escape(message)}[/]")


def echo(message: str = "", style: str = "") -> None:
    text = escape(message)
    console.print(f"[{style}]{text}[/]" if style and text else text)


def indent_block(text: str, prefix: str = "   ") -> str:
    return "\n".join(f"{prefix}{line}" for line in text.splitlines())


def echo_lines(lines: Iterable[str]) -> None:
    for line in lines:
        echo(line)


def elapsed_ms(start: float) -> int:
    """Milliseconds since `start`, a time.perf_counter() reading."""
    return int(round((time.perf_counter() - start) * 1000))
