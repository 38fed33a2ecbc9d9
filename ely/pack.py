"""
Build, pack and copy the resulting archive path to the clipboard.

run_pack() performs the whole workflow and returns a PackOutcome. Stage
changes are reported through an optional callback so the CLI can print
progress; a failed build/pack step or a missing archive raises PackStepError.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .clipboard import copy_to_clipboard
from .config import Settings
from .dispatch import Runner, run_in_directory
from .errors import ClipboardUnavailable, PackStepError
from .models import ExecutionResult
from .probe import validate_directory

logger = logging.getLogger(__name__)

StageCallback = Callable[[str, Optional[str]], None]
Copier = Callable[[str, Sequence[str]], None]


@dataclass(frozen=True)
class PackOutcome:
    directory: Path
    archive: Path
    removed: List[str] = field(default_factory=list)
    copied: bool = False
    clipboard_error: Optional[str] = None


def remove_archives(directory: Path, suffix: str) -> List[str]:
    """Delete `*suffix` files directly inside `directory`; return removed names."""
    removed: List[str] = []
    try:
        names = sorted(n for n in os.listdir(directory) if n.endswith(suffix))
    except OSError as e:
        logger.warning("Could not list %s for %s files: %s", directory, suffix, e)
        return removed

    for name in names:
        target = Path(directory) / name
        try:
            target.unlink()
            removed.append(name)
        except OSError as e:
            logger.warning("Could not remove %s: %s", target, e)
    return removed


def find_latest_archive(directory: Path, suffix: str) -> Optional[Path]:
    """Most recently modified `*suffix` file in `directory`, or None."""
    best: Optional[Path] = None
    best_mtime = float("-inf")
    try:
        names = os.listdir(directory)
    except OSError as e:
        logger.error("Error finding archive in %s: %s", directory, e)
        return None

    for name in names:
        if not name.endswith(suffix):
            continue
        candidate = Path(directory) / name
        try:
            mtime = candidate.stat().st_mtime
        except OSError as e:
            logger.warning("Cannot stat %s: %s", candidate, e)
            continue
        if mtime > best_mtime:
            best, best_mtime = candidate, mtime
    return best


def run_step(label: str, command: str, directory: Path, runner: Runner = run_in_directory) -> ExecutionResult:
    logger.debug("Running %s: %s", label, command)
    result = runner(command, str(directory))
    if not result.success:
        raise PackStepError(label, result.error_message or result.output)
    return result


def run_pack(
    directory: str,
    settings: Settings,
    *,
    on_stage: Optional[StageCallback] = None,
    runner: Runner = run_in_directory,
    copier: Copier = copy_to_clipboard,
) -> PackOutcome:
    def stage(name: str, detail: Optional[str] = None) -> None:
        if on_stage is not None:
            on_stage(name, detail)

    root = validate_directory(directory)

    stage("clean")
    removed = remove_archives(root, settings.archive_suffix)
    for name in removed:
        stage("removed", name)

    stage("build")
    run_step("Build", settings.build_command, root, runner)

    stage("pack")
    run_step("Pack", settings.pack_command, root, runner)

    stage("locate")
    archive = find_latest_archive(root, settings.archive_suffix)
    if archive is None:
        raise PackStepError("Locate", f"no {settings.archive_suffix} file found after packing")

    stage("clipboard")
    try:
        copier(str(archive), settings.clipboard_command)
    except ClipboardUnavailable as e:
        logger.warning("Clipboard unavailable: %s", e)
        return PackOutcome(directory=root, archive=archive, removed=removed, copied=False, clipboard_error=str(e))
    return PackOutcome(directory=root, archive=archive, removed=removed, copied=True)
