"""
Batch command dispatch over walked directories.

Each directory is independent: a failing command is recorded in its
ExecutionResult and the batch moves on to the next directory.
"""
from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

from .models import DispatchSummary, ExecutionResult, SubDirectory

logger = logging.getLogger(__name__)

Runner = Callable[[str, str], ExecutionResult]
StartCallback = Callable[[SubDirectory], None]
DispatchResults = List[Tuple[SubDirectory, ExecutionResult]]


def run_in_directory(command: str, directory: str) -> ExecutionResult:
    """
    Run a shell command synchronously with `directory` as cwd. Never raises.

    Output that is not valid UTF-8 is decoded with replacement characters.
    """
    logger.debug("run_in_directory: cwd=%s cmd=%s", directory, command)
    try:
        proc = subprocess.run(
            command,
            shell=True,
            cwd=directory,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        return ExecutionResult(success=False, output="", error_message=str(e))

    stdout = (proc.stdout or "").strip()
    if proc.returncode == 0:
        return ExecutionResult(success=True, output=stdout, return_code=0)

    message = f"Command failed with exit code {proc.returncode}: {command}"
    stderr = (proc.stderr or "").strip()
    if stderr:
        message = f"{message}\n{stderr}"
    return ExecutionResult(
        success=False,
        output=stdout,
        error_message=message,
        return_code=proc.returncode,
    )


class Dispatcher(ABC):
    """Runs one command across many directories; subclasses choose the strategy."""

    @abstractmethod
    def dispatch_all(
        self,
        targets: Sequence[SubDirectory],
        command: str,
        on_start: Optional[StartCallback] = None,
    ) -> DispatchResults:
        raise NotImplementedError


class SequentialDispatcher(Dispatcher):
    def __init__(self, runner: Runner = run_in_directory):
        self.runner = runner

    def dispatch_all(
        self,
        targets: Sequence[SubDirectory],
        command: str,
        on_start: Optional[StartCallback] = None,
    ) -> DispatchResults:
        results: DispatchResults = []
        for target in targets:
            if on_start is not None:
                on_start(target)
            result = self.runner(command, target.path)
            if not result.success:
                logger.debug("command failed in %s: %s", target.path, result.error_message)
            results.append((target, result))
        return results


def summarize(results: Sequence[Tuple[SubDirectory, ExecutionResult]]) -> DispatchSummary:
    succeeded = sum(1 for _, r in results if r.success)
    return DispatchSummary(succeeded=succeeded, failed=len(results) - succeeded)
