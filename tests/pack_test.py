from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from ely import clipboard, pack
from ely.config import Settings
from ely.errors import ClipboardUnavailable, DirectoryNotFoundError, PackStepError
from ely.models import ExecutionResult


def touch(path, mtime=None):
    path.write_bytes(b"tgz")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def test_remove_archives_only_matching(tmp_path):
    touch(tmp_path / "a-1.0.0.tgz")
    touch(tmp_path / "b-2.0.0.tgz")
    touch(tmp_path / "keep.txt")
    removed = pack.remove_archives(tmp_path, ".tgz")
    assert removed == ["a-1.0.0.tgz", "b-2.0.0.tgz"]
    assert sorted(os.listdir(tmp_path)) == ["keep.txt"]


def test_find_latest_archive_by_mtime(tmp_path):
    touch(tmp_path / "old.tgz", mtime=1_000_000)
    newest = touch(tmp_path / "new.tgz", mtime=2_000_000)
    touch(tmp_path / "newer.txt", mtime=3_000_000)
    assert pack.find_latest_archive(tmp_path, ".tgz") == newest


def test_find_latest_archive_none(tmp_path):
    assert pack.find_latest_archive(tmp_path, ".tgz") is None


class FakeRunner:
    def __init__(self, fail_on=None, produce=None):
        self.calls = []
        self.fail_on = fail_on
        self.produce = produce

    def __call__(self, command, directory):
        self.calls.append(command)
        if command == self.fail_on:
            return ExecutionResult(success=False, output="", error_message="exit 1")
        if command == "pack" and self.produce:
            touch(Path(directory) / self.produce)
        return ExecutionResult(success=True, output="", return_code=0)


SETTINGS = Settings(build_command="build", pack_command="pack", clipboard_command=("fake-clip",))


def test_run_pack_happy_path(tmp_path):
    touch(tmp_path / "stale.tgz", mtime=1_000)
    runner = FakeRunner(produce="pkg-1.0.0.tgz")
    copied = []
    stages = []

    outcome = pack.run_pack(
        str(tmp_path),
        SETTINGS,
        on_stage=lambda s, d: stages.append((s, d)),
        runner=runner,
        copier=lambda text, cmd: copied.append((text, tuple(cmd))),
    )

    assert runner.calls == ["build", "pack"]
    assert outcome.removed == ["stale.tgz"]
    assert outcome.archive == tmp_path.resolve() / "pkg-1.0.0.tgz"
    assert outcome.copied is True
    assert copied == [(str(outcome.archive), ("fake-clip",))]
    assert [s for s, _ in stages] == ["clean", "removed", "build", "pack", "locate", "clipboard"]


def test_run_pack_build_failure_stops(tmp_path):
    runner = FakeRunner(fail_on="build")
    with pytest.raises(PackStepError) as exc:
        pack.run_pack(str(tmp_path), SETTINGS, runner=runner, copier=lambda t, c: None)
    assert exc.value.step == "Build"
    assert runner.calls == ["build"]


def test_run_pack_without_archive_fails(tmp_path):
    with pytest.raises(PackStepError) as exc:
        pack.run_pack(str(tmp_path), SETTINGS, runner=FakeRunner(), copier=lambda t, c: None)
    assert exc.value.step == "Locate"


def test_run_pack_clipboard_fallback(tmp_path):
    def broken(text, cmd):
        raise ClipboardUnavailable("no clipboard")

    outcome = pack.run_pack(str(tmp_path), SETTINGS, runner=FakeRunner(produce="p.tgz"), copier=broken)
    assert outcome.copied is False
    assert outcome.clipboard_error == "no clipboard"
    assert outcome.archive.name == "p.tgz"


def test_run_pack_invalid_directory(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        pack.run_pack(str(tmp_path / "missing"), SETTINGS, runner=FakeRunner(), copier=lambda t, c: None)


def test_copy_to_clipboard_missing_binary():
    with pytest.raises(ClipboardUnavailable):
        clipboard.copy_to_clipboard("x", ("definitely-not-a-clipboard-binary-ely",))


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX tools")
def test_copy_to_clipboard_pipes_text(monkeypatch):
    seen = {}

    def fake_run(args, **kwargs):
        seen["args"] = args
        seen["input"] = kwargs.get("input")
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)
    clipboard.copy_to_clipboard("/tmp/pkg.tgz", ("pbcopy",))
    assert seen == {"args": ["pbcopy"], "input": "/tmp/pkg.tgz"}


def test_copy_to_clipboard_nonzero_exit(monkeypatch):
    def fake_run(args, **kwargs):
        raise subprocess.CalledProcessError(1, args, output="", stderr="denied")

    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)
    with pytest.raises(ClipboardUnavailable) as exc:
        clipboard.copy_to_clipboard("x", ("pbcopy",))
    assert "denied" in str(exc.value)
