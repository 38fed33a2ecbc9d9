from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from ely import probe
from ely.errors import DirectoryNotFoundError, NotADirectoryPathError


def deny_listing(monkeypatch, blocked: Path):
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.fspath(path) == str(blocked):
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(probe.os, "scandir", fake_scandir)


def test_probe_file_and_directory(make_file, tmp_path):
    f = make_file(tmp_path / "f.bin", 42)
    assert probe.probe(str(f)) == probe.ProbeResult(is_directory=False, size=42)
    assert probe.probe(str(tmp_path)).is_directory is True


def test_probe_missing_path_raises(tmp_path):
    with pytest.raises(OSError):
        probe.probe(str(tmp_path / "missing"))


def test_size_of_is_sum_of_children(make_file, tmp_path):
    make_file(tmp_path / "top.bin", 10)
    make_file(tmp_path / "a" / "one.bin", 100)
    make_file(tmp_path / "a" / "deep" / "two.bin", 50)
    make_file(tmp_path / "b" / "three.bin", 7)

    children = sum(
        probe.size_of(str(p)) if p.is_dir() else p.stat().st_size
        for p in tmp_path.iterdir()
    )
    assert probe.size_of(str(tmp_path)) == 167 == children


def test_size_of_empty_directory(tmp_path):
    assert probe.size_of(str(tmp_path)) == 0


def test_size_of_skips_unreadable_child_with_warning(make_file, tmp_path, monkeypatch, caplog):
    make_file(tmp_path / "ok" / "f.bin", 30)
    blocked = tmp_path / "locked"
    make_file(blocked / "hidden.bin", 500)
    deny_listing(monkeypatch, blocked)

    with caplog.at_level(logging.WARNING, logger="ely.probe"):
        total = probe.size_of(str(tmp_path))

    assert total == 30
    assert any(str(blocked) in rec.getMessage() for rec in caplog.records)


def test_size_of_unreadable_root_returns_zero(make_file, tmp_path, monkeypatch, caplog):
    make_file(tmp_path / "f.bin", 30)
    deny_listing(monkeypatch, tmp_path)
    with caplog.at_level(logging.WARNING, logger="ely.probe"):
        assert probe.size_of(str(tmp_path)) == 0
    assert caplog.records


def test_size_of_ignores_symlinks(make_file, tmp_path):
    target = make_file(tmp_path / "real" / "big.bin", 1000)
    try:
        os.symlink(target, tmp_path / "link.bin")
        os.symlink(tmp_path / "real", tmp_path / "linkdir")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks unavailable")
    assert probe.size_of(str(tmp_path)) == 1000


def test_has_marker(make_file, tmp_path):
    make_file(tmp_path / "pkg" / "package.json", 2)
    (tmp_path / "other").mkdir()
    assert probe.has_marker(str(tmp_path / "pkg"), "package.json")
    assert not probe.has_marker(str(tmp_path / "other"), "package.json")


def test_validate_directory(make_file, tmp_path):
    f = make_file(tmp_path / "file.txt", 1)
    assert probe.validate_directory(str(tmp_path)) == tmp_path.resolve()
    with pytest.raises(DirectoryNotFoundError):
        probe.validate_directory(str(tmp_path / "nope"))
    with pytest.raises(NotADirectoryPathError):
        probe.validate_directory(str(f))
