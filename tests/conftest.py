import sys
from pathlib import Path

import pytest

# Ensure the ely package is importable when running tests from a checkout
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def _write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def make_file():
    """Writer for `size` bytes at `path`, creating parent directories."""
    return _write_file


@pytest.fixture
def sample_tree(tmp_path):
    """root/{a/(100B), b/{c/(200B)}}"""
    root = tmp_path / "root"
    _write_file(root / "a" / "file.bin", 100)
    _write_file(root / "b" / "c" / "file.bin", 200)
    return root
