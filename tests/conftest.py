import pytest
from datetime import datetime
from pathlib import Path

from classfy.scanning import filesystem

FIXED_TIME = datetime(2020, 1, 2, 3, 4, 5)


class FakeHasher:
    """Deterministic hasher: fingerprints come from a content -> fingerprint table."""

    def __init__(self, table):
        self.table = table
        self.calls = []

    def compute_hash(self, path: Path) -> str:
        self.calls.append(path)
        return self.table[Path(path).read_bytes()]


@pytest.fixture
def src(tmp_path):
    """Returns an empty source directory."""
    d = tmp_path / "src"
    d.mkdir()
    return d

@pytest.fixture
def dest(tmp_path):
    """Returns a destination path that does not exist yet."""
    return tmp_path / "dest"

@pytest.fixture
def fake_hasher():
    """Returns the FakeHasher class so tests can build one from a table."""
    return FakeHasher

@pytest.fixture
def fixed_time(monkeypatch):
    """Pins every file timestamp so candidate names are predictable."""
    monkeypatch.setattr(filesystem, "file_timestamp", lambda st: FIXED_TIME)
    return FIXED_TIME
