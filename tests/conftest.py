"""Ensure the randlib package is importable for local pytest runs."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from randlib import seed  # noqa: E402


@pytest.fixture
def device_dir(tmp_path, monkeypatch):
    """A fake /dev holding whatever entropy files a test writes into it."""
    monkeypatch.setattr(seed.config, "DEVICE_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def fake_libc(monkeypatch):
    class FakeLibc:
        def __init__(self):
            self.value = -12345

        def rand(self):
            return self.value

    libc = FakeLibc()
    monkeypatch.setattr(seed, "_load_libc", lambda: libc)
    return libc
