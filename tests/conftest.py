"""
Shared fixtures for dupesniff tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dupesniff' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def scenario_files(temp_dir) -> Dict[str, Path]:
    """
    Creates the classification scenarios in one tree:
    - a.bin / b.bin: 1500 bytes of 0xFF each (duplicates)
    - c.bin: 2000 bytes, same first 1024 bytes as a.bin, random rest (suspect of a.bin)
    - empty.bin (0 bytes) and zeros.bin (1024 zero bytes) (empty)
    - unique.bin: unrelated content
    Names sort so that a.bin is walked first.
    """
    files = {}

    content_a = b"\xff" * 1500
    files["a"] = temp_dir / "a.bin"
    files["a"].write_bytes(content_a)
    files["b"] = temp_dir / "b.bin"
    files["b"].write_bytes(content_a)

    # Random tail without any 0xFF so the middle window of a.bin never matches
    tail = bytes(x % 255 for x in os.urandom(976))
    files["c"] = temp_dir / "c.bin"
    files["c"].write_bytes(b"\xff" * 1024 + tail)

    files["empty"] = temp_dir / "empty.bin"
    files["empty"].write_bytes(b"")
    files["zeros"] = temp_dir / "zeros.bin"
    files["zeros"].write_bytes(bytes(1024))

    files["unique"] = temp_dir / "unique.bin"
    files["unique"].write_bytes(b"unique content " * 100)

    return files
