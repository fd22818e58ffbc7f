"""Pytest configuration and fixtures for setwise tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator, Iterable

import pytest

from setwise.sources import SourceSet


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="setwise_test_"))
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_file(temp_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes bytes or lines into the temp directory."""

    def _write(name: str, content) -> Path:
        path = temp_dir / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes("".join(f"{line}\n" for line in content).encode("utf-8"))
        return path

    return _write


def _source_set(label: str, tokens: Iterable[str]) -> SourceSet:
    return SourceSet(label=label, tokens=frozenset(tokens))


@pytest.fixture
def abc_sets():
    """The a,b,c / b,c,d example pair."""
    return _source_set("a.txt", "abc"), _source_set("b.txt", "bcd")


@pytest.fixture
def overlap_sets():
    """Sets of size 5 and 4 sharing 3 tokens."""
    return (
        _source_set("a.txt", ["a", "b", "c", "d", "e"]),
        _source_set("b.txt", ["c", "d", "e", "f"]),
    )
