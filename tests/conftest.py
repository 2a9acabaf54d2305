"""Pytest configuration and fixtures for nginx-reader tests."""

import fnmatch
import textwrap
from pathlib import Path

import pytest

from nginx_reader.errors import ConfigReadError
from nginx_reader.parser.source import SourceProvider, check_glob

FIXTURES = Path(__file__).parent / "fixtures"


class MemorySource(SourceProvider):
    """In-memory file provider for normalizer tests."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = {path: textwrap.dedent(text) for path, text in files.items()}
        self.reads: list[str] = []

    def read_lines(self, path: str) -> list[str]:
        self.reads.append(path)
        if path not in self.files:
            raise ConfigReadError(f"Can't read file {path}", path)
        return self.files[path].splitlines()

    def glob(self, pattern: str) -> list[str]:
        check_glob(pattern)
        return sorted(path for path in self.files if fnmatch.fnmatch(path, pattern))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES / "webkaos"


@pytest.fixture
def webkaos_conf(fixtures_dir: Path) -> str:
    """Full configuration with three servers spread over conf.d/."""
    return str(fixtures_dir / "webkaos.conf")


@pytest.fixture
def memory_source():
    """Factory building a MemorySource from {path: text}."""
    return MemorySource


@pytest.fixture
def write_conf(tmp_path: Path):
    """Write dedented config text under tmp_path and return the file path."""

    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text))
        return str(path)

    return _write
