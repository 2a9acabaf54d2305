"""Source providers - where configuration text comes from.

The parser never touches the file system directly; it asks a provider for
the lines of a file and for the matches of an include glob.
"""

import glob
import os
from abc import ABC, abstractmethod

from nginx_reader.errors import ConfigReadError, IncludeError

GLOB_CHARS = ("*", "?", "[")


def has_glob(pattern: str) -> bool:
    return any(char in pattern for char in GLOB_CHARS)


def check_glob(pattern: str) -> None:
    """Reject patterns with an unterminated character class like ``conf.d/[a-z*``."""
    in_class = False
    for char in pattern:
        if char == "[":
            in_class = True
        elif char == "]":
            in_class = False
    if in_class:
        raise IncludeError(f"Can't read glob {pattern}: syntax error in pattern", pattern)


class SourceProvider(ABC):
    """Abstract provider of configuration file contents."""

    @abstractmethod
    def read_lines(self, path: str) -> list[str]:
        """Read a file and return its raw lines."""

    @abstractmethod
    def glob(self, pattern: str) -> list[str]:
        """Return the paths matching an include pattern, in a stable order."""


class FileSystemSource(SourceProvider):
    """Reads configuration files from the local file system."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_lines(self, path: str) -> list[str]:
        try:
            with open(path, "r", encoding=self.encoding) as f:
                return f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigReadError(f"Can't read file {path}: {e}", path) from e

    def glob(self, pattern: str) -> list[str]:
        check_glob(pattern)
        return sorted(path for path in glob.glob(pattern) if not os.path.isdir(path))
