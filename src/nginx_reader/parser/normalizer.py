"""Line Normalizer - turns config files into a flat list of statements.

Comments and blank lines are dropped, whitespace is collapsed, statements
spread over several lines are joined, and include directives are replaced
by the normalized contents of the files they point to.
"""

import logging
import os

from nginx_reader.errors import IncludeError
from nginx_reader.parser.scanner import (
    COMMENT,
    collapse_spaces,
    has_terminator,
    is_block_part,
    parse_property,
    strip_comment,
)
from nginx_reader.parser.source import SourceProvider, has_glob

logger = logging.getLogger(__name__)

DEFAULT_MAX_INCLUDE_DEPTH = 32


class LineNormalizer:
    """Produces the statement sequence consumed by the block parser.

    Relative include paths are resolved against ``root``, the directory of
    the main configuration file, the same way nginx resolves them against
    its configuration prefix.
    """

    def __init__(
        self,
        source: SourceProvider,
        root: str,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    ) -> None:
        self.source = source
        self.root = root
        self.max_include_depth = max_include_depth
        self.files: list[str] = []  # every file read, in reading order
        self._stack: list[str] = []

    def normalize(self, path: str) -> list[str]:
        """Read a file (with all its includes) as normalized statements."""
        path = self._resolve(path)

        if path in self._stack:
            chain = " -> ".join(self._stack + [path])
            raise IncludeError(f"Include cycle detected: {chain}", path)
        if len(self._stack) >= self.max_include_depth:
            raise IncludeError(
                f"Include depth limit ({self.max_include_depth}) exceeded at {path}", path
            )

        self._stack.append(path)
        try:
            lines = self.source.read_lines(path)
            self.files.append(path)
            return self._normalize_lines(lines)
        finally:
            self._stack.pop()

    def _normalize_lines(self, lines: list[str]) -> list[str]:
        data: list[str] = []
        pending: list[str] = []

        for raw in lines:
            line = raw.strip()

            if not line or line.startswith(COMMENT):
                continue

            line = collapse_spaces(strip_comment(line))
            if not line:
                continue

            # "prop value" without ";" continues on the next line
            if not has_terminator(line) and not is_block_part(line):
                pending.append(line)
                continue

            if pending:
                pending.append(line)
                line = " ".join(pending)
                pending = []
            self._emit(line, data)

        if pending:
            self._emit(" ".join(pending), data)

        return data

    def _emit(self, statement: str, data: list[str]) -> None:
        if self._is_include(statement):
            data.extend(self._include(statement))
        else:
            data.append(statement)

    @staticmethod
    def _is_include(line: str) -> bool:
        name, _ = parse_property(line)
        return name == "include"

    def _include(self, line: str) -> list[str]:
        _, target = parse_property(line)
        target = target.strip("\"'")

        if not target:
            logger.debug("Skipping include without a target")
            return []

        data: list[str] = []
        for path in self._get_includes(target):
            logger.debug("Including %s", path)
            data.extend(self.normalize(path))

        return data

    def _get_includes(self, target: str) -> list[str]:
        if not has_glob(target):
            return [target]

        matches = self.source.glob(self._resolve(target))
        if not matches:
            logger.debug("Include pattern %s matched no files", target)
        return matches

    def _resolve(self, path: str) -> str:
        if os.path.isabs(path):
            return os.path.normpath(path)
        return os.path.normpath(os.path.join(self.root, path))
