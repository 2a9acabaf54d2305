"""Nginx Configuration Parser.

Entry points that read an nginx configuration from disk and return the
document tree. Two flavours are supported:

1. ``read`` - a full configuration (core directives, events, stream, http)
2. ``read_part`` - a file that only holds the body of an http block, like the
   files usually kept in ``conf.d/``

Both either return a complete tree or raise; there are no partial results.
"""

import dataclasses
import logging
import os

from nginx_reader.config import ReaderSettings
from nginx_reader.model.config import HTTP, Document
from nginx_reader.parser.blocks import BlockParser
from nginx_reader.parser.normalizer import LineNormalizer
from nginx_reader.parser.source import FileSystemSource, SourceProvider

logger = logging.getLogger(__name__)


class NginxConfigParser:
    """Parser for nginx configuration files.

    Holds the collaborators of a parse: the settings and the source provider
    the normalizer reads files through. A parser keeps no state between
    calls, every parse builds an independent tree.
    """

    def __init__(
        self,
        settings: ReaderSettings | None = None,
        source: SourceProvider | None = None,
    ) -> None:
        self.settings = settings or ReaderSettings()
        self.source = source or FileSystemSource(encoding=self.settings.encoding)

    def parse_file(self, path: str, root: str | None = None) -> Document:
        """Parse a full configuration file.

        Args:
            path: Main configuration file.
            root: Base directory for relative includes. Defaults to the
                directory of ``path``.

        Returns:
            Document with ``root`` and ``file`` set.
        """
        file_path, root = self._locate(path, root)
        lines = self._normalize(file_path, root)

        document = self.parse_lines(lines)
        logger.debug(
            "Parsed %s: %d statements, %d servers",
            file_path,
            len(lines),
            document.http.servers_num() if document.http else 0,
        )
        return dataclasses.replace(document, root=root, file=file_path)

    def parse_part(self, path: str, root: str | None = None) -> HTTP:
        """Parse a file holding the body of an http block."""
        file_path, root = self._locate(path, root)
        lines = self._normalize(file_path, root)

        http = BlockParser(lines).parse_fragment()
        logger.debug("Parsed fragment %s: %d servers", file_path, http.servers_num())
        return http

    def parse_lines(self, lines: list[str]) -> Document:
        """Parse already normalized statements into a document."""
        return BlockParser(lines).parse_config()

    def _normalize(self, file_path: str, root: str) -> list[str]:
        normalizer = LineNormalizer(self.source, root, self.settings.max_include_depth)
        lines = normalizer.normalize(file_path)
        logger.debug("Read %d files for %s", len(normalizer.files), file_path)
        return lines

    @staticmethod
    def _locate(path: str, root: str | None) -> tuple[str, str]:
        file_path = os.path.abspath(path)
        if not root:
            root = os.path.dirname(file_path)
        return file_path, os.path.abspath(root)


def read(path: str, root: str | None = None, settings: ReaderSettings | None = None) -> Document:
    """Read and parse a full nginx configuration file."""
    return NginxConfigParser(settings).parse_file(path, root)


def read_part(path: str, root: str | None = None, settings: ReaderSettings | None = None) -> HTTP:
    """Read and parse an http-block fragment."""
    return NginxConfigParser(settings).parse_part(path, root)
