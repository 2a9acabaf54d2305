"""Parser package - Converts nginx config files into the document tree.

The pipeline is: source provider -> line normalizer (includes, comments,
multi-line statements) -> block parser (recursive per-block grammars).
"""

from nginx_reader.parser.blocks import ALLOWED_CHILDREN, BlockKind, BlockParser
from nginx_reader.parser.nginx_conf import NginxConfigParser, read, read_part
from nginx_reader.parser.normalizer import LineNormalizer
from nginx_reader.parser.source import FileSystemSource, SourceProvider

__all__ = [
    "ALLOWED_CHILDREN",
    "BlockKind",
    "BlockParser",
    "FileSystemSource",
    "LineNormalizer",
    "NginxConfigParser",
    "SourceProvider",
    "read",
    "read_part",
]
