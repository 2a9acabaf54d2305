"""Model package - The immutable document tree produced by the parser."""

from nginx_reader.model.config import HTTP, Document, Location, Server, Upstream
from nginx_reader.model.properties import (
    UNCONDITIONAL,
    ConditionalProperties,
    ConditionalProperty,
    Properties,
)

__all__ = [
    "ConditionalProperties",
    "ConditionalProperty",
    "Document",
    "HTTP",
    "Location",
    "Properties",
    "Server",
    "UNCONDITIONAL",
    "Upstream",
]
