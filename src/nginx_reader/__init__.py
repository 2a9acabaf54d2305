"""nginx-reader: parse nginx configuration files into a queryable tree."""

__version__ = "1.0.0"

from nginx_reader.errors import (
    ConfigReadError,
    ConfigSyntaxError,
    EmptyValueError,
    IncludeError,
    NginxReaderError,
    ValueFormatError,
)
from nginx_reader.model import (
    HTTP,
    ConditionalProperties,
    ConditionalProperty,
    Document,
    Location,
    Properties,
    Server,
    Upstream,
)
from nginx_reader.parser import NginxConfigParser, read, read_part

__all__ = [
    "ConditionalProperties",
    "ConditionalProperty",
    "ConfigReadError",
    "ConfigSyntaxError",
    "Document",
    "EmptyValueError",
    "HTTP",
    "IncludeError",
    "Location",
    "NginxConfigParser",
    "NginxReaderError",
    "Properties",
    "Server",
    "Upstream",
    "ValueFormatError",
    "read",
    "read_part",
]
