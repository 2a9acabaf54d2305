"""Document tree dataclasses - the parsed form of an nginx configuration.

Ownership flows top-down (Document -> HTTP -> Server -> Location, and
HTTP -> Upstream). Back-references to the owning block are weak references,
so a child never keeps its parent alive.
"""

import weakref
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from nginx_reader.model.properties import ConditionalProperties, Properties


@dataclass(frozen=True)
class _Child:
    """Mixin for blocks that keep a non-owning reference to their parent."""

    _parent_ref: Any = field(default=None, init=False, repr=False, compare=False)

    def _attach(self, parent: Any) -> None:
        object.__setattr__(self, "_parent_ref", weakref.ref(parent))

    @property
    def parent(self) -> Any:
        """The owning block, or None if it is detached or no longer alive."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()


@dataclass(frozen=True)
class Location(_Child):
    """Nginx location block (``location [modifier] uri { ... }``)."""

    uri: str = ""
    modifier: str = ""  # =, ~, ~*, ^~ or "" for a plain prefix match
    properties: ConditionalProperties = field(default_factory=ConditionalProperties)


@dataclass(frozen=True)
class Server(_Child):
    """Nginx server block."""

    properties: ConditionalProperties = field(default_factory=ConditionalProperties)
    locations: tuple[Location, ...] = ()

    def __post_init__(self) -> None:
        for location in self.locations:
            location._attach(self)

    def names(self) -> list[str]:
        """Get the server_name tokens."""
        return self.properties.get("server_name").split()

    def protocols(self) -> list[str]:
        """Get the listen tokens (ports, addresses and flags like ssl/http2)."""
        return self.properties.get("listen").split()


@dataclass(frozen=True)
class Upstream(_Child):
    """Nginx upstream block."""

    name: str = ""
    properties: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class HTTP:
    """Nginx http block with its servers and upstreams."""

    properties: Properties = field(default_factory=Properties)
    types: Properties | None = None
    servers: tuple[Server, ...] = ()
    upstreams: Mapping[str, Upstream] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "upstreams", MappingProxyType(dict(self.upstreams)))
        for server in self.servers:
            server._attach(self)
        for upstream in self.upstreams.values():
            upstream._attach(self)

    def servers_num(self) -> int:
        from nginx_reader.queries import servers_num

        return servers_num(self)

    def servers_list(self) -> list[str]:
        from nginx_reader.queries import servers_list

        return servers_list(self)

    def find_server(self, name: str, protocol: str) -> Server | None:
        from nginx_reader.queries import find_server

        return find_server(self, name, protocol)


@dataclass(frozen=True)
class Document:
    """Root of a parsed configuration.

    Attributes:
        root: Base directory used to resolve relative includes.
        file: Absolute path of the main configuration file.
        core: Directives outside of any block (user, worker_processes, ...).
        events: Directives of the events block, None if absent.
        stream: Directives of the stream block, None if absent.
        http: The http block, None if absent.
    """

    root: str = ""
    file: str = ""
    core: Properties = field(default_factory=Properties)
    events: Properties | None = None
    stream: Properties | None = None
    http: HTTP | None = None

    def __str__(self) -> str:
        return f"<{self.file}>"
