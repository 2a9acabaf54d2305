"""Recursive Block Parser - builds the document tree from normalized statements.

Every grammar method takes a cursor into the statement list and returns the
cursor past the block it consumed together with the node it built. Which
blocks may appear where is described by ``ALLOWED_CHILDREN``.
"""

import logging
from collections.abc import Callable
from enum import Enum

from nginx_reader.errors import (
    MissingBlockNameError,
    UnexpectedBlockEndError,
    UnsupportedBlockError,
    UnterminatedBlockError,
)
from nginx_reader.model.config import HTTP, Document, Location, Server, Upstream
from nginx_reader.model.properties import (
    UNCONDITIONAL,
    ConditionalProperties,
    ConditionalProperty,
    Properties,
)
from nginx_reader.parser.scanner import (
    is_block_end,
    is_block_start,
    parse_block_header,
    parse_condition,
    parse_property,
)

logger = logging.getLogger(__name__)


class BlockKind(Enum):
    """Block kinds understood by the parser."""

    CORE = "config body"
    EVENTS = "events"
    STREAM = "stream"
    HTTP = "http"
    TYPES = "types"
    SERVER = "server"
    LOCATION = "location"
    UPSTREAM = "upstream"
    IF = "if"

    @property
    def label(self) -> str:
        if self is BlockKind.CORE:
            return self.value
        return f"{self.value} block"


ALLOWED_CHILDREN: dict[BlockKind, frozenset[BlockKind]] = {
    BlockKind.CORE: frozenset({BlockKind.EVENTS, BlockKind.STREAM, BlockKind.HTTP}),
    BlockKind.HTTP: frozenset({BlockKind.TYPES, BlockKind.SERVER, BlockKind.UPSTREAM}),
    BlockKind.SERVER: frozenset({BlockKind.IF, BlockKind.LOCATION}),
    BlockKind.LOCATION: frozenset({BlockKind.IF}),
}

BLOCK_NAMES = {kind.value: kind for kind in BlockKind if kind is not BlockKind.CORE}


class _PropertiesBuilder:
    """Accumulates directives of a block before it is frozen."""

    def __init__(self) -> None:
        self.data: dict[str, list[str]] = {}

    def add(self, name: str, value: str) -> None:
        self.data.setdefault(name, []).append(value)

    def build(self) -> Properties:
        return Properties(self.data)


class _ConditionalBuilder:
    """Accumulates directives of a server/location together with its if-conditions."""

    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.data: dict[str, list[ConditionalProperty]] = {}

    def add_condition(self, condition: str) -> int:
        self.conditions.append(condition)
        return len(self.conditions) - 1

    def add(self, name: str, value: str, condition_id: int = UNCONDITIONAL) -> None:
        self.data.setdefault(name, []).append(ConditionalProperty(condition_id, value))

    def build(self) -> ConditionalProperties:
        return ConditionalProperties(self.conditions, self.data)


class BlockParser:
    """Parser for a normalized statement sequence.

    Example:
        parser = BlockParser(["worker_processes 4;", "events {", "}"])
        document = parser.parse_config()
    """

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines

    def parse_config(self) -> Document:
        """Parse a whole configuration (core directives and top-level blocks)."""
        core = _PropertiesBuilder()
        blocks: dict[BlockKind, object] = {}

        def on_block(kind: BlockKind, args: list[str], cursor: int) -> int:
            if kind is BlockKind.HTTP:
                cursor, blocks[kind] = self.parse_http_block(cursor)
            else:
                cursor, blocks[kind] = self.parse_simple_block(cursor, kind)
            return cursor

        self._parse_body(0, BlockKind.CORE, core.add, on_block, closed=False)

        return Document(
            core=core.build(),
            events=blocks.get(BlockKind.EVENTS),
            stream=blocks.get(BlockKind.STREAM),
            http=blocks.get(BlockKind.HTTP),
        )

    def parse_fragment(self) -> HTTP:
        """Parse the whole sequence as the body of an http block."""
        return self._parse_http(0, closed=False)[1]

    def parse_simple_block(
        self, cursor: int, kind: BlockKind = BlockKind.EVENTS
    ) -> tuple[int, Properties]:
        """Parse a block made of flat directives only (events, stream, types, upstream)."""
        props = _PropertiesBuilder()
        cursor = self._parse_body(cursor, kind, props.add)
        return cursor, props.build()

    def parse_http_block(self, cursor: int) -> tuple[int, HTTP]:
        return self._parse_http(cursor, closed=True)

    def _parse_http(self, cursor: int, closed: bool) -> tuple[int, HTTP]:
        props = _PropertiesBuilder()
        types: list[Properties] = []
        servers: list[Server] = []
        upstreams: dict[str, Upstream] = {}

        def on_block(kind: BlockKind, args: list[str], cursor: int) -> int:
            if kind is BlockKind.TYPES:
                cursor, block = self.parse_simple_block(cursor, kind)
                types.append(block)
            elif kind is BlockKind.SERVER:
                cursor, server = self.parse_server_block(cursor)
                servers.append(server)
            else:
                if not args:
                    raise MissingBlockNameError(kind.value)
                name = args[0]
                cursor, block = self.parse_simple_block(cursor, kind)
                if name in upstreams:
                    logger.debug("Upstream %s is declared twice, keeping the last one", name)
                upstreams[name] = Upstream(name=name, properties=block)
            return cursor

        cursor = self._parse_body(cursor, BlockKind.HTTP, props.add, on_block, closed=closed)

        http = HTTP(
            properties=props.build(),
            types=types[-1] if types else None,
            servers=tuple(servers),
            upstreams=upstreams,
        )
        return cursor, http

    def parse_server_block(self, cursor: int) -> tuple[int, Server]:
        props = _ConditionalBuilder()
        locations: list[Location] = []

        def on_block(kind: BlockKind, args: list[str], cursor: int) -> int:
            if kind is BlockKind.IF:
                return self.parse_if_block(cursor, props)

            cursor, location = self.parse_location_block(cursor, args)
            locations.append(location)
            return cursor

        cursor = self._parse_body(cursor, BlockKind.SERVER, props.add, on_block)
        return cursor, Server(properties=props.build(), locations=tuple(locations))

    def parse_location_block(
        self, cursor: int, args: list[str] | None = None
    ) -> tuple[int, Location]:
        """Parse a location body; ``args`` are the header tokens after ``location``."""
        uri, modifier = parse_location_args(args) if args is not None else ("", "")
        props = _ConditionalBuilder()

        def on_block(kind: BlockKind, block_args: list[str], cursor: int) -> int:
            return self.parse_if_block(cursor, props)

        cursor = self._parse_body(cursor, BlockKind.LOCATION, props.add, on_block)
        return cursor, Location(uri=uri, modifier=modifier, properties=props.build())

    def parse_if_block(self, cursor: int, props: _ConditionalBuilder) -> int:
        """Parse an if body into the owning block's conditional store.

        The block start line is the statement right before ``cursor``.
        """
        condition_id = props.add_condition(parse_condition(self.lines[cursor - 1]))

        def add(name: str, value: str) -> None:
            props.add(name, value, condition_id)

        return self._parse_body(cursor, BlockKind.IF, add)

    def _parse_body(
        self,
        cursor: int,
        context: BlockKind,
        on_property: Callable[[str, str], None],
        on_block: Callable[[BlockKind, list[str], int], int] | None = None,
        closed: bool = True,
    ) -> int:
        """Walk the statements of one block body.

        Args:
            cursor: Index of the first statement of the body.
            context: Kind of the block being parsed.
            on_property: Called with (name, value) for every directive.
            on_block: Called with (kind, args, cursor) for every nested block;
                returns the cursor past that block. Flat blocks pass None,
                their context allows no nested blocks at all.
            closed: Whether the body must end with a block end. When False,
                the body runs to the end of input and a block end is an error.

        Returns:
            Cursor past the body (and past its block end if closed).
        """
        while cursor < len(self.lines):
            line = self.lines[cursor]

            if is_block_end(line):
                if not closed:
                    raise UnexpectedBlockEndError(cursor + 1)
                return cursor + 1

            if is_block_start(line):
                kind, args = self._block_kind(line, context)
                if on_block is None:
                    raise UnsupportedBlockError(kind.value, context.label)
                cursor = on_block(kind, args, cursor + 1)
                continue

            on_property(*parse_property(line))
            cursor += 1

        if closed:
            raise UnterminatedBlockError(context.value)
        return cursor

    @staticmethod
    def _block_kind(line: str, context: BlockKind) -> tuple[BlockKind, list[str]]:
        name, args = parse_block_header(line)
        kind = BLOCK_NAMES.get(name)

        if kind is None or kind not in ALLOWED_CHILDREN.get(context, ()):
            raise UnsupportedBlockError(name, context.label)
        return kind, args


def parse_location_args(args: list[str]) -> tuple[str, str]:
    """Split location header arguments into (uri, modifier).

    One argument is a bare URI, two or more are a modifier followed by the URI.
    """
    if not args:
        raise MissingBlockNameError("location")
    if len(args) == 1:
        return args[0], ""
    return " ".join(args[1:]), args[0]
