"""Quote-aware statement scanning.

Braces, terminators and comment markers are structural only outside of
quoted strings. The scanner is a two-state machine: outside quotes, or
inside a string opened by ``"`` or ``'`` (closed only by the same quote).
A backslash escapes the next character in both states.
"""

QUOTES = ("\"", "'")

BLOCK_START = "{"
BLOCK_END = "}"
TERMINATOR = ";"
COMMENT = "#"


def scan(line: str) -> tuple[list[tuple[int, str]], bool]:
    """Scan a line for structural characters.

    Returns:
        Tuple of (unquoted characters as (index, char) pairs, whether the
        scan ended inside an open quote).
    """
    structural: list[tuple[int, str]] = []
    quote: str | None = None
    escaped = False

    for index, char in enumerate(line):
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if quote is not None:
            if char == quote:
                quote = None
            continue
        if char in QUOTES:
            quote = char
            continue
        structural.append((index, char))

    return structural, quote is not None


def _contains(line: str, marker: str) -> bool:
    structural, _ = scan(line)
    return any(char == marker for _, char in structural)


def is_block_start(line: str) -> bool:
    """Check if the line opens a block (has an unquoted ``{``)."""
    return _contains(line, BLOCK_START)


def is_block_end(line: str) -> bool:
    """Check if the line closes a block (unquoted ``}`` and no open quote)."""
    structural, open_quote = scan(line)
    return not open_quote and any(char == BLOCK_END for _, char in structural)


def is_block_part(line: str) -> bool:
    return is_block_start(line) or is_block_end(line)


def has_terminator(line: str) -> bool:
    return _contains(line, TERMINATOR)


def strip_comment(line: str) -> str:
    """Remove an inline ``#`` comment that is not inside quotes.

    Like nginx, ``#`` only starts a comment at the beginning of a token, so
    ``return 301 /page#top;`` keeps its anchor.
    """
    structural, _ = scan(line)
    for index, char in structural:
        if char != COMMENT:
            continue
        if index == 0 or line[index - 1].isspace() or line[index - 1] in ";{}":
            return line[:index].rstrip()
    return line


def collapse_spaces(line: str) -> str:
    return " ".join(line.split())


def clean_statement(line: str) -> str:
    """Trim, collapse whitespace and drop the terminator with anything after it."""
    line = collapse_spaces(strip_comment(line.strip()))

    structural, _ = scan(line)
    terminators = [index for index, char in structural if char == TERMINATOR]
    if terminators:
        line = line[: terminators[-1]].rstrip()

    return line


def parse_property(line: str) -> tuple[str, str]:
    """Split a statement into directive name and raw value.

    >>> parse_property("resolver_timeout           10s;")
    ('resolver_timeout', '10s')
    """
    name, _, value = clean_statement(line).partition(" ")
    return name, value


def parse_block_header(line: str) -> tuple[str, list[str]]:
    """Get the block name and its arguments from a block start line.

    >>> parse_block_header("location = /favicon.ico {")
    ('location', ['=', '/favicon.ico'])
    """
    header = clean_statement(line).rstrip(" {")
    if not header:
        return "", []

    name, *args = header.split()

    # "if($host = x)" has no space between the name and the condition
    name, paren, rest = name.partition("(")
    if paren:
        args.insert(0, paren + rest)

    return name, args


def parse_condition(line: str) -> str:
    """Get the condition of an ``if`` block: the text between the first
    ``(`` and the last ``)``."""
    start = line.find("(")
    end = line.rfind(")")

    if start == -1 or end <= start:
        _, args = parse_block_header(line)
        return " ".join(args)

    return line[start + 1 : end].strip()
