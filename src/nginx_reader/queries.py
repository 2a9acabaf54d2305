"""Tree-level lookups over an http block.

Every helper accepts None in place of the http block and treats it as a
configuration without servers.
"""

from nginx_reader.model.config import HTTP, Server

HTTPS_MARKERS = ("http2", "ssl", "443")

# listen token -> protocols it satisfies (a token always satisfies itself)
PROTOCOL_TABLE: dict[str, frozenset[str]] = {
    "http2": frozenset({"http2", "https"}),
    "spdy": frozenset({"spdy", "https"}),
    "ssl": frozenset({"ssl", "https"}),
    "443": frozenset({"443", "https"}),
    "80": frozenset({"80", "http"}),
}


def servers_num(http: HTTP | None) -> int:
    """Count server blocks."""
    if http is None:
        return 0
    return len(http.servers)


def servers_list(http: HTTP | None) -> list[str]:
    """List virtual hosts as ``<name>:http`` / ``<name>:https``.

    A server counts as https when its raw listen value mentions http2, ssl
    or 443 anywhere (substring match, so "8443" counts too).
    """
    result: list[str] = []
    if servers_num(http) == 0:
        return result

    for server in http.servers:
        listen = server.properties.get("listen")
        scheme = "https" if any(marker in listen for marker in HTTPS_MARKERS) else "http"
        for name in server.names():
            result.append(f"{name}:{scheme}")

    return result


def is_protocol_supported(protocols: list[str], protocol: str) -> bool:
    """Check whether any listen token satisfies the requested protocol."""
    for token in protocols:
        if token == protocol or protocol in PROTOCOL_TABLE.get(token, ()):
            return True
    return False


def find_server(http: HTTP | None, name: str, protocol: str) -> Server | None:
    """Find the first server with the given server_name that serves protocol."""
    if servers_num(http) == 0:
        return None

    for server in http.servers:
        if name in server.names() and is_protocol_supported(server.protocols(), protocol):
            return server

    return None
