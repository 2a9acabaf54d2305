"""Tests for the server lookup helpers."""

import pytest

from nginx_reader.model.config import HTTP, Server
from nginx_reader.model.properties import UNCONDITIONAL, ConditionalProperties, ConditionalProperty
from nginx_reader.queries import (
    find_server,
    is_protocol_supported,
    servers_list,
    servers_num,
)


def _server(names: str, listen: list[str]) -> Server:
    data = {
        "server_name": [ConditionalProperty(UNCONDITIONAL, names)],
        "listen": [ConditionalProperty(UNCONDITIONAL, value) for value in listen],
    }
    return Server(properties=ConditionalProperties([], data))


@pytest.fixture
def http() -> HTTP:
    return HTTP(
        servers=(
            _server("_", ["80 default_server"]),
            _server("example.com www.example.com", ["80"]),
            _server("example.com", ["443 ssl", "[::]:443 ssl"]),
            _server("api.example.com", ["8443 http2"]),
            _server("legacy.example.com", ["8080 spdy"]),
        )
    )


def test_nil_http_is_empty():
    assert servers_num(None) == 0
    assert servers_list(None) == []
    assert find_server(None, "example.com", "http") is None


def test_servers_num(http):
    assert servers_num(http) == 5
    assert http.servers_num() == 5


def test_servers_list(http):
    assert http.servers_list() == [
        "_:http",
        "example.com:http",
        "www.example.com:http",
        "example.com:https",
        "api.example.com:https",
        "legacy.example.com:http",
    ]


def test_find_server(http):
    assert http.find_server("example.com", "http") is http.servers[1]
    assert http.find_server("example.com", "https") is http.servers[2]
    assert http.find_server("www.example.com", "80") is http.servers[1]
    assert http.find_server("api.example.com", "https") is http.servers[3]
    assert http.find_server("legacy.example.com", "https") is http.servers[4]
    assert http.find_server("api.example.com", "8443") is http.servers[3]


def test_find_server_misses(http):
    assert http.find_server("unknown", "http") is None
    assert http.find_server("api.example.com", "http") is None
    assert http.find_server("example", "http") is None


@pytest.mark.parametrize(
    "token,protocol,expected",
    [
        ("http2", "http2", True),
        ("http2", "https", True),
        ("spdy", "https", True),
        ("ssl", "ssl", True),
        ("443", "https", True),
        ("80", "http", True),
        ("80", "https", False),
        ("ssl", "http", False),
        ("8080", "8080", True),
        ("8080", "http", False),
    ],
)
def test_protocol_table(token, protocol, expected):
    assert is_protocol_supported([token], protocol) is expected
