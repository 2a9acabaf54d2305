"""Tests for the quote-aware statement scanner."""

import pytest

from nginx_reader.parser.scanner import (
    clean_statement,
    has_terminator,
    is_block_end,
    is_block_start,
    parse_block_header,
    parse_condition,
    parse_property,
    strip_comment,
)


class TestBlockClassifier:
    """Block start / end detection."""

    @pytest.mark.parametrize(
        "line",
        ["server {", "location / {", "if ($k = 1) {", "location = '{' {", "types{"],
    )
    def test_block_start(self, line):
        assert is_block_start(line)
        assert not is_block_end(line)

    @pytest.mark.parametrize(
        "line",
        ["}", "  }", "} "],
    )
    def test_block_end(self, line):
        assert is_block_end(line)
        assert not is_block_start(line)

    @pytest.mark.parametrize(
        "line",
        [
            "add_header X-Brace '{';",
            'return 200 "}";',
            "set $a \"it's {here}\";",
            "return 200 \"escaped \\\" {\";",
            "listen 80;",
        ],
    )
    def test_quoted_braces_are_inert(self, line):
        assert not is_block_start(line)
        assert not is_block_end(line)

    def test_block_end_requires_closed_quotes(self):
        assert not is_block_end("} 'unterminated")

    def test_escaped_brace_outside_quotes(self):
        assert not is_block_start("location ~ ^/a\\{ ;")


class TestCleaning:
    """Comment stripping and statement cleanup."""

    def test_strip_inline_comment(self):
        assert strip_comment("  location = '{' { # TEST") == "  location = '{' {"

    def test_comment_marker_inside_quotes(self):
        assert strip_comment("return 200 '# not a comment';") == "return 200 '# not a comment';"

    def test_hash_inside_token_is_kept(self):
        assert strip_comment("return 301 /page#top;") == "return 301 /page#top;"

    def test_comment_right_after_terminator(self):
        assert strip_comment("listen 80;#main") == "listen 80;"

    def test_clean_statement(self):
        assert clean_statement("resolver_timeout           10s;") == "resolver_timeout 10s"
        assert clean_statement("  location = '{' { # TEST") == "location = '{' {"

    def test_clean_keeps_quoted_terminator(self):
        assert clean_statement("add_header X 'a;b';") == "add_header X 'a;b'"

    def test_has_terminator(self):
        assert has_terminator("listen 80;")
        assert not has_terminator("log_format main ';'")


class TestStatementParsing:
    """Property, block header and condition extraction."""

    def test_parse_property(self):
        assert parse_property("server_name a.com b.com;") == ("server_name", "a.com b.com")

    def test_parse_property_without_value(self):
        assert parse_property("ip_hash;") == ("ip_hash", "")

    def test_parse_block_header(self):
        assert parse_block_header("http {") == ("http", [])
        assert parse_block_header("upstream backend {") == ("upstream", ["backend"])
        assert parse_block_header("location ~* \\.(css|js)$ {") == (
            "location",
            ["~*", "\\.(css|js)$"],
        )

    def test_parse_block_header_without_space(self):
        assert parse_block_header("server{") == ("server", [])
        assert parse_block_header("if($host = a) {") == ("if", ["($host", "=", "a)"])

    def test_parse_condition(self):
        assert parse_condition("if ($k == 1) {") == "$k == 1"
        assert parse_condition('if ($ua ~* "(bot|crawler)") {') == '$ua ~* "(bot|crawler)"'
