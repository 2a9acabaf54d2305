"""
Click-based CLI for nginx-reader.

This module only ORCHESTRATES. Parsing and lookups live in the library:
- Loads settings
- Invokes the parser
- Formats output
"""

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from nginx_reader import __version__
from nginx_reader.config import ReaderSettings, load_settings
from nginx_reader.errors import NginxReaderError, ValueFormatError
from nginx_reader.model.config import HTTP, Server
from nginx_reader.model.properties import UNCONDITIONAL
from nginx_reader.parser.nginx_conf import NginxConfigParser
from nginx_reader.queries import find_server, servers_list, servers_num

console = Console()

VALUE_TYPES = ("str", "bool", "int", "size", "buf", "time")


@click.group()
@click.version_option(version=__version__, prog_name="nginx-reader")
@click.option("--settings", "-s", type=click.Path(), help="Path to settings YAML file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, settings: str | None, verbose: bool) -> None:
    """nginx-reader: inspect nginx configuration files."""
    ctx.ensure_object(dict)
    try:
        cfg = load_settings(settings)
    except NginxReaderError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    logging.basicConfig(
        level="DEBUG" if verbose else cfg.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    ctx.obj["settings"] = cfg


def _settings(ctx: click.Context) -> ReaderSettings:
    return ctx.obj.get("settings") or ReaderSettings()


def _load_http(ctx: click.Context, config: str, part: bool) -> HTTP | None:
    """Parse a config (or http fragment) and return its http block."""
    parser = NginxConfigParser(_settings(ctx))
    try:
        if part:
            return parser.parse_part(config)
        return parser.parse_file(config).http
    except NginxReaderError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        sys.exit(1)


@main.command()
@click.argument("config", type=click.Path())
@click.option("--part", is_flag=True, help="CONFIG holds only an http block body")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def servers(ctx: click.Context, config: str, part: bool, as_json: bool) -> None:
    """List virtual hosts as name:protocol."""
    hosts = servers_list(_load_http(ctx, config, part))

    if as_json:
        console.print(json.dumps(hosts, indent=2), markup=False, highlight=False)
        return

    table = Table(title=f"Servers in {config}")
    table.add_column("Name", style="cyan")
    table.add_column("Protocol", style="green")
    for host in hosts:
        name, _, protocol = host.rpartition(":")
        table.add_row(name, protocol)
    console.print(table)


@main.command()
@click.argument("config", type=click.Path())
@click.argument("name")
@click.option("--protocol", "-p", default="http", show_default=True, help="http, https, ssl, http2, spdy or a port")
@click.option("--part", is_flag=True, help="CONFIG holds only an http block body")
@click.pass_context
def find(ctx: click.Context, config: str, name: str, protocol: str, part: bool) -> None:
    """Show the server block serving NAME over PROTOCOL."""
    server = find_server(_load_http(ctx, config, part), name, protocol)
    if server is None:
        console.print(f"[yellow]No server found for {name} ({protocol})[/]")
        sys.exit(1)

    _print_server(server)


def _print_server(server: Server) -> None:
    props = server.properties
    table = Table(title=" ".join(server.names()) or "(unnamed server)")
    table.add_column("Directive", style="cyan")
    table.add_column("Value")
    table.add_column("Condition", style="magenta")

    for directive, values in props.data.items():
        for prop in values:
            condition = "" if prop.condition_id == UNCONDITIONAL else props.conditions[prop.condition_id]
            table.add_row(directive, prop.value, condition)
    console.print(table)

    for location in server.locations:
        header = f"{location.modifier} {location.uri}".strip()
        console.print(f"  location [bold]{escape(header)}[/] ({len(location.properties)} directives)")


@main.command()
@click.argument("config", type=click.Path())
@click.argument("directive")
@click.option("--as", "value_type", type=click.Choice(VALUE_TYPES), default="str", show_default=True)
@click.option("--server", "server_name", default=None, help="Read from this server instead of the http block")
@click.option("--protocol", "-p", default="http", show_default=True)
@click.option("--part", is_flag=True, help="CONFIG holds only an http block body")
@click.pass_context
def get(
    ctx: click.Context,
    config: str,
    directive: str,
    value_type: str,
    server_name: str | None,
    protocol: str,
    part: bool,
) -> None:
    """Print the value of DIRECTIVE, optionally interpreted as a typed value."""
    http = _load_http(ctx, config, part)
    if http is None:
        console.print("[yellow]Configuration has no http block[/]")
        sys.exit(1)

    props = http.properties
    if server_name:
        server = find_server(http, server_name, protocol)
        if server is None:
            console.print(f"[yellow]No server found for {server_name} ({protocol})[/]")
            sys.exit(1)
        props = server.properties

    try:
        if value_type == "str":
            value = props.get(directive)
        elif value_type == "bool":
            value = props.get_bool(directive)
        elif value_type == "int":
            value = props.get_int(directive)
        elif value_type == "size":
            value = props.get_size(directive)
        elif value_type == "buf":
            count, size = props.get_buf(directive)
            value = f"{count} x {size}"
        else:
            value = props.get_time(directive)
    except ValueFormatError as e:
        console.print(f"[bold red]Error:[/] {escape(directive)}: {escape(str(e))}")
        sys.exit(1)

    console.print(str(value), markup=False, highlight=False)


@main.command()
@click.argument("config", type=click.Path())
@click.pass_context
def summary(ctx: click.Context, config: str) -> None:
    """Show what a configuration file contains."""
    parser = NginxConfigParser(_settings(ctx))
    try:
        document = parser.parse_file(config)
    except NginxReaderError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    http = document.http
    table = Table(title=str(document))
    table.add_column("Item", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Core directives", str(len(document.core)))
    table.add_row("Events block", "yes" if document.events is not None else "no")
    table.add_row("Stream block", "yes" if document.stream is not None else "no")
    table.add_row("HTTP block", "yes" if http is not None else "no")
    table.add_row("Servers", str(servers_num(http)))
    table.add_row("Locations", str(sum(len(s.locations) for s in http.servers) if http else 0))
    table.add_row("Upstreams", str(len(http.upstreams) if http else 0))
    console.print(table)


if __name__ == "__main__":
    main()
