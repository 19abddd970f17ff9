"""Command-line front end: one sub-command per analysis check.

Each command takes a single input, normalizes and validates it locally,
calls the API through ``AnalysisClient`` and renders the returned fields.

    site-analysis dns example.com --type MX
    site-analysis headers example.com --json
"""

import argparse
import asyncio
import json
import sys
from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from site_analysis.client import AnalysisClient
from site_analysis.config import settings
from site_analysis.constants import APP_DESCRIPTION, APP_NAME, APP_VERSION, ERROR_MESSAGES
from site_analysis.dto import APIResponse, DNSRecordType
from site_analysis.validators import is_valid_domain, is_valid_url, normalize_domain, normalize_url

console = Console()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2


def prepare_input(kind: str, value: str) -> str | None:
    """Normalize a domain or URL input, None if it is malformed."""
    if kind == "domain":
        domain = normalize_domain(value)
        return domain if is_valid_domain(domain) else None
    url = normalize_url(value)
    return url if is_valid_url(url) else None


def _field_table(title: str, data: dict[str, Any], fields: list[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    for key, label in fields:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value) or "-"
        table.add_row(label, escape(str(value)))
    return table


def render_dns(data: dict[str, Any]) -> None:
    table = Table(title=f"{data.get('recordType')} records for {data.get('domain')}", header_style="bold cyan")
    for column in ("Name", "Type", "TTL", "Data"):
        table.add_column(column)
    for record in data.get("records", []):
        table.add_row(
            escape(str(record.get("name", ""))),
            str(record.get("type")),
            str(record.get("TTL", "")),
            escape(str(record.get("data", ""))),
        )
    if not data.get("records"):
        console.print("[yellow]No records found[/yellow]")
        return
    console.print(table)


def render_whois(data: dict[str, Any]) -> None:
    console.print(
        _field_table(
            f"WHOIS for {data.get('domain')}",
            data,
            [
                ("registrar", "Registrar"),
                ("registrantOrganization", "Registrant"),
                ("registrationDate", "Registered"),
                ("expirationDate", "Expires"),
                ("updatedDate", "Updated"),
                ("nameServers", "Name servers"),
                ("status", "Status"),
            ],
        )
    )


def render_ssl(data: dict[str, Any]) -> None:
    valid = "[green]yes[/green]" if data.get("valid") else "[red]no[/red]"
    console.print(f"Reachable over HTTPS: {valid}")
    console.print(
        _field_table(
            f"Certificate for {data.get('domain')}",
            data,
            [
                ("issuer", "Issuer"),
                ("subject", "Subject"),
                ("validFrom", "Valid from"),
                ("validTo", "Valid to"),
                ("daysRemaining", "Days remaining"),
                ("protocol", "Protocol"),
                ("cipher", "Cipher"),
            ],
        )
    )


def render_security(data: dict[str, Any]) -> None:
    console.print(Panel(f"Security score: [bold]{data.get('securityScore')}[/bold]/100", expand=False))
    console.print(
        _field_table(
            data.get("url", ""),
            data,
            [("https", "HTTPS"), ("mixedContent", "Mixed content")],
        )
    )


def render_performance(data: dict[str, Any]) -> None:
    console.print(
        _field_table(
            f"Performance of {data.get('url')}",
            data,
            [
                ("loadTime", "Load time (ms)"),
                ("contentSize", "Content size (bytes)"),
                ("statusCode", "Status code"),
                ("redirects", "Redirects"),
            ],
        )
    )


def render_headers(data: dict[str, Any]) -> None:
    console.print(Panel(f"Security score: [bold]{data.get('securityScore')}[/bold]/100", expand=False))
    table = Table(title=f"Security headers for {data.get('url')}", header_style="bold cyan")
    table.add_column("Header")
    table.add_column("Present")
    table.add_column("Value / recommendation")
    for header in data.get("securityHeaders", []):
        present = header.get("present")
        table.add_row(
            header.get("name", ""),
            "[green]yes[/green]" if present else "[red]no[/red]",
            escape(header.get("value") if present else header.get("recommendation", "")),
        )
    console.print(table)


# name -> (input kind, help text, renderer)
COMMANDS: dict[str, tuple[str, str, Callable[[dict[str, Any]], None]]] = {
    "dns": ("domain", "Look up DNS records", render_dns),
    "whois": ("domain", "Look up WHOIS (RDAP) registration data", render_whois),
    "ssl": ("domain", "Check the SSL/TLS certificate", render_ssl),
    "security": ("url", "Score basic security heuristics", render_security),
    "performance": ("url", "Measure page load time", render_performance),
    "headers": ("url", "Analyze HTTP security headers", render_headers),
}


async def call_check(client: AnalysisClient, command: str, value: str, record_type: str) -> APIResponse:
    if command == "dns":
        return await client.lookup_dns(value, record_type)
    if command == "whois":
        return await client.lookup_whois(value)
    if command == "ssl":
        return await client.check_ssl(value)
    if command == "security":
        return await client.check_security(value)
    if command == "performance":
        return await client.check_performance(value)
    return await client.analyze_headers(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="site-analysis", description=f"{APP_NAME}: {APP_DESCRIPTION}")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("--api-url", default=settings.api_base_url, help="API base URL (default: %(default)s)")
    parser.add_argument("--json", action="store_true", help="Print the raw response envelope")

    # Same options after the sub-command; SUPPRESS keeps a value given before it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--api-url", default=argparse.SUPPRESS, help="API base URL")
    common.add_argument("--json", action="store_true", default=argparse.SUPPRESS, help="Print the raw response envelope")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (kind, help_text, _) in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text, parents=[common])
        sub.add_argument(kind, help="Domain name, e.g. example.com" if kind == "domain" else "URL, e.g. https://example.com")
        if name == "dns":
            sub.add_argument(
                "--type",
                dest="record_type",
                default=DNSRecordType.A.value,
                choices=[t.value for t in DNSRecordType],
                type=str.upper,
                help="Record type (default: %(default)s)",
            )
    return parser


async def run(args: argparse.Namespace) -> int:
    kind, _, renderer = COMMANDS[args.command]
    value = prepare_input(kind, getattr(args, kind))
    if value is None:
        key = "invalid_domain" if kind == "domain" else "invalid_url"
        console.print(f"[red]{ERROR_MESSAGES[key]}[/red]")
        return EXIT_INVALID_INPUT

    async with AnalysisClient(args.api_url) as client:
        with console.status(f"Running {args.command} check for {value}..."):
            response = await call_check(client, args.command, value, getattr(args, "record_type", "A"))

    if args.json:
        console.print_json(json.dumps(response.to_wire()))
        return EXIT_OK if response.success else EXIT_FAILED

    if not response.success:
        message = response.error.message if response.error else ERROR_MESSAGES["generic_error"]
        console.print(f"[red]{escape(message)}[/red]")
        return EXIT_FAILED

    renderer(response.data or {})
    if response.meta and response.meta.cached:
        console.print("[dim]Served from cache[/dim]")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
