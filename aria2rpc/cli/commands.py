"""CLI commands for aria2rpc.

Entry point ``aria2rpc``: one-shot calls over HTTP, multicalls, method and
notification listings, and a WebSocket notification listener.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from aria2rpc import __version__
from aria2rpc.aria2 import Aria2Client
from aria2rpc.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from aria2rpc.config.loader import load_config
from aria2rpc.rpc.errors import RpcError, TransportError
from aria2rpc.rpc.events import NotificationEvent

app = typer.Typer(
    name="aria2rpc",
    help="aria2rpc - talk to an aria2 daemon over JSON-RPC",
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"aria2rpc v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="RPC host"),
    port: Optional[int] = typer.Option(None, "--port", help="RPC port"),
    secure: Optional[bool] = typer.Option(None, "--secure/--no-secure", help="Use wss:// and https://"),
    path: Optional[str] = typer.Option(None, "--path", help="RPC path"),
    secret: Optional[str] = typer.Option(None, "--secret", help="aria2 --rpc-secret"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file (JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
    log_file: bool = typer.Option(False, "--log-file", help="Also log to ~/.aria2rpc/logs/aria2rpc.log"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    configure_console_logging(verbose)
    if log_file:
        ensure_rotating_log_file("aria2rpc", level="DEBUG" if verbose else "INFO")
    try:
        ctx.obj = load_config(config_path, host=host, port=port, secure=secure, path=path, secret=secret)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2)


def _make_client(ctx: typer.Context) -> Aria2Client:
    return Aria2Client(ctx.obj)


def _parse_param(raw: str) -> Any:
    """JSON when it parses, otherwise the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _run(factory: Callable[[], Awaitable[Any]]) -> Any:
    try:
        return asyncio.run(factory())
    except RpcError as e:
        console.print(f"[red]{escape(str(e.code))}: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except TransportError as e:
        console.print(f"[red]Transport error:[/red] {escape(str(e))}")
        raise typer.Exit(2)


def _print_json(value: Any) -> None:
    console.print_json(json.dumps(value, ensure_ascii=False))


@app.command()
def call(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="Method name, e.g. getVersion or aria2.tellActive"),
    params: Optional[list[str]] = typer.Argument(None, help="Positional params (JSON where parseable)"),
) -> None:
    """Call one method and print its result."""
    parsed = [_parse_param(p) for p in params or []]

    async def _go() -> Any:
        client = _make_client(ctx)
        return await client.call(method, *parsed)

    _print_json(_run(_go))


@app.command()
def multicall(
    ctx: typer.Context,
    calls_json: str = typer.Argument(..., help='JSON array of [method, ...params], e.g. \'[["getVersion"]]\''),
) -> None:
    """Run several calls as one system.multicall and print the result list."""
    try:
        calls = json.loads(calls_json)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid calls JSON:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    if not isinstance(calls, list) or not all(isinstance(c, list) and c for c in calls):
        console.print("[red]Calls must be a JSON array of non-empty arrays[/red]")
        raise typer.Exit(2)

    async def _go() -> Any:
        client = _make_client(ctx)
        return await client.multicall(calls)

    _print_json(_run(_go))


def _print_names(title: str, names: list[str]) -> None:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)


@app.command()
def methods(ctx: typer.Context) -> None:
    """List the methods the server exposes (namespace stripped)."""

    async def _go() -> list[str]:
        return await _make_client(ctx).list_methods()

    _print_names("Methods", _run(_go))


@app.command()
def notifications(ctx: typer.Context) -> None:
    """List the notifications the server emits (namespace stripped)."""

    async def _go() -> list[str]:
        return await _make_client(ctx).list_notifications()

    _print_names("Notifications", _run(_go))


@app.command()
def listen(
    ctx: typer.Context,
    seconds: float = typer.Option(0.0, "--seconds", help="Stop after N seconds (0 = until Ctrl+C)"),
) -> None:
    """Open the WebSocket and print notifications as they arrive."""

    async def _go() -> None:
        client = _make_client(ctx)
        last: list[Any] = []

        def _print(event: NotificationEvent) -> None:
            # Name variants of one notification share the same params list.
            if last and last[0] is event.params:
                return
            last[:] = [event.params]
            params = escape(json.dumps(event.params, ensure_ascii=False))
            console.print(f"[green]{escape(event.name)}[/green] {params}")

        client.events.subscribe(NotificationEvent, _print)
        await client.open()
        console.print(f"[dim]Listening on {client.transport.websocket.url}[/dim]")
        try:
            if seconds > 0:
                await asyncio.sleep(seconds)
            else:
                await asyncio.Event().wait()
        finally:
            await client.close()

    try:
        _run(_go)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped[/dim]")


if __name__ == "__main__":
    app()
