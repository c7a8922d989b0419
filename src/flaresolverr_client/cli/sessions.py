"""CLI: flaresolverr sessions list|create|destroy"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from flaresolverr_client.dispatcher import ensure_ok

console = Console()


def _get_client():
    from flaresolverr_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from flaresolverr_client.cli.main import _run
    return _run(coro)


@click.group()
def sessions():
    """Session management."""


@sessions.command("list")
@click.option("--json-output", "--json", is_flag=True)
def sessions_list(json_output):
    """List active sessions."""

    async def _list():
        async with _get_client() as client:
            result = ensure_ok(await client.list_sessions())
        if json_output:
            click.echo(json.dumps(result.sessions, indent=2))
            return
        table = Table(title=f"Sessions ({len(result.sessions)} active)")
        table.add_column("ID", style="bold")
        for sid in result.sessions:
            table.add_row(sid)
        console.print(table)

    _run(_list())


@sessions.command("create")
@click.argument("session_id", required=False)
@click.option("--proxy", default=None, help="Proxy URL for this session")
def sessions_create(session_id: Optional[str], proxy: Optional[str]):
    """Create a session (optionally with a chosen SESSION_ID)."""

    async def _create():
        async with _get_client() as client:
            with console.status("Creating session..."):
                res = ensure_ok(await client.create_session(
                    session_id, proxy={"url": proxy} if proxy else None,
                ))
        if res.is_new:
            console.print(f"[green]Session created: {res.session}[/green]")
        else:
            console.print(f"[yellow]Session already exists: {res.session}[/yellow]")

    _run(_create())


@sessions.command("destroy")
@click.argument("session_id")
def sessions_destroy(session_id):
    """Destroy a session."""

    async def _destroy():
        async with _get_client() as client:
            with console.status("Destroying..."):
                res = ensure_ok(await client.destroy_session(session_id))
        console.print(f"[green]{res.message or f'Session {session_id} destroyed.'}[/green]")

    _run(_destroy())
