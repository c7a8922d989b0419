"""CLI: flaresolverr index|health"""

import click
from rich.console import Console

console = Console()


def _get_client():
    from flaresolverr_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from flaresolverr_client.cli.main import _run
    return _run(coro)


@click.command("index")
def index_cmd():
    """Show service version and browser user-agent."""

    async def _index():
        async with _get_client() as client:
            info = await client.index()
        console.print(f"[green]{info.msg}[/green]")
        console.print(f"Version: {info.version}")
        console.print(f"User-Agent: [dim]{info.user_agent}[/dim]")

    _run(_index())


@click.command("health")
def health_cmd():
    """Check that the service is up."""

    async def _health():
        async with _get_client() as client:
            res = await client.health()
        console.print(f"[green]Health: {res.status.value}[/green]")

    _run(_health())
