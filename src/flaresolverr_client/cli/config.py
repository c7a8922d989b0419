"""CLI: flaresolverr config show|set"""

from typing import Optional

import click
from rich.console import Console

console = Console()


@click.group()
def config():
    """Saved defaults (~/.flaresolverr/config.json)."""


@config.command("show")
def config_show():
    """Show the effective configuration."""
    from flaresolverr_client.cli.main import CONFIG_FILE, _effective_config
    cfg = _effective_config()
    console.print(f"base_url: {cfg['base_url']}")
    console.print(f"max_timeout: {cfg['max_timeout']} ms")
    console.print(f"[dim]config file: {CONFIG_FILE}[/dim]")


@config.command("set")
@click.option("--base-url", default=None, help="FlareSolverr base URL")
@click.option("--max-timeout", type=click.IntRange(min=1), default=None, help="Default maxTimeout (ms)")
def config_set(base_url: Optional[str], max_timeout: Optional[int]):
    """Save defaults used when no option or environment variable is given."""
    from flaresolverr_client.cli.main import _load_config, _save_config
    if base_url is None and max_timeout is None:
        raise click.UsageError("Nothing to set. Pass --base-url and/or --max-timeout.")
    cfg = _load_config()
    if base_url is not None:
        cfg["base_url"] = base_url
    if max_timeout is not None:
        cfg["max_timeout"] = max_timeout
    _save_config(cfg)
    console.print("[green]Configuration saved.[/green]")
