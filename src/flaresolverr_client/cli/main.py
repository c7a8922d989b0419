"""
FlareSolverr CLI — `flaresolverr` command.

Commands:
  flaresolverr index                 Service version and user-agent
  flaresolverr health                Health check
  flaresolverr get <url>             Load a page through the browser
  flaresolverr post <url> -d k=v     Submit a form through the browser
  flaresolverr sessions <cmd>        Session list/create/destroy
  flaresolverr config <cmd>          Show or save defaults
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Coroutine, Optional, TypeVar

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install flaresolverr-client[cli]")

from flaresolverr_client import __version__
from flaresolverr_client.client import AsyncFlareSolverr
from flaresolverr_client.dispatcher import DEFAULT_MAX_TIMEOUT
from flaresolverr_client.errors import FlareSolverrError
from flaresolverr_client.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".flaresolverr" / "config.json"

T = TypeVar("T")


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _effective_config() -> dict[str, Any]:
    """Command line / environment first, then the config file, then defaults."""
    ctx = click.get_current_context(silent=True)
    opts = (ctx.find_root().obj if ctx else None) or {}
    cfg = _load_config()
    return {
        "base_url": opts.get("base_url") or cfg.get("base_url") or DEFAULT_BASE_URL,
        "max_timeout": opts.get("max_timeout") or cfg.get("max_timeout") or DEFAULT_MAX_TIMEOUT,
    }


def _get_client() -> AsyncFlareSolverr:
    cfg = _effective_config()
    return AsyncFlareSolverr(base_url=cfg["base_url"], max_timeout=int(cfg["max_timeout"]))


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except FlareSolverrError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@click.group()
@click.version_option(__version__)
@click.option("--base-url", envvar="FLARESOLVERR_URL", default=None, help="FlareSolverr base URL")
@click.option("--max-timeout", envvar="FLARESOLVERR_MAX_TIMEOUT", type=int, default=None,
              help="Default maxTimeout per command (ms)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, base_url: Optional[str], max_timeout: Optional[int], verbose: bool):
    """FlareSolverr CLI — drive a remote browser through FlareSolverr."""
    ctx.obj = {"base_url": base_url, "max_timeout": max_timeout}
    _setup_logging(verbose)


# Register subcommands from separate modules
from flaresolverr_client.cli.config import config
from flaresolverr_client.cli.requests import get_cmd, post_cmd
from flaresolverr_client.cli.sessions import sessions
from flaresolverr_client.cli.status import health_cmd, index_cmd

main.add_command(index_cmd)
main.add_command(health_cmd)
main.add_command(get_cmd)
main.add_command(post_cmd)
main.add_command(sessions)
main.add_command(config)


if __name__ == "__main__":
    main()
