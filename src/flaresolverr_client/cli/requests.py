"""CLI: flaresolverr get, flaresolverr post"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from flaresolverr_client.dispatcher import ensure_ok
from flaresolverr_client.models.responses import RequestResponse

console = Console()


def _get_client():
    from flaresolverr_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from flaresolverr_client.cli.main import _run
    return _run(coro)


def _parse_fields(_ctx, _param, values: tuple[str, ...]) -> list[dict[str, str]]:
    fields = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}")
        fields.append({"name": name, "value": value})
    return fields


def _print_result(res: RequestResponse, json_output: bool) -> None:
    if json_output:
        click.echo(res.model_dump_json(by_alias=True, indent=2))
        return
    solution = res.solution
    console.print(f"[green]{res.message}[/green] [dim]({res.version})[/dim]")
    console.print(f"URL: {solution.url}")
    console.print(f"Status: {solution.status}")
    console.print(f"User-Agent: [dim]{solution.user_agent}[/dim]")
    if solution.response is not None:
        console.print(f"Body: {len(solution.response)} chars")
    if solution.cookies:
        table = Table(title=f"Cookies ({len(solution.cookies)})")
        table.add_column("Name", style="bold")
        table.add_column("Value")
        table.add_column("Domain")
        for c in solution.cookies:
            table.add_row(c.name, c.value, c.domain or "")
        console.print(table)


@click.command("get")
@click.argument("url")
@click.option("-s", "--session", "session_id", default=None, help="Reuse a browser session")
@click.option("--cookies-only", is_flag=True, help="Skip headers and body")
@click.option("--json-output", "--json", is_flag=True)
def get_cmd(url: str, session_id: Optional[str], cookies_only: bool, json_output: bool):
    """Load URL through the browser (request.get)."""

    async def _get():
        async with _get_client() as client:
            with console.status(f"Loading {url}..."):
                res = ensure_ok(await client.request_get(
                    url, session=session_id, return_only_cookies=cookies_only or None,
                ))
        _print_result(res, json_output)

    _run(_get())


@click.command("post")
@click.argument("url")
@click.option("-d", "--data", "fields", multiple=True, callback=_parse_fields, help="Form field as name=value")
@click.option("-s", "--session", "session_id", default=None, help="Reuse a browser session")
@click.option("--cookies-only", is_flag=True, help="Skip headers and body")
@click.option("--json-output", "--json", is_flag=True)
def post_cmd(url: str, fields: list[dict[str, str]], session_id: Optional[str], cookies_only: bool, json_output: bool):
    """Submit form fields to URL through the browser (request.post)."""

    async def _post():
        async with _get_client() as client:
            with console.status(f"Posting to {url}..."):
                res = ensure_ok(await client.request_post(
                    url, fields, session=session_id, return_only_cookies=cookies_only or None,
                ))
        _print_result(res, json_output)

    _run(_post())
