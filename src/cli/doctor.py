"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxTransport
from core.config import ConversationsSettings, Environment, write_user_env_vars
from core.domain.response import QueryFailure
from core.queries import ProductQuery

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: ConversationsSettings, product_id: str) -> tuple[bool, str]:
    query = ProductQuery(product_id, settings=settings, transport=HttpxTransport(settings))
    response = await query.fetch()
    if isinstance(response, QueryFailure):
        error = response.error
        return False, f"{type(error).__name__}: {error}"
    return True, f"{len(response.results)} result(s), total={response.meta.total_results}"


@app.command()
def run(product_id: str = typer.Option("test1", help="Product id used for the API probe.")) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ConversationsSettings()

    table = Table(title="conversations-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", "Passkey configured")
    else:
        table.add_row("API key", "MISSING", "Run `doctor configure` or set CONVERSATIONS_API_KEY")
    table.add_row("Environment", "OK", settings.environment.value)
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("API version", "OK", settings.api_version)

    if settings.api_key:
        ok_api, detail_api = asyncio.run(_check_api(settings, product_id))
        table.add_row("API probe", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API probe", "SKIPPED", "No passkey")

    _console.print(table)


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    environment = typer.prompt(
        "Environment",
        default=Environment.STAGING.value,
        show_default=True,
    ).strip().lower()
    if environment not in {e.value for e in Environment}:
        raise typer.BadParameter("environment must be 'staging' or 'production'")

    api_key = typer.prompt("API passkey", hide_input=True, confirmation_prompt=False).strip()
    client_id = typer.prompt("Client id", default="", show_default=False).strip()

    if not api_key:
        raise typer.BadParameter("passkey is required")

    env_path = write_user_env_vars(
        {
            "CONVERSATIONS_ENVIRONMENT": environment,
            "CONVERSATIONS_API_KEY": api_key,
            "CONVERSATIONS_CLIENT_ID": client_id,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
