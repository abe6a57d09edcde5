"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


async def _check_bases(settings: AppSettings) -> dict[str, tuple[bool, str]]:
    targets = {
        "BDNN": settings.bdnn_base_url,
        "Policía": settings.policia_base_url,
    }
    pending = {name: url for name, url in targets.items() if url}
    results = await asyncio.gather(*(_check_http(url, settings) for url in pending.values()))
    return dict(zip(pending.keys(), results))


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Bases Externas Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.use_mocks:
        table.add_row("Adapters", "MOCK", f"scenario={settings.mock_scenario}")
    else:
        table.add_row("Adapters", "LIVE", "HTTP adapters")

    for label, url, token in (
        ("BDNN base_url", settings.bdnn_base_url, settings.bdnn_token),
        ("Policía base_url", settings.policia_base_url, settings.policia_token),
    ):
        if url:
            table.add_row(label, "OK", f"{url} ({'token' if token else 'no token'})")
        elif settings.use_mocks:
            table.add_row(label, "OPTIONAL", "Not needed while mocks are enabled")
        else:
            table.add_row(label, "MISSING", "Required for live queries")

    table.add_row("Fraud keywords", "OK", ", ".join(settings.fraude_keywords) or "(defaults)")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    # Connectivity (best-effort)
    checks = asyncio.run(_check_bases(settings))
    for name, (ok, detail) in checks.items():
        table.add_row(f"{name} connectivity", "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not settings.use_mocks and not (settings.bdnn_base_url and settings.policia_base_url):
        _console.print(
            "\n[yellow]Note:[/yellow] Run `doctor setup` or set BASES_EXT_USE_MOCKS=true for a demo."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    bdnn_url = typer.prompt("BDNN base URL", default="", show_default=False).strip()
    bdnn_token = typer.prompt("BDNN token (optional)", default="", show_default=False, hide_input=True).strip()
    policia_url = typer.prompt("Policía base URL", default="", show_default=False).strip()
    policia_token = typer.prompt(
        "Policía token (optional)", default="", show_default=False, hide_input=True
    ).strip()

    if not bdnn_url or not policia_url:
        raise typer.BadParameter("Both base URLs are required")

    values = {
        "BASES_EXT_BDNN_BASE_URL": bdnn_url,
        "BASES_EXT_POLICIA_BASE_URL": policia_url,
    }
    if bdnn_token:
        values["BASES_EXT_BDNN_TOKEN"] = bdnn_token
    if policia_token:
        values["BASES_EXT_POLICIA_TOKEN"] = policia_token

    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
