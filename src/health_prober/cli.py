"""Health Prober CLI - Main entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from health_prober import __version__
from health_prober.core.config import ProberSettings, ServerSettings, Settings
from health_prober.core.exceptions import ConfigurationError
from health_prober.core.logging import configure_logging
from health_prober.core.models import summarize

app = typer.Typer(
    name="health-prober",
    help="URL reachability checks, single or in bulk",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

STATE_STYLES = {
    "online": "[green]● online[/green]",
    "offline": "[red]● offline[/red]",
    "checking": "[yellow]● checking[/yellow]",
    "disabled": "[dim]○ disabled[/dim]",
}


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"Health Prober v{__version__}")
        raise typer.Exit()


def load_settings(config: Optional[Path]) -> Settings:
    try:
        settings = Settings.from_file_or_default(config)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    configure_logging(
        level=settings.logging.level,
        json_format=settings.logging.json_format,
        log_file=settings.logging.log_file,
    )
    return settings


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Health Prober - URL reachability checks."""
    pass


@app.command()
def check(
    urls: List[str] = typer.Argument(..., help="One or more URLs to probe"),
    config: Optional[Path] = typer.Option(None, help="Path to configuration file"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", min=1, help="Per-probe deadline in milliseconds"),
    verify_tls: Optional[bool] = typer.Option(
        None, "--verify-tls/--no-verify-tls", help="Verify TLS certificates of https targets"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Exit with status 1 if any URL is offline"),
) -> None:
    """
    Probe URLs and report online/offline.

    A single URL is probed directly; several are probed concurrently as
    a batch and reported in the order given.
    """
    import asyncio
    from health_prober.prober import BatchCoordinator, ProberEngine

    settings = load_settings(config)
    overrides = {"timeout_ms": timeout_ms, "verify_tls": verify_tls}
    try:
        settings.prober = ProberSettings(
            **{
                **settings.prober.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )
    except ValidationError as e:
        console.print(f"[red]Error: invalid prober option: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(1)

    prober = ProberEngine(settings)

    async def run_check():
        if len(urls) == 1:
            return [await prober.probe(urls[0])]
        return await BatchCoordinator(prober).probe_batch(urls)

    if output_json:
        results = asyncio.run(run_check())
        typer.echo(json.dumps([r.to_payload() for r in results], indent=2))
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Probing {len(urls)} URL(s)...", total=None)
            results = asyncio.run(run_check())

        table = Table(title="Health Check Results")
        table.add_column("URL", style="cyan")
        table.add_column("Status")
        table.add_column("Checked At")
        table.add_column("Error")

        for result in results:
            table.add_row(
                result.url,
                STATE_STYLES[result.status.value],
                result.checked_at.isoformat(timespec="seconds"),
                result.error or "",
            )

        console.print(table)

        counts = summarize(results)
        console.print(
            f"\n[bold]Summary:[/bold] {counts['online']} online, {counts['offline']} offline"
        )

    if strict and any(not r.is_online for r in results):
        raise typer.Exit(1)


@app.command()
def serve(
    config: Optional[Path] = typer.Option(None, help="Path to configuration file"),
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
    prefix: Optional[str] = typer.Option(None, help="Route prefix, e.g. /api/apps"),
) -> None:
    """Run the health-check HTTP API."""
    from health_prober.api import serve as run_server

    settings = load_settings(config)
    overrides = {"host": host, "port": port, "route_prefix": prefix}
    settings.server = ServerSettings(
        **{
            **settings.server.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        }
    )

    console.print(Panel.fit(
        f"[bold cyan]Listen:[/bold cyan] http://{settings.server.host}:{settings.server.port}\n"
        f"[bold cyan]Routes:[/bold cyan] {settings.server.route_prefix}/health-check, "
        f"{settings.server.route_prefix}/health-check/batch\n"
        f"[bold cyan]Timeout:[/bold cyan] {settings.prober.timeout_ms} ms\n"
        f"[bold cyan]Verify TLS:[/bold cyan] {settings.prober.verify_tls}",
        title="Health Prober API",
    ))

    run_server(settings)


@app.command()
def watch(
    url: str = typer.Argument(..., help="URL to watch"),
    config: Optional[Path] = typer.Option(None, help="Path to configuration file"),
    interval: Optional[int] = typer.Option(None, min=0, help="Seconds between checks (0 means 60)"),
    service: Optional[str] = typer.Option(
        None, help="Base URL of a running health-prober service; probes locally when omitted"
    ),
) -> None:
    """Poll a URL and print each status change."""
    import asyncio
    from health_prober.monitor import (
        HealthCheckIndicator,
        IndicatorState,
        LocalHealthChecker,
        ServiceHealthClient,
    )
    from health_prober.prober import ProberEngine

    settings = load_settings(config)
    if interval is not None:
        settings.indicator.health_check_interval = interval
    service = service or settings.indicator.service_url

    if service:
        checker = ServiceHealthClient(service, route_prefix=settings.server.route_prefix)
    else:
        checker = LocalHealthChecker(ProberEngine(settings))

    def show(state: IndicatorState) -> None:
        console.print(f"{url}  {STATE_STYLES[state.value]}")

    indicator = HealthCheckIndicator(url, settings.indicator, checker, on_change=show)

    if not indicator.enabled:
        show(IndicatorState.DISABLED)
        return

    console.print(
        f"[dim]Watching {url} every {settings.indicator.interval_seconds}s "
        f"(Ctrl+C to stop)[/dim]"
    )
    show(indicator.state)

    async def run_watch():
        await indicator.run(asyncio.Event())

    try:
        asyncio.run(run_watch())
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")


if __name__ == "__main__":
    app()
