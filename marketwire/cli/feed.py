"""Live feed and read-side commands."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..models import Severity, SourceKind
from ..services import Services
from .runner import run_with_services

console = Console()

_SEVERITY_STYLES = {Severity.INFO: "dim", Severity.WARN: "yellow", Severity.ERROR: "red"}


def _sentiment_cell(article) -> str:
    if article.is_pending:
        return "[dim]pending[/dim]"
    analysis = article.analysis
    color = {"positive": "green", "negative": "red"}.get(analysis.sentiment, "white")
    return f"[{color}]{analysis.sentiment} ({analysis.impact_score:+.2f})[/{color}]"


def feed_command(
    target: str = typer.Argument(..., help="Push source name or socket URL"),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON article per line"),
) -> None:
    """Stream scored articles from a push source until it closes."""

    async def work(services: Services):
        url = target
        if "://" not in target:
            source = await services.registry.find_by_name(target)
            if source is None or source.kind != SourceKind.PUSH:
                console.print(f"[red]Push source '{target}' not found.[/red]")
                raise typer.Exit(1)
            url = source.url

        async for article in services.live.stream(url):
            if as_json:
                print(article.model_dump_json(by_alias=True), flush=True)
            else:
                console.print(f"[bold]{article.ticker}[/bold] {article.headline} {_sentiment_cell(article)}")

    try:
        run_with_services(work)
    except KeyboardInterrupt:
        console.print("\n[yellow]Feed closed[/yellow]")
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Feed terminated: {e}[/red]")
        raise typer.Exit(1)


def news_command(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of articles"),
) -> None:
    """Show the most recent stored articles."""
    articles = run_with_services(lambda services: services.sink.list_recent(limit))

    if not articles:
        console.print("[yellow]No articles stored yet.[/yellow]")
        return

    table = Table(title="Recent News")
    table.add_column("Published", style="dim")
    table.add_column("Ticker", style="cyan")
    table.add_column("Headline")
    table.add_column("Sentiment")
    for article in articles:
        table.add_row(
            article.published_at.strftime("%Y-%m-%d %H:%M"),
            article.ticker,
            article.headline,
            _sentiment_cell(article),
        )
    console.print(table)


def logs_command(
    limit: int = typer.Option(50, "--limit", "-n", help="Number of events"),
    severity: Optional[Severity] = typer.Option(None, "--severity", "-s", help="Only show this severity"),
) -> None:
    """Show recent activity log events."""
    events = run_with_services(lambda services: services.activity.recent(limit))
    if severity:
        events = [e for e in events if e.severity == severity]

    table = Table(title="Activity Log")
    table.add_column("Time", style="dim")
    table.add_column("Severity")
    table.add_column("Action")
    table.add_column("Details", style="dim")
    for event in events:
        style = _SEVERITY_STYLES[event.severity]
        table.add_row(
            event.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            f"[{style}]{event.severity.value}[/{style}]",
            event.action,
            str(event.details or ""),
        )
    console.print(table)
