"""Ingest command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from ..services import Services
from .runner import run_with_services

console = Console()


def ingest_command() -> None:
    """Run one ingestion cycle over all active polled sources."""

    async def work(services: Services):
        result = await services.orchestrator.run_cycle()
        return result, services.llm_provider.get_usage_stats()

    try:
        result, usage = run_with_services(work)
    except KeyboardInterrupt:
        console.print("\n[yellow]Ingestion interrupted by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Ingestion failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Ingestion Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Imported", str(result.imported_count))
    table.add_row("Filtered out", str(result.filtered_count))
    table.add_row("LLM calls", str(usage["api_calls"]))
    table.add_row("Tokens", str(usage["total_tokens"]))
    table.add_row("Estimated cost", f"${usage['estimated_cost']:.4f}")
    console.print(table)
