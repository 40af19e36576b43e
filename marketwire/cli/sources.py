"""Sources management commands."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import load_sources
from ..errors import FetchFailure
from ..models import SourceKind, SourceSpec
from ..services import Services
from .runner import run_with_services

console = Console()
sources_app = typer.Typer(help="Manage news sources")


@sources_app.command("list")
def sources_list() -> None:
    """List all registered sources, newest first."""
    sources = run_with_services(lambda services: services.registry.list())

    if not sources:
        console.print("[yellow]No sources registered.[/yellow]")
        return

    table = Table(title="Registered Sources")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Active", style="yellow")
    table.add_column("Filters", style="green")
    table.add_column("URL", style="blue")

    for source in sources:
        filters = []
        if source.include_keywords:
            filters.append("+" + ",".join(source.include_keywords))
        if source.exclude_keywords:
            filters.append("-" + ",".join(source.exclude_keywords))
        table.add_row(
            source.id,
            source.name,
            source.kind.value,
            "✓" if source.is_active else "✗",
            " ".join(filters),
            source.url,
        )

    console.print(table)


@sources_app.command("add")
def sources_add(
    name: str = typer.Option(..., "--name", "-n", help="Source name"),
    url: str = typer.Option(..., "--url", "-u", help="HTTP endpoint or socket URL"),
    kind: SourceKind = typer.Option(SourceKind.POLL, "--kind", "-k", help="poll or push"),
    api_key_env: Optional[str] = typer.Option(None, "--api-key-env", help="Environment variable holding the API key"),
    api_key_param: str = typer.Option("apiKey", "--api-key-param", help="Query parameter for the API key"),
    include: List[str] = typer.Option([], "--include", "-i", help="Keep only articles containing this keyword"),
    exclude: List[str] = typer.Option([], "--exclude", "-x", help="Drop articles containing this keyword"),
    inactive: bool = typer.Option(False, "--inactive", help="Register without activating"),
) -> None:
    """Register a new source."""
    spec = SourceSpec(
        name=name,
        url=url,
        kind=kind,
        is_active=not inactive,
        api_key_env=api_key_env,
        api_key_param=api_key_param,
        include_keywords=include,
        exclude_keywords=exclude,
    )

    async def work(services: Services):
        if await services.registry.find_by_name(name):
            return None
        return await services.registry.create(spec)

    source = run_with_services(work)
    if source is None:
        console.print(f"[red]Source '{name}' already exists.[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Added source: {name} ({source.id})[/green]")


@sources_app.command("remove")
def sources_remove(
    name: str = typer.Argument(..., help="Source name to remove"),
) -> None:
    """Remove a source."""

    async def work(services: Services):
        source = await services.registry.find_by_name(name)
        if source:
            await services.registry.delete(source.id)
        return source

    if run_with_services(work) is None:
        console.print(f"[red]Source '{name}' not found.[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Removed source: {name}[/green]")


def _set_active(name: str, is_active: bool) -> None:
    async def work(services: Services):
        source = await services.registry.find_by_name(name)
        if source:
            return await services.registry.set_active(source.id, is_active)
        return None

    if run_with_services(work) is None:
        console.print(f"[red]Source '{name}' not found.[/red]")
        raise typer.Exit(1)

    state = "Enabled" if is_active else "Disabled"
    console.print(f"[green]✅ {state} source: {name}[/green]")


@sources_app.command("enable")
def sources_enable(name: str = typer.Argument(..., help="Source name")) -> None:
    """Activate a source."""
    _set_active(name, True)


@sources_app.command("disable")
def sources_disable(name: str = typer.Argument(..., help="Source name")) -> None:
    """Deactivate a source."""
    _set_active(name, False)


@sources_app.command("import")
def sources_import(
    path: Path = typer.Argument(..., help="YAML file with a top-level 'sources' list"),
) -> None:
    """Register every source declared in a YAML file that is not registered yet."""
    try:
        specs = load_sources(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    created = run_with_services(lambda services: services.registry.import_sources(specs))
    console.print(f"[green]✅ Imported {len(created)} of {len(specs)} sources[/green]")


@sources_app.command("test")
def sources_test(
    name: Optional[str] = typer.Argument(None, help="Source name to test (or test all)"),
) -> None:
    """Fetch active polled sources once without extracting anything."""

    async def work(services: Services):
        sources = await services.registry.list()
        if name:
            sources = [s for s in sources if s.name == name]
            if not sources:
                console.print(f"[red]Source '{name}' not found.[/red]")
                raise typer.Exit(1)

        for source in sources:
            if not source.is_active:
                console.print(f"[yellow]⚠️  {source.name}: Disabled[/yellow]")
                continue
            if source.kind == SourceKind.PUSH:
                console.print(f"[yellow]⚠️  {source.name}: Push source, use 'marketwire feed'[/yellow]")
                continue

            try:
                body = await services.fetcher.fetch(source)
                console.print(f"[green]✅ {source.name}: OK ({len(body)} chars)[/green]")
            except FetchFailure as e:
                console.print(f"[red]❌ {source.name}: Failed - {e}[/red]")

    run_with_services(work)
