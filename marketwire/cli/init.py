"""Init command implementation."""

import asyncio
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, save_config, save_sources
from ..config.loader import DEFAULT_CONFIG_DIR
from ..db import close_connection_pool, init_database, validate_connection
from ..models import SourceKind, SourceSpec

console = Console()


def create_default_sources() -> List[SourceSpec]:
    """Example source declarations, inactive until an operator enables them."""
    return [
        SourceSpec(
            name="Benzinga News",
            kind=SourceKind.POLL,
            url="https://api.benzinga.com/api/v2/news",
            is_active=False,
            api_key_env="BENZINGA_API_KEY",
            api_key_param="token",
        ),
        SourceSpec(
            name="Polygon Ticker News",
            kind=SourceKind.POLL,
            url="https://api.polygon.io/v2/reference/news",
            is_active=False,
            api_key_env="POLYGON_API_KEY",
            exclude_keywords=["class action", "investor alert"],
        ),
        SourceSpec(
            name="Alpaca Realtime News",
            kind=SourceKind.PUSH,
            url="wss://stream.data.alpaca.markets/v1beta1/news",
            is_active=False,
        ),
    ]


async def _prepare_database(db_config: dict) -> bool:
    try:
        if not await validate_connection(db_config):
            return False
        await init_database(db_config)
        return True
    finally:
        await close_connection_pool()


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("marketwire", "--db-name", help="Database name"),
    db_user: str = typer.Option("marketwire", "--db-user", help="Database user"),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Write example source declarations to sources.yaml",
    ),
) -> None:
    """Initialize configuration and database schema."""
    console.print(Panel.fit("marketwire - Initialization", style="bold blue"))

    # Create configuration directory
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    config = ConfigModel(
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "MARKETWIRE_DB_PASSWORD",
        },
    )
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    sources = create_default_sources() if seed_sources else []
    save_sources(sources, sources_path)
    console.print(f"✅ Created sources: {sources_path} ({len(sources)} declared)")

    console.print("\n[bold]Testing database connection and initializing schema...[/bold]")
    try:
        ok = asyncio.run(_prepare_database(Config.from_model(config, config_path).get_db_config()))
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    if not ok:
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via environment variable: [bold]export MARKETWIRE_DB_PASSWORD=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ marketwire initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n\n"
            f"Next steps:\n"
            f"1. Register sources: [bold]marketwire sources import {sources_path}[/bold]\n"
            f"2. Set LLM API key: [bold]export OPENAI_API_KEY=your_key[/bold]\n"
            f"3. Run a cycle: [bold]marketwire ingest[/bold]",
            style="green",
        )
    )
