"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .feed import feed_command, logs_command, news_command
from .ingest import ingest_command
from .init import init_command
from .serve import serve_command
from .sources import sources_app

app = typer.Typer(
    name="marketwire",
    help="marketwire - news ingestion and sentiment pipeline",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("ingest")(ingest_command)
app.command("feed")(feed_command)
app.command("news")(news_command)
app.command("logs")(logs_command)
app.command("serve")(serve_command)
app.add_typer(sources_app, name="sources", help="Manage news sources")


if __name__ == "__main__":
    app()
