"""Light CLI — schema and fixture commands.

    light create-schema
    light drop-schema --yes
    light load-fixtures
    light serve --port 8000
"""

import typer
import uvicorn
from loguru import logger

from core import database
from core.config import AppConfig
from core.logging_setup import configure_logging
from verticals.book.fixtures import load_books

app = typer.Typer(
    help="Light schema, fixtures and server commands",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    configure_logging(AppConfig.from_env().logging)


@app.command("create-schema")
def create_schema() -> None:
    """Create all tables."""
    database.init_db()
    typer.echo("Schema created")


@app.command("drop-schema")
def drop_schema(
    yes: bool = typer.Option(False, "--yes", help="Confirm dropping every table"),
) -> None:
    """Drop all tables."""
    if not yes:
        typer.echo("Refusing to drop the schema without --yes", err=True)
        raise typer.Exit(code=1)
    database.drop_db()
    typer.echo("Schema dropped")


@app.command("load-fixtures")
def load_fixtures() -> None:
    """Insert the sample books."""
    with database.session_scope() as session:
        books = load_books(session)
    logger.info("Loaded {} books", len(books))
    typer.echo(f"Loaded {len(books)} books")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP server."""
    uvicorn.run("api.main:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    app()
