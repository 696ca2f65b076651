"""CLI for notion-random-data."""

import asyncio
from datetime import datetime, timezone

import click

from notion_random_data import __version__
from notion_random_data.config import Settings, get_settings
from notion_random_data.exceptions import (
    APIErrorCode,
    ClientErrorCode,
    ConfigurationError,
    NotionRandomDataError,
    RateLimitError,
    is_notion_client_error,
)
from notion_random_data.models import plain_text
from notion_random_data.notion.client import NotionClient
from notion_random_data.notion.examples import ExampleRunner

ERROR_HINTS = {
    ClientErrorCode.REQUEST_TIMEOUT: "The request timed out. Try again or raise REQUEST_TIMEOUT.",
    APIErrorCode.OBJECT_NOT_FOUND: "Not found. Is the page or database shared with your integration?",
    APIErrorCode.UNAUTHORIZED: "Unauthorized. Check NOTION_TOKEN.",
    APIErrorCode.RESTRICTED_RESOURCE: "Your integration lacks the capability for this request.",
    APIErrorCode.VALIDATION_ERROR: "Notion rejected the request body.",
    APIErrorCode.CONFLICT_ERROR: "Conflicting save, try again.",
}


def _get_settings(ctx: click.Context) -> Settings:
    settings: Settings | None = ctx.obj.get("settings")
    if settings is None:
        click.echo(f"Error loading settings: {ctx.obj.get('settings_error')}", err=True)
        ctx.exit(1)
    return settings


def _report_error(error: Exception) -> None:
    """Print an error, with a hint for known Notion error codes."""
    click.echo(f"Error: {error}", err=True)
    if is_notion_client_error(error):
        if isinstance(error, RateLimitError) and error.retry_after:
            click.echo(f"Rate limited, retry after {error.retry_after}s.", err=True)
        elif error.code in ERROR_HINTS:
            click.echo(ERROR_HINTS[error.code], err=True)


def _client(settings: Settings) -> NotionClient:
    return NotionClient(settings.notion_token, timeout=settings.request_timeout)


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context) -> None:
    """Fill Notion databases with random data and read it back."""
    ctx.ensure_object(dict)

    # Load settings
    try:
        settings = get_settings()
        ctx.obj["settings"] = settings
    except ConfigurationError as e:
        ctx.obj["settings_error"] = str(e)


@main.command()
@click.option("--rows", default=1, show_default=True, help="Pages to create")
@click.option("--source-database-id", default=None, help="Copy the schema of this database")
@click.option("--update-database-id", default=None, help="Update this database instead of the new one")
@click.option("--read/--no-read", default=False, help="Read the new pages back")
@click.option("--query/--no-query", default=False, help="Run the filtered query examples")
@click.pass_context
def run(
    ctx: click.Context,
    rows: int,
    source_database_id: str | None,
    update_database_id: str | None,
    read: bool,
    query: bool,
) -> None:
    """Create a database, update it and fill it with random pages."""
    settings = _get_settings(ctx)

    async def run_example() -> None:
        client = _client(settings)
        runner = ExampleRunner(client, settings.base_parent_page_id)
        try:
            stats = await runner.run(
                source_database_id=source_database_id or settings.source_database_id,
                update_database_id=update_database_id or settings.update_database_id,
                rows=rows,
                read=read,
                query=query,
            )

            # Summary
            click.echo("\n" + "=" * 50)
            click.echo("RUN COMPLETE")
            click.echo("=" * 50)
            click.echo(f"Database: {stats.database_id} ({stats.database_title})")
            click.echo(f"  Pages created: {stats.pages_created}")
            if read:
                click.echo(f"  Pages read: {stats.pages_read}")
                click.echo(f"  Skipped (older): {stats.pages_skipped}")
            for report in stats.queries:
                click.echo(f"  {report.column}={report.value}: {report.matches} matches")
            if stats.errors:
                click.echo(f"  Errors: {len(stats.errors)}")
                for error in stats.errors:
                    click.echo(f"    - {error}")

        finally:
            await client.close()

    try:
        asyncio.run(run_example())
    except KeyboardInterrupt:
        click.echo("\nRun interrupted by user")
        ctx.exit(130)
    except NotionRandomDataError as e:
        _report_error(e)
        ctx.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@main.command()
@click.argument("database_id")
@click.pass_context
def schema(ctx: click.Context, database_id: str) -> None:
    """Show the property schema of a database."""
    settings = _get_settings(ctx)

    async def show() -> None:
        client = _client(settings)
        try:
            db = await client.get_database(database_id)
            props = db.get("properties", {})

            click.echo(f"Database {plain_text(db.get('title'))} has {len(props)} properties:\n")
            for prop_name, prop_def in props.items():
                line = f"  {prop_name}: {prop_def.get('type', 'unknown')}"
                options = (prop_def.get(prop_def.get("type")) or {}).get("options")
                if options:
                    line += f" [{', '.join(option['name'] for option in options)}]"
                click.echo(line)

        finally:
            await client.close()

    try:
        asyncio.run(show())
    except NotionRandomDataError as e:
        _report_error(e)
        ctx.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@main.command("create-pages")
@click.argument("database_id")
@click.option("--rows", default=1, show_default=True, help="Pages to create")
@click.pass_context
def create_pages(ctx: click.Context, database_id: str, rows: int) -> None:
    """Create pages with random values in an existing database."""
    settings = _get_settings(ctx)

    async def create() -> None:
        client = _client(settings)
        runner = ExampleRunner(client, settings.base_parent_page_id)
        try:
            db = await client.get_database(database_id)
            pages = await runner.create_pages(database_id, db.get("properties", {}), rows)
            click.echo(f"Created {len(pages)} pages in {database_id}")
            for page in pages:
                click.echo(f"  - {page.get('id')}")
        finally:
            await client.close()

    try:
        asyncio.run(create())
    except NotionRandomDataError as e:
        _report_error(e)
        ctx.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@main.command()
@click.argument("database_id")
@click.option("--since", type=click.DateTime(), default=None, help="Only pages created after this time (UTC)")
@click.pass_context
def read(ctx: click.Context, database_id: str, since: datetime | None) -> None:
    """Print every property value of the pages in a database."""
    settings = _get_settings(ctx)

    async def read_back() -> None:
        client = _client(settings)
        runner = ExampleRunner(client, settings.base_parent_page_id)
        cutoff = (since or datetime.min).replace(tzinfo=timezone.utc)
        try:
            readings, skipped = await runner.read_pages(database_id, since=cutoff)
            for reading in readings:
                click.echo(f"Page {reading.page_id}")
                for prop in reading.properties:
                    click.echo(f"  - {prop.name} {prop.property_id} - {prop.value}")
            click.echo(f"\nRead {len(readings)} pages, skipped {skipped} older pages")
        finally:
            await client.close()

    try:
        asyncio.run(read_back())
    except NotionRandomDataError as e:
        _report_error(e)
        ctx.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@main.command()
@click.argument("database_id")
@click.pass_context
def query(ctx: click.Context, database_id: str) -> None:
    """Run filtered queries on a random select value and rich_text letter."""
    settings = _get_settings(ctx)

    async def run_queries() -> None:
        client = _client(settings)
        runner = ExampleRunner(client, settings.base_parent_page_id)
        try:
            db = await client.get_database(database_id)
            for report in await runner.query_examples(database_id, db.get("properties", {})):
                click.echo(f"{report.column}={report.value}: {report.matches} matches")
        finally:
            await client.close()

    try:
        asyncio.run(run_queries())
    except NotionRandomDataError as e:
        _report_error(e)
        ctx.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


if __name__ == "__main__":
    main()
