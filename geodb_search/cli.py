import asyncio
import logging
import sys

import click

from .clients import GeoDBClient, QueryExecutor
from .config import get_geodb_config
from .controller import SearchController
from .data_models.config import GeoDBConfig, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from .data_models.search import ControllerSnapshot
from .exceptions import APIKeyValidationError, InvalidAPIKeyError
from .resolver import CountryResolver
from .utils import validate_api_key
from .version import __version__

INTERACTIVE_HELP = (
    "Type a country name to search. Commands: "
    ":page N, :size N, :next, :prev, :quit"
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(*, verbose: bool) -> None:
    """GeoDB search CLI - find cities by country name."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


skip_api_key_validation_option = click.option(
    "--skip-api-key-validation",
    is_flag=True,
    default=False,
    help="Skip the validation of the GEODB_API_KEY at startup.",
)


def _load_config(ctx: click.Context) -> GeoDBConfig:
    try:
        return get_geodb_config()
    except ValueError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)


def _validate_or_exit(ctx: click.Context, config: GeoDBConfig) -> None:
    try:
        asyncio.run(validate_api_key(config))
    except (InvalidAPIKeyError, APIKeyValidationError) as e:
        click.echo(str(e), err=True)
        click.echo(
            "To obtain an API key, subscribe to the GeoDB Cities API on RapidAPI.",
            err=True,
        )
        sys.stderr.flush()
        ctx.exit(1)


def format_snapshot(snapshot: ControllerSnapshot) -> str:
    """Plain-text rendering of a controller snapshot."""
    if snapshot.status_message:
        return snapshot.status_message
    if not snapshot.rows:
        return ""

    lines = []
    for index, place in enumerate(snapshot.rows, start=snapshot.first_row_number):
        country = place.country_name
        if place.country_code:
            country = f"{country} ({place.country_code})"
        lines.append(
            f"{index:>4}  {place.name:<30} {place.region or '':<25} "
            f"{place.population:>12,}  {country}"
        )
    if snapshot.total_pages > 1:
        lines.append(
            f"Page {snapshot.current_page} of {snapshot.total_pages}"
            f" ({snapshot.page_size} per page)"
        )
    return "\n".join(lines)


def _build_controller(
    config: GeoDBConfig, client: GeoDBClient
) -> SearchController:
    return SearchController.from_config(
        config, QueryExecutor(client), CountryResolver.default()
    )


async def run_search(config: GeoDBConfig, name: str, page: int) -> ControllerSnapshot:
    async with GeoDBClient(config) as client:
        async with _build_controller(config, client) as controller:
            controller.on_text_change(name)
            await controller.settle()
            if page > 1:
                if controller.on_page_click(page):
                    await controller.settle()
                else:
                    click.echo(
                        f"Page {page} is out of range "
                        f"(last page: {controller.pagination.max_page}).",
                        err=True,
                    )
            return controller.snapshot()


def handle_line(controller: SearchController, line: str) -> bool:
    """
    Feeds one line of interactive input into the controller.

    Returns False when the user asked to quit.
    """
    if not line.startswith(":"):
        controller.on_text_change(line)
        return True

    command, _, argument = line[1:].partition(" ")
    argument = argument.strip()
    if command in ("q", "quit"):
        return False
    if command == "next":
        controller.next_page()
    elif command == "prev":
        controller.previous_page()
    elif command == "page":
        if not argument.isdigit() or not controller.on_page_click(int(argument)):
            click.echo(f"Invalid page: {argument!r}", err=True)
    elif command == "size":
        if not controller.on_page_size_change(argument):
            click.echo(
                f"Page size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}.",
                err=True,
            )
    else:
        click.echo(f"Unknown command: {command}. {INTERACTIVE_HELP}", err=True)
    return True


async def run_interactive(config: GeoDBConfig) -> None:
    loop = asyncio.get_running_loop()
    async with GeoDBClient(config) as client:
        async with _build_controller(config, client) as controller:
            controller.subscribe(
                lambda snapshot: click.echo(format_snapshot(snapshot))
            )
            while True:
                line = await loop.run_in_executor(None, sys.stdin.readline)
                if not line or not handle_line(controller, line.rstrip("\n")):
                    break
            await controller.settle()


@cli.command()
@click.argument("name")
@click.option("--page", default=1, type=click.IntRange(min=1), help="Page to show.")
@click.option(
    "--page-size",
    default=None,
    type=click.IntRange(MIN_PAGE_SIZE, MAX_PAGE_SIZE),
    help="Places per page.",
)
@skip_api_key_validation_option
@click.pass_context
def search(
    ctx: click.Context,
    name: str,
    page: int,
    page_size: int | None,
    *,
    skip_api_key_validation: bool,
) -> None:
    """Search the cities of the country called NAME."""
    config = _load_config(ctx)
    # A single query has no typing burst to coalesce.
    update = {"debounce_ms": 0}
    if page_size is not None:
        update["default_page_size"] = page_size
    config = config.model_copy(update=update)

    if not skip_api_key_validation:
        _validate_or_exit(ctx, config)

    snapshot = asyncio.run(run_search(config, name, page))
    click.echo(format_snapshot(snapshot))


@cli.command()
@skip_api_key_validation_option
@click.pass_context
def interactive(ctx: click.Context, *, skip_api_key_validation: bool) -> None:
    """Search as you type, reading input lines from stdin."""
    config = _load_config(ctx)
    if not skip_api_key_validation:
        _validate_or_exit(ctx, config)

    click.echo(INTERACTIVE_HELP, err=True)
    asyncio.run(run_interactive(config))


def main() -> None:
    """Main entry point for the CLI."""
    cli()
