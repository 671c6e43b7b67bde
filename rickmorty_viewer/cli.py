"""CLI entry point for browsing characters and the viewed-character history."""

import asyncio
import json
import logging
import sys
from pathlib import Path

import aiofiles
import click

from .constants.config import API_BASE_URL, DEFAULT_HOST, DEFAULT_PORT
from .constants.paths import DB_PATH, EXPORT_PATH
from .errors import StorageError


def _build_view_model(ctx: click.Context):
    from .viewmodels.characters import CharactersViewModel
    try:
        return CharactersViewModel.create(api_url=ctx.obj["api_url"], db_path=ctx.obj["db_path"])
    except StorageError as e:
        _fail(str(e))


def _load_viewed(view_model) -> list:
    try:
        return view_model.get_viewed_characters().value or []
    except StorageError as e:
        _fail(str(e))


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--api-url",
    default=API_BASE_URL,
    show_default=True,
    help="Base URL of the Rick and Morty API"
)
@click.option(
    "--db",
    "db_path",
    default=str(DB_PATH),
    show_default=True,
    type=click.Path(dir_okay=False),
    help="SQLite file holding viewed characters"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, api_url: str, db_path: str, verbose: bool):
    """Rick & Morty Viewer - browse characters and keep a viewing history."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url
    ctx.obj["db_path"] = db_path


@cli.command("characters")
@click.option(
    "--page", "-p",
    default=1,
    type=click.IntRange(min=1),
    help="Page of the character list to start from (default: 1)"
)
@click.option(
    "--pages",
    default=1,
    type=click.IntRange(min=1),
    help="Number of pages to load (default: 1)"
)
@click.pass_context
def characters(ctx: click.Context, page: int, pages: int):
    """List characters with their last known location and first episode.

    Examples:

        rmv characters

        rmv characters --page 3

        rmv characters --pages 5
    """
    import aiohttp

    from .errors import ApiError
    from .ui.adapter import CharactersAdapter

    view_model = _build_view_model(ctx)
    adapter = CharactersAdapter(view_model)

    async def run():
        if pages == 1:
            response = await view_model.get_characters(page)
            if response is None or response.characters is None:
                return False
            adapter.submit_data(response.characters)
            return True

        loaded = False
        async for result in view_model.characters_pager(page, max_pages=pages).pages():
            adapter.append_data(result.items)
            loaded = True
        return loaded

    try:
        loaded = asyncio.run(run())
    except (ApiError, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        click.echo(f"Error: failed to fetch characters: {e}", err=True)
        sys.exit(1)

    if not loaded:
        click.echo(f"Error: {view_model.error_data.value}", err=True)
        sys.exit(1)

    rows = asyncio.run(adapter.bind_all())
    for row in rows:
        click.echo(
            f"#{row.id:<4} {row.name} [{row.status}] {row.species} | "
            f"last seen: {row.location} | first seen: {row.first_seen}"
        )
    click.echo(f"\n{len(rows)} characters shown")


@cli.command("view")
@click.argument("character_id", type=int)
@click.pass_context
def view(ctx: click.Context, character_id: int):
    """Open a character and save it to the viewing history.

    Examples:

        rmv view 1
    """
    view_model = _build_view_model(ctx)

    async def run():
        character = await view_model.get_character(character_id)
        if character is None:
            return None, None
        return character, await view_model.save_viewed_character(character)

    try:
        character, saved = asyncio.run(run())
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if character is None:
        click.echo(f"Error: {view_model.error_data.value}", err=True)
        sys.exit(1)

    if saved is None:
        click.echo(f"{character.name} has no episodes, nothing saved")
        return

    click.echo(f"{saved.name} ({saved.status}, {saved.species}, {saved.gender})")
    click.echo(f"  Origin: {saved.origin}")
    click.echo(f"  Location: {saved.location}")
    click.echo(f"  First seen in: {saved.first_episode_name}")
    click.echo(f"  Image snapshot: {'yes' if saved.image_base64 else 'no'}")


@cli.command("viewed")
@click.pass_context
def viewed(ctx: click.Context):
    """List previously viewed characters, most recent first."""
    view_model = _build_view_model(ctx)
    viewed_characters = _load_viewed(view_model)

    if not viewed_characters:
        click.echo("No viewed characters yet")
        return

    for character in viewed_characters:
        click.echo(f"#{character.id:<4} {character.name} - first seen in {character.first_episode_name}")


@cli.command("export")
@click.option(
    "--output", "-o",
    default=str(EXPORT_PATH),
    show_default=True,
    type=click.Path(dir_okay=False),
    help="JSON file to write"
)
@click.option("--no-images", is_flag=True, help="Leave base64 image snapshots out of the export")
@click.pass_context
def export(ctx: click.Context, output: str, no_images: bool):
    """Export the viewing history to a JSON file."""
    view_model = _build_view_model(ctx)
    viewed_characters = _load_viewed(view_model)

    exclude = {"image_base64"} if no_images else None
    payload = [c.model_dump(mode="json", exclude=exclude) for c in viewed_characters]

    async def write():
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(output_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(payload, indent=2, ensure_ascii=False))

    asyncio.run(write())
    click.echo(f"Exported {len(payload)} viewed characters to {output}")


@cli.command("serve")
@click.option(
    "--port",
    default=DEFAULT_PORT,
    type=int,
    help=f"Port to run the server on (default: {DEFAULT_PORT})"
)
@click.option(
    "--host",
    default=DEFAULT_HOST,
    help=f"Host to bind to (default: {DEFAULT_HOST})"
)
@click.pass_context
def serve(ctx: click.Context, port: int, host: str):
    """Start the JSON web server for the character list.

    Examples:

        rmv serve

        rmv serve --port 8080
    """
    from .server import run_server
    run_server(_build_view_model(ctx), host=host, port=port)
