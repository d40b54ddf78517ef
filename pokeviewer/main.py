"""Terminal entry point for PokéViewer.

Loads the catalog, prints it as a grid, and lets the user pick a Pokémon by
number to see its stats and evolution line. Supports running via
`python -m pokeviewer.main`.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, List, Optional

from .catalog import load_catalog
from .config import (
    DEFAULT_CONFIG_PATH,
    Settings,
    configure_logging,
    load_config,
    settings_from_config,
)
from .gateway import PokeApiGateway
from .render import LOADING_TEXT, render_catalog, render_detail
from .selection import SelectionController

PROMPT = "Pokémon number (b = back, q = quit): "

ReadLine = Callable[[str], Awaitable[str]]


async def _read_stdin(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


async def run_session(
    settings: Settings,
    *,
    gateway: Optional[PokeApiGateway] = None,
    read_line: ReadLine = _read_stdin,
    write: Callable[[str], None] = print,
) -> int:
    """Run one viewer session. Returns 0 on a normal quit, 1 if the catalog failed."""
    if gateway is None:
        gateway = PokeApiGateway(
            settings.base_url, timeout_seconds=settings.request_timeout_seconds
        )

    write(LOADING_TEXT)
    catalog = await load_catalog(gateway, settings.catalog_size)
    write(render_catalog(catalog))
    if catalog.error:
        return 1

    controller = SelectionController(
        gateway,
        max_depth=settings.max_chain_depth,
        image_base_url=settings.sprite_base_url,
    )
    while True:
        try:
            choice = (await read_line(PROMPT)).strip().lower()
        except EOFError:
            break

        if choice in ("q", "quit"):
            break
        if choice in ("b", "back", ""):
            controller.deselect()
            write(render_catalog(catalog))
            continue

        try:
            entity_id = int(choice.lstrip("#"))
        except ValueError:
            write(f"Unknown choice: {choice}")
            continue
        entity = catalog.find(entity_id)
        if entity is None:
            write(f"No Pokémon with number {entity_id} in the catalog")
            continue

        controller.select(entity)
        write(render_detail(await controller.wait()))

    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser."""
    parser = argparse.ArgumentParser(prog="pokeviewer")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the viewer session."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    settings = settings_from_config(load_config(args.config))
    configure_logging(settings.log_level)
    try:
        return asyncio.run(run_session(settings))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
