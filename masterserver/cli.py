"""Console entrypoint for the master server."""

from __future__ import annotations

import asyncio
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from masterserver.client import MasterServerClient
from masterserver.config.loader import load_config
from masterserver.server import MasterServer

app = typer.Typer(name="masterserver", help="Game server master list")
console = Console()


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@app.command("run")
def run(
    config: str = typer.Option(None, "--config", "-c", help="Path to JSON config file (default: ./config.json)"),
    host: str = typer.Option(None, "--host", help="Bind host"),
    port: int = typer.Option(None, "--port", help="Bind port"),
    update_rate: int = typer.Option(None, "--update-rate", help="Sweep period (ms)"),
    expire_time: float = typer.Option(None, "--expire-time", help="Seconds before an unrefreshed listing expires"),
    banner: bool = typer.Option(None, "--banner/--no-banner", help="Redraw the stats banner after each sweep"),
):
    """Run the master server."""
    cfg = load_config(
        config,
        host=host,
        port=port,
        update_rate=update_rate,
        expire_time=expire_time,
        show_banner=banner,
    )
    _configure_logging(cfg.log_level)
    server = MasterServer(cfg=cfg)

    async def _main():
        try:
            await server.start()
            await asyncio.Future()
        finally:
            await server.stop()

    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        console.print("\nStopping master server...")


@app.command("listings")
def listings(
    url: str = typer.Option("http://127.0.0.1:3000", "--url", help="Master server base URL"),
):
    """List the servers a running master server currently knows about."""

    async def _fetch():
        async with MasterServerClient(url) as client:
            return await client.list_servers()

    servers = asyncio.run(_fetch())
    table = Table(title=f"Servers ({len(servers)})")
    table.add_column("Address", style="cyan")
    table.add_column("Name")
    table.add_column("Players")
    table.add_column("Last seen")
    for address, listing in sorted(servers.items()):
        table.add_row(
            address,
            listing.get("name", "-"),
            f"{listing.get('players', '?')}/{listing.get('maxPlayers', '?')}",
            listing.get("added", "-"),
        )
    console.print(table)


if __name__ == "__main__":
    app()
