"""Console stats banner, redrawn after every sweep."""

from __future__ import annotations

import math

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from masterserver.registry.sweeper import AggregateStats

LOGO = r"""
 _____   _____  _     _      _____  _      _     _  _____
|_____] |_____|  \___/  ___ |_____] |      |     | |_____
|       |     | _/   \_     |       |_____ |_____|  _____|
"""


def render_stats(stats: AggregateStats, listing_count: int, port: int) -> Panel:
    capacity = "inf" if math.isinf(stats.capacity_percent) else f"{stats.capacity_percent:.0f}"
    body = Text(LOGO, style="bold cyan")
    body.append(f"\nReporting {listing_count} servers, {stats.total_slots} total slots.\n\n")
    body.append("PLAYERS: ", style="bold")
    body.append(f"{stats.total_players}  [ {capacity} % capacity ]\n")
    return Panel(body, title="masterserver", subtitle=f"Port: {port}", expand=False)


class StatsBanner:
    def __init__(self, port: int, console: Console | None = None) -> None:
        self.port = port
        self.console = console or Console()

    def __call__(self, stats: AggregateStats, listing_count: int) -> None:
        self.console.clear()
        self.console.print(render_stats(stats, listing_count, self.port))
