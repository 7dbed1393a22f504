"""HTML listing page."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Mapping

from jinja2 import Environment, PackageLoader, select_autoescape

from masterserver.registry.state import ListingKey, ListingRecord
from masterserver.registry.sweeper import AggregateStats


@lru_cache(maxsize=1)
def _get_template_env() -> Environment:
    return Environment(
        loader=PackageLoader("masterserver", "templates"),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )


def format_capacity(capacity: float) -> str:
    if math.isinf(capacity):
        return "∞"
    return f"{capacity:.0f}"


def render_server_list(stats: AggregateStats, listings: Mapping[ListingKey, ListingRecord]) -> str:
    template = _get_template_env().get_template("serverlist.html")
    servers = sorted(
        ((str(key), record) for key, record in listings.items()),
        key=lambda item: item[1].name.lower(),
    )
    return template.render(
        meta={
            "players": stats.total_players,
            "capacity": format_capacity(stats.capacity_percent),
        },
        servers=servers,
    )
