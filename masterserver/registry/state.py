from __future__ import annotations

import asyncio
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_WHOLE_INT = re.compile(r"[+-]?\d+")
_V4_MAPPED_PREFIX = "::ffff:"


def parse_count(value: str) -> int:
    """Parse the leading integer of *value*, ignoring trailing junk.

    Raises ValueError when there is no leading integer at all.
    """
    m = _LEADING_INT.match(value or "")
    if not m:
        raise ValueError(f"not a count: {value!r}")
    return int(m.group(1))


def wire_count(value: str) -> int | str:
    """Integer form of a count for JSON output; text that is not a whole integer is kept as-is."""
    if _WHOLE_INT.fullmatch(value or ""):
        return int(value)
    return value


class ListingKey(NamedTuple):
    address: str
    port: str

    @staticmethod
    def from_origin(origin: str, port: str) -> "ListingKey":
        address = origin or ""
        if address.lower().startswith(_V4_MAPPED_PREFIX) and "." in address:
            address = address[len(_V4_MAPPED_PREFIX):]
        return ListingKey(address, port)

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


@dataclass
class ListingRecord:
    name: str
    players: str
    max_players: str
    extra: dict[str, str] = field(default_factory=dict)
    added_at: float = 0.0

    @property
    def player_count(self) -> int:
        return parse_count(self.players)

    @property
    def slot_count(self) -> int:
        return parse_count(self.max_players)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "name": self.name,
                "players": wire_count(self.players),
                "maxPlayers": wire_count(self.max_players),
                "added": datetime.fromtimestamp(self.added_at, timezone.utc).isoformat(),
            }
        )
        return data

    @staticmethod
    def from_fields(fields: Mapping[str, str]) -> "ListingRecord":
        """Build a record from sanitized reporter fields (port already removed)."""
        extra = {k: v for k, v in fields.items() if k not in {"name", "players", "maxPlayers", "added"}}
        return ListingRecord(
            name=fields.get("name", ""),
            players=fields.get("players", ""),
            max_players=fields.get("maxPlayers", ""),
            extra=extra,
        )


class ListingStore:
    """In-memory listings keyed by (reporter address, advertised port).

    Writers (ingestion batches, sweep passes) hold ``lock`` for their whole
    run and never await while holding it, so ``snapshot()`` always sees a
    committed state.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.lock = asyncio.Lock()
        self.clock = clock
        self._listings: dict[ListingKey, ListingRecord] = {}

    def __len__(self) -> int:
        return len(self._listings)

    def __contains__(self, key: object) -> bool:
        return key in self._listings

    def get(self, key: ListingKey) -> ListingRecord | None:
        return self._listings.get(key)

    def upsert(self, key: ListingKey, record: ListingRecord) -> None:
        record.added_at = self.clock()
        self._listings[key] = record

    def remove(self, key: ListingKey) -> bool:
        return self._listings.pop(key, None) is not None

    def snapshot(self) -> Mapping[ListingKey, ListingRecord]:
        return MappingProxyType(dict(self._listings))

    def iterate_mutable(self) -> list[tuple[ListingKey, ListingRecord]]:
        # Materialized so the sweeper can evict while walking.
        return list(self._listings.items())

    def to_json_dict(self) -> dict[str, dict[str, Any]]:
        return {str(k): r.to_dict() for k, r in self.snapshot().items()}
