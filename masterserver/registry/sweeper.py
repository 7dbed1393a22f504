"""Periodic expiry of stale listings and population stats."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from masterserver.registry.state import ListingStore


@dataclass(frozen=True)
class AggregateStats:
    total_slots: int = 0
    total_players: int = 0
    capacity_percent: float = 0.0

    @staticmethod
    def compute(total_players: int, total_slots: int) -> "AggregateStats":
        if total_players > 0:
            # players vs. declared slots; can exceed 100, inf when no slots
            capacity = total_players / total_slots * 100 if total_slots else float("inf")
        else:
            capacity = 0.0
        return AggregateStats(total_slots=total_slots, total_players=total_players, capacity_percent=capacity)

    def to_dict(self) -> dict[str, float | int]:
        return {
            "totalSlots": self.total_slots,
            "totalPlayers": self.total_players,
            "capacityPercent": self.capacity_percent,
        }


class ExpirySweeper:
    """Evicts listings not refreshed within ``expire_time`` seconds.

    This is the only place listings expire; between passes a stale listing
    is still served. ``stats`` is replaced wholesale at the end of each pass.
    """

    def __init__(
        self,
        store: ListingStore,
        *,
        expire_time: float = 120,
        update_rate_ms: int = 1000,
        on_sweep: Callable[[AggregateStats, int], None] | None = None,
    ) -> None:
        self.store = store
        self.expire_time = float(expire_time)
        self.update_rate_ms = int(update_rate_ms)
        self.on_sweep = on_sweep
        self.stats = AggregateStats()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sweep_once(self) -> AggregateStats:
        total_slots = 0
        total_players = 0
        async with self.store.lock:
            now = self.store.clock()
            for key, record in self.store.iterate_mutable():
                age = now - record.added_at
                if age > self.expire_time:
                    self.store.remove(key)
                    logger.debug(f"Expired listing {key} (age {age:.1f}s)")
                    continue
                try:
                    slots = record.slot_count
                    players = record.player_count
                except ValueError as e:
                    logger.warning(f"Skipping listing {key} in stats: {e}")
                    continue
                total_slots += slots
                total_players += players
            self.stats = AggregateStats.compute(total_players, total_slots)
            listing_count = len(self.store)
        if self.on_sweep:
            self.on_sweep(self.stats, listing_count)
        return self.stats

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._sweep_loop())

    async def stop(self) -> None:
        if not self._task:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _sweep_loop(self) -> None:
        interval = max(0.001, self.update_rate_ms / 1000.0)
        while True:
            await asyncio.sleep(interval)
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Sweep pass failed")
