"""Shared fixtures: a controllable clock and a fresh registry per test."""

import os

import pytest

from masterserver.registry import ExpirySweeper, IngestionProcessor, ListingStore

CONFIG_ENV_KEYS = {
    "host",
    "port",
    "updaterate",
    "update_rate",
    "expiretime",
    "expire_time",
    "servicemessage",
    "service_message",
    "heartbeatinterval",
    "heartbeat_interval",
    "showbanner",
    "show_banner",
    "loglevel",
    "log_level",
}


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch, tmp_path):
    """Keep host environment and any stray config.json out of config loading."""
    for name in list(os.environ):
        if name.lower() in CONFIG_ENV_KEYS:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return ListingStore(clock=clock)


@pytest.fixture
def processor(store):
    return IngestionProcessor(store)


@pytest.fixture
def sweeper(store):
    return ExpirySweeper(store, expire_time=120, update_rate_ms=1000)


def listing(name="My Server", port=7777, players=3, max_players=16, **extra):
    return {"name": name, "port": port, "players": players, "maxPlayers": max_players, **extra}
