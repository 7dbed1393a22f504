"""Async HTTP client for the master server (reporters and tooling)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from masterserver.protocol import ADD, DELETE, UPDATE, ServiceAnnouncement


def make_op(op_type: str, **server: Any) -> dict[str, Any]:
    return {"type": op_type, "server": server}


def add_op(**server: Any) -> dict[str, Any]:
    return make_op(ADD, **server)


def update_op(**server: Any) -> dict[str, Any]:
    return make_op(UPDATE, **server)


def delete_op(**server: Any) -> dict[str, Any]:
    return make_op(DELETE, **server)


@dataclass
class ReportResult:
    status: int
    message: str

    @property
    def ok(self) -> bool:
        return self.status == 200


class MasterServerClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout_s, transport=transport)

    async def __aenter__(self) -> "MasterServerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def list_servers(self) -> dict[str, dict[str, Any]]:
        r = await self._client.get("/serverListings")
        r.raise_for_status()
        return r.json()

    async def get_config(self) -> ServiceAnnouncement:
        r = await self._client.get("/config")
        r.raise_for_status()
        return ServiceAnnouncement.model_validate(r.json())

    async def report(self, ops: list[dict[str, Any]]) -> ReportResult:
        """Send one batch; validation failures come back as a 400 result, not an exception."""
        r = await self._client.put("/serverListings", json=ops)
        if r.status_code >= 500:
            r.raise_for_status()
        return ReportResult(status=r.status_code, message=r.text)
