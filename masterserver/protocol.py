"""Wire models for the master server HTTP API (JSON over HTTP)."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ADD = "add"
UPDATE = "update"
DELETE = "delete"

MSG_MALFORMED = "Malformed request."
MSG_UNKNOWN_OP = "Unknown operation type."
MSG_ADDED = "Server added / Updated."
MSG_REMOVED = "Server removed."


def missing_field_message(field: str) -> str:
    return f"Missing JSON data: {field}"


class ListingOp(BaseModel):
    """One item of a reporter batch.

    Both fields are optional here so the processor can tell a structurally
    malformed item apart from a schema error.
    """

    model_config = ConfigDict(extra="ignore")

    type: Any = None
    server: dict[str, Any] | None = None


class ServiceAnnouncement(BaseModel):
    """Static settings handed to reporting clients via ``GET /config``."""

    model_config = ConfigDict(populate_by_name=True)

    service_message: str = Field(default="TEST ANNOUNCEMENT", alias="ServiceMessage")
    heartbeat_interval: int = Field(default=300000, alias="HeartbeatInterval")

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True), ensure_ascii=True, separators=(",", ":"))
