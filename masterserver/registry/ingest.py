"""Reporter batch ingestion.

Reporters only send the listings that changed, but resend everything after
a reconnect, so repeated add/update of a known listing is the normal case.

A batch is applied item by item. The first bad item aborts the rest of the
batch; items before it stay applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from loguru import logger
from pydantic import ValidationError

from masterserver.protocol import (
    ADD,
    DELETE,
    MSG_ADDED,
    MSG_MALFORMED,
    MSG_REMOVED,
    MSG_UNKNOWN_OP,
    UPDATE,
    ListingOp,
    missing_field_message,
)
from masterserver.registry.sanitizer import sanitize
from masterserver.registry.state import ListingKey, ListingRecord, ListingStore

REQUIRED_FIELDS = ("name", "port", "players", "maxPlayers")
DISCARDED_FIELDS = ("timeout", "port")


class BatchError(Exception):
    """An item that aborts its batch; ``message`` goes back to the reporter."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass
class BatchResult:
    ok: bool
    status: int
    message: str
    applied: int = 0


def _is_missing(server: Mapping[str, Any], field: str) -> bool:
    value = server.get(field)
    return value is None or value == ""


class IngestionProcessor:
    def __init__(self, store: ListingStore) -> None:
        self.store = store

    async def process(self, items: Any, origin: str) -> BatchResult:
        if not isinstance(items, list) or not items:
            return BatchResult(False, 400, MSG_MALFORMED)

        applied = 0
        message = ""
        async with self.store.lock:
            for index, item in enumerate(items):
                try:
                    message = self.apply_item(item, origin)
                except BatchError as e:
                    logger.debug(f"Batch from {origin} aborted at item {index}: {e.message}")
                    return BatchResult(False, e.status, e.message, applied)
                applied += 1
        return BatchResult(True, 200, message, applied)

    def apply_item(self, item: Any, origin: str) -> str:
        """Apply one item to the store (caller holds the store lock)."""
        try:
            op = ListingOp.model_validate(item)
        except ValidationError:
            raise BatchError(MSG_MALFORMED) from None
        if not op.type or op.server is None:
            raise BatchError(MSG_MALFORMED)

        for field in REQUIRED_FIELDS:
            if _is_missing(op.server, field):
                raise BatchError(missing_field_message(field))

        fields = sanitize(op.server)
        key = ListingKey.from_origin(origin, fields["port"])
        for field in DISCARDED_FIELDS:
            fields.pop(field, None)

        if op.type in (ADD, UPDATE):
            self.store.upsert(key, ListingRecord.from_fields(fields))
            return MSG_ADDED
        if op.type == DELETE:
            self.store.remove(key)
            return MSG_REMOVED
        raise BatchError(MSG_UNKNOWN_OP)
