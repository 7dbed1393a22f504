"""Listing registry: store, sanitizer, expiry sweeper and batch ingestion."""

from .ingest import BatchError, BatchResult, IngestionProcessor
from .sanitizer import sanitize
from .state import ListingKey, ListingRecord, ListingStore
from .sweeper import AggregateStats, ExpirySweeper

__all__ = [
    "AggregateStats",
    "BatchError",
    "BatchResult",
    "ExpirySweeper",
    "IngestionProcessor",
    "ListingKey",
    "ListingRecord",
    "ListingStore",
    "sanitize",
]
