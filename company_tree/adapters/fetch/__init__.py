"""Fetch adapters - Implementations of the RecordFetcherPort.

Available implementations:
- HttpRecordFetcher: JSON over HTTP (requests)
- JsonFileRecordFetcher: JSON files on disk
- InMemoryRecordFetcher: Fixed records for testing
"""

from .file_fetcher import JsonFileRecordFetcher
from .http_fetcher import HttpRecordFetcher
from .memory_fetcher import InMemoryRecordFetcher

__all__ = ["HttpRecordFetcher", "JsonFileRecordFetcher", "InMemoryRecordFetcher"]
