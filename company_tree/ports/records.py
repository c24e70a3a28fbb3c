"""Record fetcher port - Abstraction for retrieving raw records.

The core only depends on the shape of what comes back: an ordered
sequence of key-value records per logical resource.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

# A raw company or travel record, exactly as served by the source.
RawRecord = Mapping[str, Any]


class RecordFetcherPort(Protocol):
    """Port for fetching raw records.

    Implementations:
    - adapters/fetch/http_fetcher.py (HttpRecordFetcher) - Production
    - adapters/fetch/file_fetcher.py (JsonFileRecordFetcher) - Offline runs
    - adapters/fetch/memory_fetcher.py (InMemoryRecordFetcher) - Testing

    Company records carry {id, parentId, name, createdAt}; travel records
    carry {id, price, departure, destination, companyId, createdAt}.
    """

    def fetch_records(self, resource: str) -> Sequence[RawRecord]:
        """Fetch every record of a resource.

        Args:
            resource: Logical resource name (e.g. 'companies') or a URL.

        Returns:
            The records, in source order.

        Raises:
            FetchError: If the records cannot be retrieved.
        """
        ...

    def close(self) -> None:
        """Release any connection held by the fetcher."""
        ...
