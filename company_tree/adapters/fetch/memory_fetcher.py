"""In-memory record fetcher for testing.

Serves fixed record lists, so tests never touch the network.

Example:
    fetcher = InMemoryRecordFetcher({"companies": [...], "travels": [...]})
    container.register(RecordFetcherPort, lambda: fetcher)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ...domain.errors import FetchError
from ...ports.records import RawRecord


@dataclass
class InMemoryRecordFetcher:
    """Record fetcher over a dictionary of resource -> records.

    Attributes:
        records: Records served for each resource name
        requested: Resources requested so far, in call order
        closed: Whether close() has been called
    """

    records: Dict[str, Sequence[RawRecord]] = field(default_factory=dict)
    requested: List[str] = field(default_factory=list, repr=False)
    closed: bool = field(default=False, repr=False)

    def fetch_records(self, resource: str) -> Sequence[RawRecord]:
        self.requested.append(resource)
        if resource not in self.records:
            raise FetchError(f"Unknown resource: {resource}", resource=resource)
        return list(self.records[resource])

    def close(self) -> None:
        self.closed = True
