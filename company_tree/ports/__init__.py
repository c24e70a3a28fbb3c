"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .records import RawRecord, RecordFetcherPort
from .serialization import TreeSerializerPort

__all__ = [
    "RawRecord",
    "RecordFetcherPort",
    "TreeSerializerPort",
]
