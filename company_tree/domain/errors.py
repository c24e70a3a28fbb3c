"""Typed domain errors for the company cost tree.

All errors inherit from CompanyTreeError and can optionally wrap
a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CompanyTreeError(Exception):
    """Base error for the company tree domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DanglingReferenceError(CompanyTreeError):
    """A company declares a parent that does not exist.

    Attributes:
        company_id: The company holding the broken reference
        parent_id: The parent identifier that could not be resolved
    """

    company_id: str = ""
    parent_id: str = ""


@dataclass
class DuplicateCompanyError(CompanyTreeError):
    """Two company records share the same identifier."""

    company_id: str = ""


@dataclass
class RootResolutionError(CompanyTreeError):
    """The hierarchy does not have exactly one root.

    Attributes:
        candidate_ids: Ids of every company whose parent did not resolve
    """

    candidate_ids: tuple[str, ...] = ()


@dataclass
class HierarchyCycleError(CompanyTreeError):
    """Companies are linked in a cycle instead of hanging off the root.

    Attributes:
        company_ids: Ids of the companies involved
    """

    company_ids: tuple[str, ...] = ()


@dataclass
class RecordFormatError(CompanyTreeError):
    """A raw record is missing a field or holds an unusable value.

    Attributes:
        resource: Kind of record ("companies" or "travels")
        index: Position of the record in its input sequence
        field_name: The offending field
    """

    resource: str = ""
    index: Optional[int] = None
    field_name: str = ""


@dataclass
class FetchError(CompanyTreeError):
    """Raw records could not be retrieved.

    Attributes:
        resource: Logical resource name or URL that was requested
        status_code: HTTP status code, when the failure came from a response
    """

    resource: str = ""
    status_code: Optional[int] = None


@dataclass
class CostNotComputedError(CompanyTreeError):
    """A company's cost was read before the aggregation pass."""

    company_id: str = ""
