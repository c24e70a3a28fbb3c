"""Hierarchy builder - Turns flat records into a rooted company tree.

The build runs in three passes over in-memory records:

1. Indexing: one Company node per company record, keyed by id in an
   insertion-ordered dict.
2. Travel attachment: each travel is appended to its owning company.
   Travels whose company does not exist are dropped, not rejected.
3. Linking: each company is appended to its parent's children. A parent
   id that does not resolve is only legal when it is ROOT_PARENT_ID.

The root is then chosen among the companies whose parent did not
resolve, according to the configured root policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..config import TreeConfig, get_config
from ..domain.errors import (
    DanglingReferenceError,
    DuplicateCompanyError,
    HierarchyCycleError,
    RecordFormatError,
    RootResolutionError,
)
from ..domain.models import ROOT_PARENT_ID, Company, CompanyTree, Travel
from ..ports.records import RawRecord

COMPANIES = "companies"
TRAVELS = "travels"


def _field(record: RawRecord, name: str, resource: str, index: int) -> Any:
    try:
        value = record[name]
    except (KeyError, TypeError) as e:
        raise RecordFormatError(
            f"{resource} record #{index} is missing '{name}'",
            resource=resource,
            index=index,
            field_name=name,
            cause=e,
        )
    if value is None:
        raise RecordFormatError(
            f"{resource} record #{index} has no value for '{name}'",
            resource=resource,
            index=index,
            field_name=name,
        )
    return value


def company_from_record(record: RawRecord, index: int = 0) -> Company:
    """Build an unlinked Company from a raw company record.

    Raises:
        RecordFormatError: If a required field is missing.
    """
    return Company(
        id=str(_field(record, "id", COMPANIES, index)),
        parent_id=str(_field(record, "parentId", COMPANIES, index)),
        name=str(_field(record, "name", COMPANIES, index)),
        created_at=str(_field(record, "createdAt", COMPANIES, index)),
    )


def travel_from_record(record: RawRecord, index: int = 0) -> Travel:
    """Build a Travel from a raw travel record.

    Prices may arrive as strings (e.g. "156.00") and are coerced to float.

    Raises:
        RecordFormatError: If a field is missing or the price is unusable.
    """
    raw_price = _field(record, "price", TRAVELS, index)
    try:
        return Travel(
            id=str(_field(record, "id", TRAVELS, index)),
            price=float(raw_price),
            departure=str(_field(record, "departure", TRAVELS, index)),
            destination=str(_field(record, "destination", TRAVELS, index)),
            company_id=str(_field(record, "companyId", TRAVELS, index)),
            created_at=str(_field(record, "createdAt", TRAVELS, index)),
        )
    except (TypeError, ValueError) as e:
        raise RecordFormatError(
            f"{TRAVELS} record #{index} has an invalid price {raw_price!r}",
            resource=TRAVELS,
            index=index,
            field_name="price",
            cause=e,
        )


@dataclass
class HierarchyBuilder:
    """Builds the company tree and attaches travels.

    Root policies:
    - "strict": exactly one company may lack a resolvable parent, and
      every company must be reachable from it.
    - "last_wins": the last root candidate in input order becomes the
      root; problems are logged instead of raised.

    Attributes:
        config: Tree configuration (root policy)
    """

    config: TreeConfig = field(default_factory=lambda: get_config().tree)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build(
        self,
        company_records: Sequence[RawRecord],
        travel_records: Sequence[RawRecord],
    ) -> CompanyTree:
        """Build the rooted tree from raw records.

        Args:
            company_records: Raw company records, in source order.
            travel_records: Raw travel records, in source order.

        Returns:
            CompanyTree with the root and the dropped travels.

        Raises:
            RecordFormatError: If a record is malformed.
            DuplicateCompanyError: If two companies share an id.
            DanglingReferenceError: If a parent id is neither known nor "0".
            RootResolutionError: If the strict policy finds 0 or 2+ roots.
            HierarchyCycleError: If the strict policy finds unreachable
                companies.
        """
        self._logger.info(
            "Building company hierarchy",
            extra={
                "companies": len(company_records),
                "travels": len(travel_records),
                "root_policy": self.config.root_policy,
            },
        )

        index = self._index_companies(company_records)
        dropped = self._attach_travels(index, travel_records)
        candidates = self._link_children(index)
        root = self._resolve_root(index, candidates)

        self._logger.info(
            "Company hierarchy built",
            extra={
                "root": root.id if root else None,
                "companies": len(index),
                "dropped_travels": len(dropped),
            },
        )
        return CompanyTree(
            root=root,
            company_count=len(index),
            dropped_travels=tuple(dropped),
        )

    def _index_companies(self, records: Sequence[RawRecord]) -> Dict[str, Company]:
        index: Dict[str, Company] = {}
        for i, record in enumerate(records):
            company = company_from_record(record, i)
            if company.id in index:
                raise DuplicateCompanyError(
                    f"Company with ID {company.id} appears more than once",
                    company_id=company.id,
                )
            index[company.id] = company
        return index

    def _attach_travels(
        self, index: Dict[str, Company], records: Sequence[RawRecord]
    ) -> List[Travel]:
        dropped: List[Travel] = []
        for i, record in enumerate(records):
            travel = travel_from_record(record, i)
            owner = index.get(travel.company_id)
            if owner is None:
                dropped.append(travel)
                continue
            owner.add_travel(travel)

        if dropped:
            self._logger.warning(
                "Dropped travels without an owning company",
                extra={
                    "count": len(dropped),
                    "company_ids": sorted({t.company_id for t in dropped}),
                },
            )
        return dropped

    def _link_children(self, index: Dict[str, Company]) -> List[Company]:
        """Attach every company to its parent; return the root candidates."""
        candidates: List[Company] = []
        for company in index.values():
            parent = index.get(company.parent_id)
            if parent is not None:
                parent.add_child(company)
                continue
            if company.parent_id != ROOT_PARENT_ID:
                raise DanglingReferenceError(
                    f"Company with ID {company.parent_id} does not exist "
                    f"(parent of company {company.id})",
                    company_id=company.id,
                    parent_id=company.parent_id,
                )
            candidates.append(company)
        return candidates

    def _resolve_root(
        self, index: Dict[str, Company], candidates: List[Company]
    ) -> Optional[Company]:
        candidate_ids = tuple(c.id for c in candidates)

        if self.config.root_policy == "strict":
            if len(candidates) != 1:
                raise RootResolutionError(
                    f"Expected exactly one root company, found {len(candidates)}",
                    candidate_ids=candidate_ids,
                )
            root = candidates[0]
            unreachable = self._unreachable_ids(index, root)
            if unreachable:
                raise HierarchyCycleError(
                    f"Companies not reachable from root {root.id}: "
                    f"{', '.join(unreachable)}",
                    company_ids=unreachable,
                )
            return root

        if not candidates:
            self._logger.warning("No root company found")
            return None
        root = candidates[-1]
        if len(candidates) > 1:
            self._logger.warning(
                "Several root candidates, keeping the last one",
                extra={"candidates": list(candidate_ids), "root": root.id},
            )
        unreachable = self._unreachable_ids(index, root)
        if unreachable:
            self._logger.warning(
                "Companies not reachable from root",
                extra={"root": root.id, "company_ids": list(unreachable)},
            )
        return root

    @staticmethod
    def _unreachable_ids(index: Dict[str, Company], root: Company) -> tuple[str, ...]:
        seen = {root.id}
        stack = [root]
        while stack:
            for child in stack.pop().children:
                if child.id not in seen:
                    seen.add(child.id)
                    stack.append(child)
        return tuple(company_id for company_id in index if company_id not in seen)
