"""Domain models for the company cost tree.

Travel is an immutable value. Company is a mutable tree node: it is
structurally complete once the hierarchy builder has linked it and
fully valued only after the cost aggregator has filled in its cost.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from .errors import CostNotComputedError

# Parent identifier meaning "this company has no parent".
ROOT_PARENT_ID = "0"


@dataclass(frozen=True, slots=True)
class Travel:
    """A single business travel paid by a company.

    Attributes:
        id: Unique travel identifier
        price: Non-negative amount paid for the travel
        departure: Free-text departure location
        destination: Free-text destination
        company_id: Identifier of the company that owns the travel
        created_at: Opaque creation timestamp
    """

    id: str
    price: float
    departure: str
    destination: str
    company_id: str
    created_at: str

    def __post_init__(self) -> None:
        """Validate the price."""
        if not math.isfinite(self.price) or self.price < 0:
            raise ValueError(
                f"Travel price must be a finite non-negative amount, got {self.price}"
            )


@dataclass(eq=False, slots=True)
class Company:
    """A node of the company hierarchy.

    Nodes compare by identity; the id is unique within a run.

    Attributes:
        id: Unique company identifier
        parent_id: Identifier of the parent, or ROOT_PARENT_ID
        name: Company name
        created_at: Opaque creation timestamp
        travels: Travels owned directly by this company, in input order
        children: Child companies, in linking order
        cost: Own travels plus all descendants, None until aggregated
    """

    id: str
    parent_id: str
    name: str
    created_at: str
    travels: list[Travel] = field(default_factory=list)
    children: list[Company] = field(default_factory=list)
    cost: Optional[float] = None

    @property
    def is_valued(self) -> bool:
        """Check if the aggregation pass has set this node's cost."""
        return self.cost is not None

    @property
    def total_cost(self) -> float:
        """Return the aggregated cost.

        Raises:
            CostNotComputedError: If the aggregation pass has not run.
        """
        if self.cost is None:
            raise CostNotComputedError(
                f"Cost of company {self.id} has not been computed",
                company_id=self.id,
            )
        return self.cost

    @property
    def own_travel_cost(self) -> float:
        """Return the sum of this company's direct travel prices."""
        total = 0.0
        for travel in self.travels:
            total += travel.price
        return total

    def add_child(self, child: Company) -> None:
        self.children.append(child)

    def add_travel(self, travel: Travel) -> None:
        self.travels.append(travel)


@dataclass(frozen=True, slots=True)
class CompanyTree:
    """Result of building the hierarchy from raw records.

    Attributes:
        root: The root company, or None when no root candidate exists
        company_count: Number of companies indexed
        dropped_travels: Travels whose owning company does not exist
    """

    root: Optional[Company]
    company_count: int = 0
    dropped_travels: tuple[Travel, ...] = field(default_factory=tuple)

    @property
    def has_root(self) -> bool:
        return self.root is not None

    def iter_companies(self) -> list[Company]:
        """Return every company reachable from the root, parents first."""
        if self.root is None:
            return []
        ordered: list[Company] = []
        stack = [self.root]
        while stack:
            company = stack.pop()
            ordered.append(company)
            stack.extend(reversed(company.children))
        return ordered
