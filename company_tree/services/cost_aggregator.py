"""Cost aggregator - Bottom-up rollup of travel costs.

cost(node) = sum of its travel prices + sum of its children's costs.

The traversal uses an explicit stack so deep ownership chains do not
hit the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..domain.errors import HierarchyCycleError
from ..domain.models import Company


@dataclass
class CostAggregator:
    """Computes and stores the cost of every node of a built tree."""

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def aggregate(self, root: Optional[Company]) -> float:
        """Fill in cost on every node reachable from root.

        Args:
            root: Root of a built tree, or None.

        Returns:
            The root's total cost (0.0 for an empty hierarchy).

        Raises:
            HierarchyCycleError: If a node is reached twice.
        """
        if root is None:
            return 0.0

        visited: set[int] = set()
        # (company, children_done) pairs; a node is valued once its
        # children have been popped and valued.
        stack: List[Tuple[Company, bool]] = [(root, False)]
        count = 0

        while stack:
            company, children_done = stack.pop()
            if children_done:
                total = company.own_travel_cost
                for child in company.children:
                    total += child.total_cost
                company.cost = total
                count += 1
                continue

            if id(company) in visited:
                raise HierarchyCycleError(
                    f"Company {company.id} is reached more than once",
                    company_ids=(company.id,),
                )
            visited.add(id(company))

            stack.append((company, True))
            for child in reversed(company.children):
                stack.append((child, False))

        self._logger.info(
            "Costs aggregated",
            extra={"root": root.id, "companies": count, "total_cost": root.cost},
        )
        return root.total_cost
