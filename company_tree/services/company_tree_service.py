"""Company tree service - Main orchestrator.

Runs one pass of the pipeline:
1. Fetch raw company and travel records
2. Build the hierarchy
3. Aggregate costs
4. Serialize the tree
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import SourceConfig, get_config
from ..domain.models import CompanyTree
from ..ports.records import RecordFetcherPort
from ..ports.serialization import TreeSerializerPort
from .cost_aggregator import CostAggregator
from .hierarchy_builder import HierarchyBuilder


@dataclass
class CompanyTreeService:
    """Builds, values and renders the company cost tree.

    Attributes:
        fetcher: Source of raw records
        builder: Hierarchy builder
        aggregator: Cost aggregator
        serializer: Tree serializer
        source: Resource names to fetch
    """

    fetcher: RecordFetcherPort
    builder: HierarchyBuilder
    aggregator: CostAggregator
    serializer: TreeSerializerPort
    source: SourceConfig = field(default_factory=lambda: get_config().source)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build_tree(self) -> CompanyTree:
        """Fetch the records and return the fully valued tree.

        Raises:
            FetchError: If records cannot be retrieved.
            CompanyTreeError: Any build error (dangling parent, bad record...).
        """
        companies = self.fetcher.fetch_records(self.source.companies_resource)
        travels = self.fetcher.fetch_records(self.source.travels_resource)

        tree = self.builder.build(companies, travels)
        total = self.aggregator.aggregate(tree.root)

        self._logger.info(
            "Company tree ready",
            extra={
                "companies": tree.company_count,
                "dropped_travels": len(tree.dropped_travels),
                "total_cost": total,
            },
        )
        return tree

    def render(self) -> str:
        """Build the tree and return its serialized form."""
        tree = self.build_tree()
        return self.serializer.serialize(tree.root)

    def close(self) -> None:
        """Release the fetcher's resources."""
        self.fetcher.close()
