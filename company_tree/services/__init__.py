"""Services layer - Application orchestration.

Available services:
- HierarchyBuilder: Builds the company tree from raw records
- CostAggregator: Rolls travel costs up the tree
- CompanyTreeService: Fetch, build, aggregate and serialize in one run
"""

from .company_tree_service import CompanyTreeService
from .cost_aggregator import CostAggregator
from .hierarchy_builder import HierarchyBuilder

__all__ = ["HierarchyBuilder", "CostAggregator", "CompanyTreeService"]
