"""Domain layer - Core business models and errors.

This module contains the tree models and typed errors used
throughout the application. No external dependencies.
"""

from .errors import (
    CompanyTreeError,
    CostNotComputedError,
    DanglingReferenceError,
    DuplicateCompanyError,
    FetchError,
    HierarchyCycleError,
    RecordFormatError,
    RootResolutionError,
)
from .models import ROOT_PARENT_ID, Company, CompanyTree, Travel

__all__ = [
    # Models
    "ROOT_PARENT_ID",
    "Travel",
    "Company",
    "CompanyTree",
    # Errors
    "CompanyTreeError",
    "DanglingReferenceError",
    "DuplicateCompanyError",
    "RootResolutionError",
    "HierarchyCycleError",
    "RecordFormatError",
    "FetchError",
    "CostNotComputedError",
]
