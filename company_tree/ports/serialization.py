"""Serialization port - Abstraction for rendering the company tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Company


class TreeSerializerPort(Protocol):
    """Port for tree serialization.

    Implementation: adapters/serialization/json_serializer.py

    The serializer only reads the tree; every node must already carry
    its aggregated cost.
    """

    def serialize(self, root: Optional[Company]) -> str:
        """Render the tree rooted at root.

        Args:
            root: The root company, or None for an empty hierarchy.

        Returns:
            The textual representation of the tree.

        Raises:
            CostNotComputedError: If a node has not been aggregated.
        """
        ...
