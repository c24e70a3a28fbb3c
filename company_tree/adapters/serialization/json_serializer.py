"""JSON tree serializer adapter.

Each node is rendered through pydantic view models, which fix the
external field names (camelCase) and their order: id, parentId, name,
createdAt, cost, [travels], children. The nesting itself is laid out
with an explicit stack, so deep hierarchies do not hit the recursion
limit.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...config import OutputConfig, get_config
from ...domain.errors import HierarchyCycleError
from ...domain.models import Company, Travel


class TravelView(BaseModel):
    """External representation of a travel."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    price: float
    departure: str
    destination: str
    company_id: str
    created_at: str

    @classmethod
    def from_travel(cls, travel: Travel) -> TravelView:
        return cls(
            id=travel.id,
            price=travel.price,
            departure=travel.departure,
            destination=travel.destination,
            company_id=travel.company_id,
            created_at=travel.created_at,
        )


class CompanyView(BaseModel):
    """External representation of a company's own fields.

    Children are laid out by JsonTreeSerializer, which walks the tree
    with an explicit stack.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    parent_id: str
    name: str
    created_at: str
    cost: float
    travels: Optional[List[TravelView]] = None

    @classmethod
    def from_company(cls, company: Company, include_travels: bool = False) -> CompanyView:
        """Build the view of a single node.

        Raises:
            CostNotComputedError: If the node has not been aggregated.
        """
        travels = None
        if include_travels:
            travels = [TravelView.from_travel(t) for t in company.travels]
        return cls(
            id=company.id,
            parent_id=company.parent_id,
            name=company.name,
            created_at=company.created_at,
            cost=company.total_cost,
            travels=travels,
        )


@dataclass
class JsonTreeSerializer:
    """Pretty-printed JSON serializer.

    This adapter implements TreeSerializerPort. Both outputs are built
    with an explicit stack, so tree depth is not bounded by the
    interpreter's recursion limit.

    Attributes:
        config: Output configuration (indent, include_travels)
    """

    config: OutputConfig = field(default_factory=lambda: get_config().output)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _node_data(self, company: Company) -> dict[str, Any]:
        view = CompanyView.from_company(company, self.config.include_travels)
        return view.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _walk(self, root: Company) -> Iterator[Company]:
        """Yield root and its descendants, parents first, in children order.

        Raises:
            HierarchyCycleError: If a node is reached twice.
        """
        visited: set[int] = set()
        stack = [root]
        while stack:
            company = stack.pop()
            if id(company) in visited:
                raise HierarchyCycleError(
                    f"Company {company.id} is reached more than once",
                    company_ids=(company.id,),
                )
            visited.add(id(company))
            yield company
            stack.extend(reversed(company.children))

    def to_data(self, root: Optional[Company]) -> Optional[dict[str, Any]]:
        """Return the tree as plain Python data, keyed like the JSON output."""
        if root is None:
            return None

        nodes: Dict[int, dict[str, Any]] = {}
        ordered = list(self._walk(root))
        for company in ordered:
            data = self._node_data(company)
            data["children"] = []
            nodes[id(company)] = data
        for company in ordered:
            nodes[id(company)]["children"].extend(
                nodes[id(child)] for child in company.children
            )
        return nodes[id(root)]

    def serialize(self, root: Optional[Company]) -> str:
        """Render the tree rooted at root as JSON.

        A missing root renders as 'null'.
        """
        if root is None:
            self._logger.warning("Serializing an empty hierarchy")
            return "null"

        indent = self.config.indent if self.config.indent > 0 else None
        text = "".join(self._render(root, indent))
        self._logger.debug(
            "Tree serialized",
            extra={"root": root.id, "characters": len(text)},
        )
        return text

    def _render(self, root: Company, indent: Optional[int]) -> Iterator[str]:
        """Yield the JSON text of the tree piece by piece.

        The stack holds either literal text or a (company, level) pair,
        level being the indentation depth of the company's opening brace.
        """
        key_sep = ": " if indent else ":"

        def newline(level: int) -> str:
            return "\n" + " " * (indent * level) if indent else ""

        def dump(value: Any, level: int) -> str:
            text = json.dumps(
                value,
                indent=indent,
                separators=None if indent else (",", ":"),
                ensure_ascii=False,
            )
            return text.replace("\n", newline(level)) if indent else text

        visited: set[int] = set()
        stack: List[Union[str, Tuple[Company, int]]] = [(root, 0)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                yield item
                continue

            company, level = item
            if id(company) in visited:
                raise HierarchyCycleError(
                    f"Company {company.id} is reached more than once",
                    company_ids=(company.id,),
                )
            visited.add(id(company))

            fields = [
                newline(level + 1) + json.dumps(key) + key_sep + dump(value, level + 1)
                for key, value in self._node_data(company).items()
            ]
            fields.append(newline(level + 1) + '"children"' + key_sep + "[")
            yield "{" + ",".join(fields)

            if not company.children:
                stack.append("]" + newline(level) + "}")
                continue

            stack.append(newline(level + 1) + "]" + newline(level) + "}")
            for i in range(len(company.children) - 1, -1, -1):
                stack.append((company.children[i], level + 2))
                stack.append(("," if i else "") + newline(level + 2))
