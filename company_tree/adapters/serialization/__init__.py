"""Serialization adapters - Implementations of the TreeSerializerPort.

Available implementations:
- JsonTreeSerializer: Pretty-printed JSON via pydantic view models
"""

from .json_serializer import CompanyView, JsonTreeSerializer, TravelView

__all__ = ["JsonTreeSerializer", "CompanyView", "TravelView"]
