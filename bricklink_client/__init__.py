"""High level package exports for the BrickLink client."""

from .client import BricklinkClient
from .config import ClientConfiguration
from .enums import Completeness, Condition, ItemType, PartOutItemType, PriceGuideType
from .errors import (
    BricklinkError,
    ConfigurationError,
    DecodeError,
    ErrorKind,
    TransportError,
    UpstreamRequestError,
)
from .models import InventoryItem, InventoryUpdate, PartOutValue, PriceDetail, PriceGuide

__all__ = [
    "BricklinkClient",
    "ClientConfiguration",
    "Completeness",
    "Condition",
    "ItemType",
    "PartOutItemType",
    "PriceGuideType",
    "BricklinkError",
    "ConfigurationError",
    "DecodeError",
    "ErrorKind",
    "TransportError",
    "UpstreamRequestError",
    "InventoryItem",
    "InventoryUpdate",
    "PartOutValue",
    "PriceDetail",
    "PriceGuide",
]
