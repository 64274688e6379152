"""Domain enumerations. Wire tokens live in :mod:`bricklink_client.converters`."""

from __future__ import annotations

from enum import Enum


class Completeness(Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    SEALED = "sealed"


class Condition(Enum):
    NEW = "new"
    USED = "used"


class ItemType(Enum):
    MINIFIG = "minifig"
    PART = "part"
    SET = "set"
    BOOK = "book"
    GEAR = "gear"
    CATALOG = "catalog"
    INSTRUCTION = "instruction"
    UNSORTED_LOT = "unsorted_lot"
    ORIGINAL_BOX = "original_box"


class PartOutItemType(Enum):
    """Item types that can be valued with the part-out calculator."""

    SET = "set"
    MINIFIG = "minifig"
    GEAR = "gear"


class PriceGuideType(Enum):
    SOLD = "sold"
    STOCK = "stock"
