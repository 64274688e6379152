"""Data models returned by the BrickLink client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .converters import COMPLETENESS, CONDITION
from .enums import Completeness, Condition, ItemType
from .errors import DecodeError


def _require_non_negative(name: str, value: Any) -> None:
    if value is not None and value < 0:
        raise DecodeError(f"must not be negative, got {value}", field=name)


@dataclass(slots=True)
class PartOutValue:
    """Value of an item when sold as its individual components.

    Attributes
    ----------
    average_six_month_sales_value:
        Sum of the six month average sale prices of every included lot, in USD.
    current_sales_value:
        Sum of the current lowest asking prices of every included lot, in USD.
    included_items_count:
        Number of individual items the valuation covers.
    included_lots_count:
        Number of distinct lots the valuation covers.

    Zero is a legal value for every field; in practice it usually means the
    item number or type was wrong.
    """

    average_six_month_sales_value: Decimal
    current_sales_value: Decimal
    included_items_count: int
    included_lots_count: int

    def __post_init__(self) -> None:
        for name in (
            "average_six_month_sales_value",
            "current_sales_value",
            "included_items_count",
            "included_lots_count",
        ):
            _require_non_negative(name, getattr(self, name))


@dataclass(slots=True)
class PriceDetail:
    """A single sale (sold guide) or open lot (stock guide)."""

    quantity: int
    unit_price: Decimal
    seller_country_code: Optional[str] = None
    buyer_country_code: Optional[str] = None
    shipping_available: Optional[bool] = None
    date_ordered: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_non_negative("quantity", self.quantity)
        _require_non_negative("unit_price", self.unit_price)


@dataclass(slots=True)
class PriceGuide:
    item_number: str
    item_type: ItemType
    condition: Condition
    currency_code: str
    min_price: Decimal
    max_price: Decimal
    avg_price: Decimal
    qty_avg_price: Decimal
    unit_quantity: int
    total_quantity: int
    price_detail: List[PriceDetail] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in (
            "min_price",
            "max_price",
            "avg_price",
            "qty_avg_price",
            "unit_quantity",
            "total_quantity",
        ):
            _require_non_negative(name, getattr(self, name))


@dataclass(slots=True)
class InventoryItem:
    """A lot in the authenticated user's store inventory.

    ``completeness`` is only reported for sets; it is ``None`` otherwise.
    """

    inventory_id: int
    item_number: str
    item_type: ItemType
    color_id: int
    quantity: int
    condition: Condition
    unit_price: Decimal
    completeness: Optional[Completeness] = None
    description: str = ""
    remarks: str = ""

    def __post_init__(self) -> None:
        _require_non_negative("unit_price", self.unit_price)


@dataclass(slots=True)
class InventoryUpdate:
    """Changes to apply to an inventory lot. Unset fields are left untouched.

    ``quantity`` is a delta: BrickLink adds it to the current quantity.
    """

    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None
    condition: Optional[Condition] = None
    completeness: Optional[Completeness] = None
    description: Optional[str] = None
    remarks: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        """Return the JSON body understood by the inventory endpoint."""

        payload: Dict[str, Any] = {}
        if self.quantity is not None:
            payload["quantity"] = f"{self.quantity:+d}"
        if self.unit_price is not None:
            payload["unit_price"] = str(self.unit_price)
        if self.condition is not None:
            payload["new_or_used"] = CONDITION.encode(self.condition)
        if self.completeness is not None:
            payload["completeness"] = COMPLETENESS.encode(self.completeness)
        if self.description is not None:
            payload["description"] = self.description
        if self.remarks is not None:
            payload["remarks"] = self.remarks
        return payload
