from __future__ import annotations

from decimal import Decimal

import pytest

from bricklink_client.enums import Completeness, Condition
from bricklink_client.errors import DecodeError
from bricklink_client.models import InventoryUpdate, PartOutValue, PriceDetail


def test_part_out_value_rejects_negative_money() -> None:
    with pytest.raises(DecodeError) as excinfo:
        PartOutValue(Decimal("-0.01"), Decimal("1"), 1, 1)

    assert excinfo.value.field == "average_six_month_sales_value"


def test_price_detail_rejects_negative_quantity() -> None:
    with pytest.raises(DecodeError):
        PriceDetail(quantity=-2, unit_price=Decimal("1"))


def test_empty_inventory_update_has_empty_payload() -> None:
    assert InventoryUpdate().as_payload() == {}


def test_inventory_update_payload_uses_wire_tokens() -> None:
    update = InventoryUpdate(
        quantity=5,
        condition=Condition.NEW,
        completeness=Completeness.INCOMPLETE,
        description="",
        remarks="bin 7",
    )

    assert update.as_payload() == {
        "quantity": "+5",
        "new_or_used": "N",
        "completeness": "B",
        "description": "",
        "remarks": "bin 7",
    }
