from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from bricklink_client.enums import Completeness, Condition, ItemType
from bricklink_client.errors import DecodeError, ErrorKind, UpstreamRequestError
from bricklink_client.models import PartOutValue
from bricklink_client.parser import (
    parse_envelope,
    parse_inventory_item,
    parse_part_out_value,
    parse_price_guide,
)

DATA = Path(__file__).parent / "data"


def _fixture(name: str) -> str:
    return (DATA / name).read_text(encoding="utf-8")


def _envelope(data: object, code: int = 200) -> str:
    return json.dumps({"meta": {"code": code, "message": "OK", "description": "OK"}, "data": data})


def test_parse_part_out_value() -> None:
    value = parse_part_out_value(_fixture("part_out_1610.json"))

    assert value == PartOutValue(
        average_six_month_sales_value=Decimal("52.1834"),
        current_sales_value=Decimal("61.4400"),
        included_items_count=84,
        included_lots_count=31,
    )


def test_zero_part_out_values_are_accepted() -> None:
    text = _envelope(
        {
            "average_six_month_sales_value": 0,
            "current_sales_value": "0.0000",
            "included_items_count": 0,
            "included_lots_count": 0,
        }
    )

    value = parse_part_out_value(text)

    assert value.current_sales_value == 0
    assert value.included_lots_count == 0


def test_negative_part_out_value_names_the_field() -> None:
    text = _envelope(
        {
            "average_six_month_sales_value": "1.00",
            "current_sales_value": "2.00",
            "included_items_count": -1,
            "included_lots_count": 1,
        }
    )

    with pytest.raises(DecodeError) as excinfo:
        parse_part_out_value(text)

    assert excinfo.value.field == "data.included_items_count"


def test_fractional_count_is_rejected() -> None:
    text = _envelope(
        {
            "average_six_month_sales_value": "1.00",
            "current_sales_value": "2.00",
            "included_items_count": 84.9,
            "included_lots_count": 31.0,
        }
    )

    with pytest.raises(DecodeError) as excinfo:
        parse_part_out_value(text)

    assert excinfo.value.field == "data.included_items_count"


def test_negative_price_detail_names_the_entry() -> None:
    data = json.loads(_fixture("price_guide_sold.json"))["data"]
    data["price_detail"][1]["unit_price"] = "-3.00"

    with pytest.raises(DecodeError) as excinfo:
        parse_price_guide(_envelope(data))

    assert excinfo.value.field == "data.price_detail.1.unit_price"


def test_missing_part_out_field_names_the_path() -> None:
    text = _envelope({"average_six_month_sales_value": "1.00", "current_sales_value": "2.00"})

    with pytest.raises(DecodeError) as excinfo:
        parse_part_out_value(text)

    assert excinfo.value.field == "data.included_items_count"
    assert excinfo.value.kind is ErrorKind.DECODE


def test_error_envelope_raises_upstream_error() -> None:
    with pytest.raises(UpstreamRequestError) as excinfo:
        parse_part_out_value(_fixture("part_out_not_found.json"))

    error = excinfo.value
    assert error.code == 404
    assert error.message == "RESOURCE_NOT_FOUND"
    assert "1212adsa" in error.description
    assert error.not_found
    assert error.kind is ErrorKind.UPSTREAM


@pytest.mark.parametrize(
    ("text", "field"),
    [
        ("<html>Service Unavailable</html>", None),
        ("[1, 2]", None),
        ('{"data": {}}', "meta"),
        ('{"meta": {"code": "abc"}}', "meta.code"),
        ('{"meta": {"code": 200}}', "data"),
        ('{"meta": {"code": Infinity}, "data": {}}', None),
        ('{"meta": {"code": 200}, "data": {"included_items_count": NaN}}', None),
        ('{"meta": {"code": 1e400}, "data": {}}', "meta.code"),
        ('{"meta": {"code": 200.5}, "data": {}}', "meta.code"),
    ],
)
def test_malformed_envelopes_raise_decode_error(text: str, field: str | None) -> None:
    with pytest.raises(DecodeError) as excinfo:
        parse_envelope(text)

    assert excinfo.value.field == field


def test_parse_price_guide() -> None:
    guide = parse_price_guide(_fixture("price_guide_sold.json"))

    assert guide.item_number == "1610-1"
    assert guide.item_type is ItemType.SET
    assert guide.condition is Condition.NEW
    assert guide.currency_code == "USD"
    assert guide.avg_price == Decimal("112.5000")
    assert guide.unit_quantity == 2
    assert len(guide.price_detail) == 2
    first = guide.price_detail[0]
    assert first.unit_price == Decimal("149.99")
    assert first.seller_country_code == "DE"
    assert first.shipping_available is None
    assert first.date_ordered == datetime(2020, 6, 5, 14, 20, 12, tzinfo=timezone.utc)


def test_price_guide_detail_errors_include_the_index() -> None:
    data = json.loads(_fixture("price_guide_sold.json"))["data"]
    data["price_detail"][1]["unit_price"] = "n/a"

    with pytest.raises(DecodeError) as excinfo:
        parse_price_guide(_envelope(data))

    assert excinfo.value.field == "data.price_detail.1.unit_price"


def test_price_guide_rejects_unknown_item_type() -> None:
    data = json.loads(_fixture("price_guide_sold.json"))["data"]
    data["item"]["type"] = "SPACESHIP"

    with pytest.raises(DecodeError) as excinfo:
        parse_price_guide(_envelope(data))

    assert excinfo.value.field == "data.item.type"


def test_stock_guide_details_carry_shipping_flag() -> None:
    data = json.loads(_fixture("price_guide_sold.json"))["data"]
    data["price_detail"] = [{"quantity": 4, "unit_price": "3.10", "shipping_available": True}]

    guide = parse_price_guide(_envelope(data))

    assert guide.price_detail[0].shipping_available is True
    assert guide.price_detail[0].date_ordered is None


def test_parse_inventory_item() -> None:
    item = parse_inventory_item(_fixture("inventory_set.json"))

    assert item.inventory_id == 50592684
    assert item.item_number == "7774-1"
    assert item.item_type is ItemType.SET
    assert item.condition is Condition.USED
    assert item.completeness is Completeness.INCOMPLETE
    assert item.unit_price == Decimal("45")
    assert item.remarks == "shelf 4"


def test_inventory_completeness_quirks() -> None:
    data = json.loads(_fixture("inventory_set.json"))["data"]

    data["completeness"] = "Z"
    assert parse_inventory_item(_envelope(data)).completeness is Completeness.COMPLETE

    del data["completeness"]
    assert parse_inventory_item(_envelope(data)).completeness is None
