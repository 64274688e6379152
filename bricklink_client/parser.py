"""JSON envelope decoding.

Every BrickLink response is wrapped in an envelope::

    {"meta": {"code": 200, "message": "OK", "description": "OK"}, "data": {...}}

A non-2xx ``meta.code`` is an upstream error (unknown item, bad parameter,
rejected signature, ...) and becomes :class:`UpstreamRequestError`; anything
that does not match the expected shape becomes :class:`DecodeError`.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Type, TypeVar

from .converters import COMPLETENESS, CONDITION, ITEM_TYPE
from .errors import DecodeError, UpstreamRequestError
from .models import InventoryItem, PartOutValue, PriceDetail, PriceGuide

logger = logging.getLogger(__name__)

_MISSING = object()

T = TypeVar("T")


def parse_envelope(text: str) -> Any:
    """Return the ``data`` member of a successful envelope."""

    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise DecodeError(f"response is not valid JSON ({exc})") from exc
    if not isinstance(document, dict):
        raise DecodeError("response is not a JSON object")

    meta = document.get("meta")
    if not isinstance(meta, dict):
        raise DecodeError("missing envelope", field="meta")
    code = _int(meta, "code", "meta")
    if not 200 <= code < 300:
        message = str(meta.get("message") or "")
        description = str(meta.get("description") or "")
        logger.warning("BrickLink request failed: %s %s %s", code, message, description)
        raise UpstreamRequestError(code, message, description)

    if "data" not in document:
        raise DecodeError("missing payload", field="data")
    return document["data"]


def parse_part_out_value(text: str) -> PartOutValue:
    data = _object(parse_envelope(text), "data")
    return _build(
        PartOutValue,
        "data",
        average_six_month_sales_value=_decimal(data, "average_six_month_sales_value", "data"),
        current_sales_value=_decimal(data, "current_sales_value", "data"),
        included_items_count=_int(data, "included_items_count", "data"),
        included_lots_count=_int(data, "included_lots_count", "data"),
    )


def parse_price_guide(text: str) -> PriceGuide:
    data = _object(parse_envelope(text), "data")
    item = _object(data.get("item"), "data.item")
    details = data.get("price_detail", [])
    if not isinstance(details, list):
        raise DecodeError("expected a list", field="data.price_detail")

    return _build(
        PriceGuide,
        "data",
        item_number=_str(item, "no", "data.item"),
        item_type=ITEM_TYPE.decode(item.get("type"), field="data.item.type"),
        condition=CONDITION.decode(data.get("new_or_used"), field="data.new_or_used"),
        currency_code=_str(data, "currency_code", "data"),
        min_price=_decimal(data, "min_price", "data"),
        max_price=_decimal(data, "max_price", "data"),
        avg_price=_decimal(data, "avg_price", "data"),
        qty_avg_price=_decimal(data, "qty_avg_price", "data"),
        unit_quantity=_int(data, "unit_quantity", "data"),
        total_quantity=_int(data, "total_quantity", "data"),
        price_detail=[
            _price_detail(_object(entry, f"data.price_detail.{index}"), f"data.price_detail.{index}")
            for index, entry in enumerate(details)
        ],
    )


def parse_inventory_item(text: str) -> InventoryItem:
    data = _object(parse_envelope(text), "data")
    item = _object(data.get("item"), "data.item")
    completeness = data.get("completeness")

    return _build(
        InventoryItem,
        "data",
        inventory_id=_int(data, "inventory_id", "data"),
        item_number=_str(item, "no", "data.item"),
        item_type=ITEM_TYPE.decode(item.get("type"), field="data.item.type"),
        color_id=_int(data, "color_id", "data", default=0),
        quantity=_int(data, "quantity", "data"),
        condition=CONDITION.decode(data.get("new_or_used"), field="data.new_or_used"),
        unit_price=_decimal(data, "unit_price", "data"),
        completeness=COMPLETENESS.decode(completeness) if completeness is not None else None,
        description=str(data.get("description") or ""),
        remarks=str(data.get("remarks") or ""),
    )


def _price_detail(entry: Mapping[str, Any], path: str) -> PriceDetail:
    shipping = entry.get("shipping_available")
    ordered = entry.get("date_ordered")
    return _build(
        PriceDetail,
        path,
        quantity=_int(entry, "quantity", path),
        unit_price=_decimal(entry, "unit_price", path),
        seller_country_code=entry.get("seller_country_code"),
        buyer_country_code=entry.get("buyer_country_code"),
        shipping_available=_bool(shipping, f"{path}.shipping_available") if shipping is not None else None,
        date_ordered=_datetime(ordered, f"{path}.date_ordered") if ordered is not None else None,
    )


# ----------------------------------------------------------------------
# field helpers
# ----------------------------------------------------------------------
def _build(model: Type[T], path: str, **values: Any) -> T:
    """Construct ``model``, prefixing validation errors with ``path``."""

    try:
        return model(**values)
    except DecodeError as exc:
        if exc.field is None:
            raise
        raise DecodeError(exc.reason, field=f"{path}.{exc.field}") from exc


def _reject_constant(name: str) -> Any:
    raise DecodeError(f"non-finite number {name} in response")


def _object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError("expected an object", field=path)
    return value


def _get(data: Mapping[str, Any], key: str, path: str, default: Any) -> Any:
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if default is not _MISSING:
            return default
        raise DecodeError("missing value", field=f"{path}.{key}")
    return value


def _str(data: Mapping[str, Any], key: str, path: str) -> str:
    value = _get(data, key, path, _MISSING)
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {value!r}", field=f"{path}.{key}")
    return value


def _int(data: Mapping[str, Any], key: str, path: str, default: Any = _MISSING) -> int:
    value = _get(data, key, path, default)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise DecodeError(f"expected an integer, got {value!r}", field=f"{path}.{key}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise DecodeError(f"expected an integer, got {value!r}", field=f"{path}.{key}") from exc


def _decimal(data: Mapping[str, Any], key: str, path: str) -> Decimal:
    # Prices arrive as strings ("12.3400") or plain numbers.
    value = _get(data, key, path, _MISSING)
    if isinstance(value, bool):
        raise DecodeError(f"expected a number, got {value!r}", field=f"{path}.{key}")
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise DecodeError(f"expected a number, got {value!r}", field=f"{path}.{key}") from exc
    if not number.is_finite():
        raise DecodeError(f"expected a finite number, got {value!r}", field=f"{path}.{key}")
    return number


def _bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"expected a boolean, got {value!r}", field=path)
    return value


def _datetime(value: Any, path: str) -> datetime:
    if not isinstance(value, str):
        raise DecodeError(f"expected an ISO 8601 timestamp, got {value!r}", field=path)
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise DecodeError(f"expected an ISO 8601 timestamp, got {value!r}", field=path) from exc
