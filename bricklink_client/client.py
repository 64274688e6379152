"""HTTP client for the BrickLink store API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode, urljoin

import requests

from .config import ClientConfiguration
from .constants import PART_OUT_URL
from .converters import CONDITION, ITEM_TYPE, PART_OUT_ITEM_TYPE, PRICE_GUIDE_TYPE
from .enums import Condition, ItemType, PartOutItemType, PriceGuideType
from .errors import TransportError
from .images import ensure_image_url_scheme, minifig_image_url, part_image_url, set_image_url
from .models import InventoryItem, InventoryUpdate, PartOutValue, PriceGuide
from .oauth import build_authorization_header
from .parser import parse_inventory_item, parse_part_out_value, parse_price_guide

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass(slots=True)
class BricklinkClient:
    """Client issuing one OAuth-signed request per call.

    The configuration is captured at construction and never changes. Use the
    client as a context manager (or call :meth:`close`) to release the
    underlying connection pool.

    Calls share one ``requests.Session``, which is not documented as
    thread-safe: give each thread its own client. The configuration itself
    can be shared.
    """

    config: ClientConfiguration
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = requests.Session()
        self._session.headers.update({"Accept": JSON_CONTENT_TYPE})

    def __enter__(self) -> "BricklinkClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def get_part_out_value(
        self,
        item_number: str,
        item_type: PartOutItemType = PartOutItemType.SET,
        *,
        quantity: int = 1,
        break_minifigs: bool = True,
        break_sets_in_set: bool = False,
        include_instructions: bool = False,
        include_box: bool = False,
        include_extra_parts: bool = False,
        condition: Condition = Condition.NEW,
        timeout: Optional[float] = None,
    ) -> PartOutValue:
        """Return what ``item_number`` is worth when sold as separate lots.

        ``item_number`` may carry a sequence suffix (``"1610-2"``); without
        one the first release (sequence 1) is valued.
        """

        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        number, sequence = split_item_number(item_number)
        params = {
            "itemType": PART_OUT_ITEM_TYPE.encode(item_type),
            "itemNo": number,
            "itemSeq": sequence,
            "itemQty": quantity,
            "breakMinifigs": _flag(break_minifigs),
            "breakSets": _flag(break_sets_in_set),
            "incInstr": _flag(include_instructions),
            "incBox": _flag(include_box),
            "incParts": _flag(include_extra_parts),
            "itemCondition": CONDITION.encode(condition),
        }
        text = self.execute_request(_with_query(PART_OUT_URL, params), "GET", timeout=timeout)
        return parse_part_out_value(text)

    def get_price_guide(
        self,
        item_number: str,
        item_type: ItemType = ItemType.SET,
        *,
        guide_type: PriceGuideType = PriceGuideType.SOLD,
        condition: Condition = Condition.NEW,
        color_id: Optional[int] = None,
        currency_code: Optional[str] = None,
        country_code: Optional[str] = None,
        region: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> PriceGuide:
        """Return the sold or current-stock price guide of a catalog item."""

        if item_type is ItemType.SET and "-" not in item_number:
            item_number = f"{item_number}-1"
        params: Dict[str, Any] = {
            "guide_type": PRICE_GUIDE_TYPE.encode(guide_type),
            "new_or_used": CONDITION.encode(condition),
        }
        optional = {
            "color_id": color_id,
            "currency_code": currency_code,
            "country_code": country_code,
            "region": region,
        }
        params.update({key: value for key, value in optional.items() if value is not None})
        path = f"items/{ITEM_TYPE.encode(item_type)}/{quote(item_number, safe='')}/price"
        text = self.execute_request(_with_query(self._url(path), params), "GET", timeout=timeout)
        return parse_price_guide(text)

    def get_inventory(self, inventory_id: int, *, timeout: Optional[float] = None) -> InventoryItem:
        text = self.execute_request(self._url(f"inventories/{int(inventory_id)}"), "GET", timeout=timeout)
        return parse_inventory_item(text)

    def update_inventory(
        self, inventory_id: int, update: InventoryUpdate, *, timeout: Optional[float] = None
    ) -> InventoryItem:
        """Apply ``update`` to an inventory lot and return the updated lot."""

        text = self.execute_request(
            self._url(f"inventories/{int(inventory_id)}"),
            "PUT",
            body=update.as_payload(),
            timeout=timeout,
        )
        return parse_inventory_item(text)

    def ensure_image_url_scheme(self, url: str, scheme: str = "https") -> str:
        return ensure_image_url_scheme(url, scheme)

    def get_part_image_for_color(self, part_number: str, color_id: int, scheme: str = "https") -> str:
        return part_image_url(part_number, color_id, scheme)

    def get_minifig_image(self, number: str, scheme: str = "https") -> str:
        return minifig_image_url(number, scheme)

    def get_set_image(self, number: str, scheme: str = "https") -> str:
        return set_image_url(number, scheme)

    def execute_request(
        self,
        url: str,
        method: str = "GET",
        body: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> str:
        """Sign and send a single request and return the body text.

        The status code is not inspected: error envelopes come back with
        non-2xx codes and are decoded by the caller.
        """

        method = method.upper()
        headers = {"Authorization": build_authorization_header(self.config, url, method)}
        data: Optional[bytes] = None
        if body is not None:
            data = json.dumps(body, default=str).encode("utf-8")
            headers["Content-Type"] = JSON_CONTENT_TYPE

        logger.debug("BrickLink %s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self.config.timeout if timeout is None else timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        try:
            return response.text
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed while reading the response: {exc}") from exc
        finally:
            response.close()

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return urljoin(self.config.base_url, path)


def split_item_number(item_number: str) -> Tuple[str, int]:
    """Split ``"1610-2"`` into ``("1610", 2)``; the sequence defaults to 1."""

    item_number = item_number.strip()
    number, sep, suffix = item_number.rpartition("-")
    if sep and number and suffix.isdigit():
        return number, int(suffix)
    return item_number, 1


def _flag(value: bool) -> str:
    return "Y" if value else "N"


def _with_query(url: str, params: Mapping[str, Any]) -> str:
    # The query is part of the signed URL, so it is built here rather than
    # handed to requests as ``params``.
    return f"{url}?{urlencode(params, quote_via=quote)}"
