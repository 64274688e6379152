"""Exceptions raised by the BrickLink client."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Discriminator shared by every :class:`BricklinkError`."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    DECODE = "decode"


class BricklinkError(RuntimeError):
    """Base class for all errors raised by this package."""

    kind: ErrorKind


class ConfigurationError(BricklinkError):
    """Raised when credentials are missing, before any request is built."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


class TransportError(BricklinkError):
    """Raised when the HTTP request itself fails (connection, timeout, ...)."""

    kind = ErrorKind.TRANSPORT


class UpstreamRequestError(BricklinkError):
    """Raised when the API answers with an error envelope."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, code: int, message: str, description: str = "") -> None:
        detail = f"{code} {message}"
        if description:
            detail = f"{detail}: {description}"
        super().__init__(detail)
        self.code = code
        self.message = message
        self.description = description

    @property
    def not_found(self) -> bool:
        return self.code == 404


class DecodeError(BricklinkError):
    """Raised when a response body does not have the expected shape.

    ``field`` holds the dotted path of the offending value, e.g.
    ``data.price_detail.0.unit_price``.
    """

    kind = ErrorKind.DECODE

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(f"{field}: {message}" if field else message)
        self.reason = message
        self.field = field
