"""OAuth 1.0a request signing (HMAC-SHA1).

BrickLink authenticates every call with a two-legged OAuth 1.0a signature: the
consumer and the access token are both issued up front, so there is no token
dance, only the per-request signature computed here.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from .config import ClientConfiguration

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: object) -> str:
    """Encode ``value`` per RFC 3986, leaving only ``A-Za-z0-9-._~`` as is."""

    return quote(str(value), safe="~")


def normalize_parameters(params: Iterable[Tuple[str, str]]) -> str:
    """Encode, sort (by encoded key, then encoded value) and join parameters."""

    encoded = sorted((percent_encode(key), percent_encode(value)) for key, value in params)
    return "&".join(f"{key}={value}" for key, value in encoded)


def base_url(url: str) -> str:
    """Return ``url`` without query and fragment, scheme and host lower-cased."""

    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    netloc = (parts.hostname or "").lower()
    if parts.port and parts.port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((scheme, netloc, parts.path or "/", "", ""))


def signature_base_string(method: str, url: str, params: Iterable[Tuple[str, str]]) -> str:
    return "&".join(
        (
            method.upper(),
            percent_encode(base_url(url)),
            percent_encode(normalize_parameters(params)),
        )
    )


def signing_key(consumer_secret: str, token_secret: str) -> str:
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


def _new_nonce() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return str(int(time.time()))


@dataclass(slots=True)
class OAuthRequest:
    """A single signed call. Nonce and timestamp are fresh unless supplied."""

    consumer_key: str
    consumer_secret: str = field(repr=False)
    token_value: str
    token_secret: str = field(repr=False)
    url: str
    method: str = "GET"
    nonce: str = field(default_factory=_new_nonce)
    timestamp: str = field(default_factory=_now)

    def oauth_parameters(self) -> List[Tuple[str, str]]:
        return [
            ("oauth_consumer_key", self.consumer_key),
            ("oauth_nonce", self.nonce),
            ("oauth_signature_method", SIGNATURE_METHOD),
            ("oauth_timestamp", str(self.timestamp)),
            ("oauth_token", self.token_value),
            ("oauth_version", OAUTH_VERSION),
        ]

    def query_parameters(self) -> List[Tuple[str, str]]:
        return parse_qsl(urlsplit(self.url).query, keep_blank_values=True)

    def base_string(self) -> str:
        return signature_base_string(
            self.method, self.url, self.oauth_parameters() + self.query_parameters()
        )

    def signature(self) -> str:
        key = signing_key(self.consumer_secret, self.token_secret)
        digest = hmac.new(key.encode("utf-8"), self.base_string().encode("utf-8"), hashlib.sha1)
        return base64.b64encode(digest.digest()).decode("ascii")

    def authorization_header(self) -> str:
        params = self.oauth_parameters() + [("oauth_signature", self.signature())]
        rendered = ",".join(
            f'{percent_encode(key)}="{percent_encode(value)}"' for key, value in sorted(params)
        )
        return f"OAuth {rendered}"


def build_authorization_header(config: ClientConfiguration, url: str, method: str) -> str:
    """Validate ``config`` and return a freshly signed ``Authorization`` value."""

    config.validate()
    request = OAuthRequest(
        consumer_key=config.consumer_key,
        consumer_secret=config.consumer_secret,
        token_value=config.token_value,
        token_secret=config.token_secret,
        url=url,
        method=method,
    )
    return request.authorization_header()
