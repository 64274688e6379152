"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .constants import DEFAULT_BASE_URL
from .errors import ConfigurationError

_CREDENTIAL_FIELDS = ("consumer_key", "consumer_secret", "token_value", "token_secret")


@dataclass(frozen=True, slots=True)
class ClientConfiguration:
    """Credentials and transport settings captured once by a client.

    The four credentials are issued by BrickLink when registering an API
    consumer. Instances are immutable, so a configuration can be shared between
    threads and clients freely.
    """

    consumer_key: str
    consumer_secret: str = field(repr=False)
    token_value: str
    token_secret: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", f"{self.base_url}/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfiguration":
        """Build a configuration from ``BRICKLINK_*`` environment variables."""

        env = os.environ if environ is None else environ
        timeout = env.get("BRICKLINK_TIMEOUT")
        try:
            timeout_seconds = float(timeout) if timeout else 30
        except ValueError as exc:
            raise ConfigurationError(f"BRICKLINK_TIMEOUT is not a number: {timeout!r}") from exc
        return cls(
            consumer_key=env.get("BRICKLINK_CONSUMER_KEY", ""),
            consumer_secret=env.get("BRICKLINK_CONSUMER_SECRET", ""),
            token_value=env.get("BRICKLINK_TOKEN_VALUE") or env.get("BRICKLINK_TOKEN", ""),
            token_secret=env.get("BRICKLINK_TOKEN_SECRET", ""),
            base_url=env.get("BRICKLINK_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout_seconds,
        )

    @property
    def missing_credentials(self) -> tuple[str, ...]:
        return tuple(
            name for name in _CREDENTIAL_FIELDS if not (getattr(self, name) or "").strip()
        )

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` if any credential is blank."""

        missing = self.missing_credentials
        if missing:
            raise ConfigurationError(
                "BrickLink credentials are not configured: {}".format(", ".join(missing)),
                missing=missing,
            )
