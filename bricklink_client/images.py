"""Catalog image URL helpers.

Images are served from a static host and need no authentication, so these are
plain string templates.
"""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from .constants import IMAGE_HOST, MINIFIG_IMAGE_PATH, PART_IMAGE_PATH, SET_IMAGE_PATH

_SCHEMES = {"http", "https"}


def _check_scheme(scheme: str) -> str:
    scheme = scheme.lower()
    if scheme not in _SCHEMES:
        raise ValueError(f"Unsupported scheme {scheme!r}; expected 'http' or 'https'.")
    return scheme


def _image_url(path: str, scheme: str) -> str:
    return f"{_check_scheme(scheme)}://{IMAGE_HOST}/{path}"


def ensure_image_url_scheme(url: str, scheme: str = "https") -> str:
    """Return ``url`` using ``scheme``.

    The API reports image links scheme-relative (``//img.bricklink.com/...``);
    absolute links with another scheme are rewritten too.
    """

    parts = urlsplit(url.strip())
    if not parts.netloc:
        raise ValueError(f"Not an absolute or scheme-relative URL: {url!r}")
    return urlunsplit((_check_scheme(scheme), parts.netloc, parts.path, parts.query, parts.fragment))


def part_image_url(part_number: str, color_id: int, scheme: str = "https") -> str:
    return _image_url(PART_IMAGE_PATH.format(color_id=color_id, number=part_number), scheme)


def minifig_image_url(number: str, scheme: str = "https") -> str:
    return _image_url(MINIFIG_IMAGE_PATH.format(number=number), scheme)


def set_image_url(number: str, scheme: str = "https") -> str:
    return _image_url(SET_IMAGE_PATH.format(number=number), scheme)
