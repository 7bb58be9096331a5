"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Request URL resolution.

Turns a caller-supplied relative path into the request target for the
configured base address, without doubled separators or a doubled
``/api`` prefix.
"""

from __future__ import annotations

import re

from picado.logging_config import get_logger

logger = get_logger(__name__)

_API_SUFFIX = re.compile(r"/api$", re.IGNORECASE)
_API_PREFIX = re.compile(r"^api(?=/|\?|$)", re.IGNORECASE)


class UrlResolver:
    """Resolve relative paths against a fixed base address.

    Args:
        base_url: Absolute (``https://host/api``), site-relative (``/api``)
            or empty base address.
        debug: Log a warning whenever a duplicated ``api/`` segment is
            removed, to help spot a misconfigured base address.
    """

    def __init__(self, base_url: str = "", debug: bool = False) -> None:
        self.base_url = (base_url or "").strip().rstrip("/")
        self.debug = debug

    def resolve(self, path: str) -> str:
        clean = str(path or "").lstrip("/")
        if _API_SUFFIX.search(self.base_url) and _API_PREFIX.match(clean):
            if self.debug:
                logger.warning(
                    f"Normalizing path to avoid /api/api: base={self.base_url} path={path}"
                )
            rest = clean[len("api"):]
            if not rest.startswith("/"):
                # Bare segment or segment plus query: the base already ends in it
                return f"{self.base_url}{rest}"
            clean = rest[1:]
        if not self.base_url:
            return f"/{clean}"
        return f"{self.base_url}/{clean}"

    __call__ = resolve


def resolve_url(base_url: str, path: str) -> str:
    """One-shot form of :meth:`UrlResolver.resolve`."""
    return UrlResolver(base_url).resolve(path)
