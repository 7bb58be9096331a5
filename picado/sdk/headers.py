"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Request header construction.
"""

from __future__ import annotations

from typing import Dict

from picado.sdk.session import SessionStore

BEARER_PREFIX = "Bearer "
JSON_CONTENT_TYPE = "application/json"


def authorization_value(token: str) -> str:
    """Return the Authorization header value, prefixing the scheme once."""
    if token.startswith(BEARER_PREFIX):
        return token
    return f"{BEARER_PREFIX}{token}"


def build_headers(store: SessionStore, json: bool = True) -> Dict[str, str]:
    """Headers for an authenticated request."""
    headers = build_headers_no_auth(json)
    token = store.get()
    if token:
        headers["Authorization"] = authorization_value(token)
    return headers


def build_headers_no_auth(json: bool = True) -> Dict[str, str]:
    """Headers for credential-issuing requests. Never carries Authorization."""
    headers: Dict[str, str] = {}
    if json:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    return headers
