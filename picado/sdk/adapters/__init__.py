"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Transport Adapters.
"""

from picado.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse
from picado.sdk.adapters.http import HttpAdapter
from picado.sdk.adapters.mock import MockAdapter

__all__ = [
    "BaseAdapter",
    "SDKRequest",
    "SDKResponse",
    "HttpAdapter",
    "MockAdapter",
]
