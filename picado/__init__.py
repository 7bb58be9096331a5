"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Picado - Resilient API client for the Picado pick-up football backend.

Provides a request layer that transparently follows the backend's route
migrations (unprefixed to ``/api/``-prefixed) while surfacing real failures.
"""

from picado._version import __version__

__all__ = ["__version__"]
