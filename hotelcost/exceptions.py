"""Custom exception hierarchy for the hotelcost estimator."""

from __future__ import annotations


class HotelCostError(Exception):
    """Base exception for all hotelcost errors."""


class DataLoadError(HotelCostError):
    """Raised when reference data cannot be read at startup."""


class LocationStoreError(DataLoadError):
    """Raised when the remote location store cannot be queried."""
