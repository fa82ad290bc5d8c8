# shipping_backend/app/services/__init__.py
"""
Services layer for shipping resolution.
Keeps API endpoints thin and business logic testable and reusable.
"""

from shipping_backend.app.services.shipping import ShippingService
from shipping_backend.app.services.shipping_errors import (
    ShippingServiceError,
    InvalidInputError,
    ResolutionFailure,
    RateNotFoundError,
)
from shipping_backend.app.services.zone_directory import ZoneDirectory
from shipping_backend.app.services.rate_catalog import RateCatalog
from shipping_backend.app.services.locations import (
    LocationService,
    LocationServiceError,
    LocationNotFoundError,
)

__all__ = [
    # Shipping resolution
    "ShippingService",
    "ShippingServiceError",
    "InvalidInputError",
    "ResolutionFailure",
    "RateNotFoundError",
    "ZoneDirectory",
    "RateCatalog",
    # Locations
    "LocationService",
    "LocationServiceError",
    "LocationNotFoundError",
]
