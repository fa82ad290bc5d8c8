"""Exceptions raised by the shipping resolution services."""
from shipping_backend.app.core.exceptions import ServiceError


class ShippingServiceError(ServiceError):
    """Base exception for shipping resolution errors."""


class InvalidInputError(ShippingServiceError):
    """Malformed district code or subtotal; rejected before any lookup."""
    def __init__(self, message: str):
        super().__init__(message, 400)


class ResolutionFailure(ShippingServiceError):
    """The zone/rate store could not be read (outage or malformed data)."""
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__("Error al cargar opciones de envío", 503)


class RateNotFoundError(ShippingServiceError):
    def __init__(self, rate_id: int):
        super().__init__(f"Rate {rate_id} not found", 404)
