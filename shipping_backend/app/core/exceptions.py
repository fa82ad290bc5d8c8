"""
Base exception for the service layer.

Each service module derives its own base from ServiceError
(e.g. ShippingServiceError, LocationServiceError) so API handlers can
catch a whole family with one `except` and map `status_code` to HTTP.
"""


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
