"""
Domain-specific exceptions for cars app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class CarsServiceError(Exception):
    """Base exception for all cars service errors."""
    pass


class CarNotFoundError(CarsServiceError):
    """Raised when a car does not exist or is not in the given group."""
    pass


class CarValidationError(CarsServiceError):
    """Raised when car input is invalid (empty name, bad coordinates)."""
    pass


class GeocodingError(CarsServiceError):
    """Raised when the geocoding provider fails or finds nothing."""
    pass
