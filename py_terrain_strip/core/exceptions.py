"""Errors raised by terrain generation."""


class InvalidConfiguration(ValueError):
    """Raised when generation parameters cannot produce a terrain strip."""
