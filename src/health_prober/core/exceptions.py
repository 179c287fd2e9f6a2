"""Custom exceptions for Health Prober.

Request-shape problems are the only errors that reach callers. Everything
under ``ProbeError`` is caught by the prober and reported as an offline
result instead.
"""

from __future__ import annotations


class HealthProberError(Exception):
    """Base exception for all Health Prober errors."""
    pass


class RequestValidationError(HealthProberError):
    """Raised when a probe request is missing or has the wrong shape.

    Surfaced to HTTP callers as a 400 response.
    """
    pass


class ConfigurationError(HealthProberError):
    """Raised when a configuration file cannot be loaded."""
    pass


class ProbeError(HealthProberError):
    """Raised during a single reachability probe.

    This includes failures in:
    - URL parsing
    - Connection setup (DNS, refused, TLS)
    - Waiting for the response
    """
    pass


class URLParseError(ProbeError):
    """Raised when a target URL has no usable scheme or host."""
    pass


class ProbeConnectionError(ProbeError):
    """Raised when a network connection fails."""
    pass


class UnsupportedSchemeError(ProbeConnectionError):
    """Raised for schemes other than http/https, before any network I/O."""
    pass


class ProbeTimeoutError(ProbeError):
    """Raised when a probe exceeds its deadline."""

    def __init__(self, message: str = "Request timeout"):
        super().__init__(message)
