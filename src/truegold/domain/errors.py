# src/truegold/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions. Provider failures
(ProviderUnavailableError, MalformedResponseError) are raised inside
adapters and converted to "unavailable" at the provider boundary;
InvalidInputError is the only error meant to reach the user.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class InvalidRateError(DomainError):
    """Raised when a rate or price value is invalid (e.g., negative, zero or NaN)."""
    pass


class ProviderUnavailableError(DomainError):
    """Raised when a provider cannot be reached (network error, timeout, non-200)."""
    pass


class MalformedResponseError(DomainError):
    """Raised when a provider answers with a payload that cannot be parsed."""
    pass


class NoDataAvailableError(DomainError):
    """Raised when every tier of a fallback chain came up empty."""
    pass


class InvalidInputError(DomainError):
    """Raised when user input (weight, price, purity) is invalid."""
    pass
