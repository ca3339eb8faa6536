"""
Custom exceptions for the promo extractor.

This module defines all custom exceptions used throughout the application
for better error handling and debugging.
"""

from typing import Any, Optional


class PromoExtractorException(Exception):
    """Base exception for all promo-extractor-specific errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Input Exceptions
# =============================================================================


class InputValidationError(PromoExtractorException):
    """Extraction request is malformed or missing required fields."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None) -> None:
        """Initialize with the individual field errors."""
        super().__init__(message, {"errors": errors} if errors else None)
        self.errors = errors or []


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(PromoExtractorException):
    """Configuration error."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Required configuration missing."""

    def __init__(self, config_name: str) -> None:
        """Initialize with config name."""
        message = f"Required configuration '{config_name}' is missing"
        super().__init__(message, {"config_name": config_name})


# =============================================================================
# Extraction Exceptions
# =============================================================================


class ExtractionError(PromoExtractorException):
    """Base exception for extraction strategy failures."""

    pass


class ApiError(ExtractionError):
    """
    Remote model endpoint failed.

    The status code drives retry classification: 408 is a timeout, 429 a rate
    limit, 5xx a server error and 0 stands in for a network failure with no
    HTTP response at all.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize with the HTTP status (or 0 for network errors)."""
        super().__init__(message, {"status_code": status_code, **(details or {})})
        self.status_code = status_code

    @property
    def kind(self) -> str:
        """Short classification of the failure for logs."""
        if self.status_code == 0:
            return "network"
        if self.status_code == 408:
            return "timeout"
        if self.status_code == 429:
            return "rate_limit"
        if 500 <= self.status_code < 600:
            return "server"
        return "client"


class ParsingError(ExtractionError):
    """Model reply is not valid or expected JSON."""

    pass
