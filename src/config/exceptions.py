"""Configuration-related exceptions.

This module defines the exceptions that can be raised while reading the
action inputs and the triggering-event context.
"""

from typing import Any


class ConfigurationError(Exception):
    """Base exception for all configuration-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize configuration error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.details = details or {}


class ConfigurationValidationError(ConfigurationError):
    """Exception raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        validation_errors: list[Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize configuration validation error.

        Args:
            message: Human-readable error message
            validation_errors: List of specific validation errors
            details: Optional dictionary with additional error details
        """
        super().__init__(message, details)
        self.validation_errors = validation_errors or []
