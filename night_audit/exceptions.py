"""
Custom exceptions for the night-audit parser.

Provides a hierarchy of exceptions with error codes for consistent error handling.
The line parser itself never raises for malformed report text; these cover
configuration and input problems in the surrounding layers.
"""
from typing import Any, Dict, Optional


class NightAuditError(Exception):
    """
    Base exception for all night-audit errors.

    Attributes:
        error_code: Unique error code (e.g., NA-001)
        message: Human-readable error message
        details: Additional error context
    """
    error_code: str = "NA-000"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging or reporting."""
        return {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# Configuration Errors (NA-1XX)
class ConfigurationError(NightAuditError):
    """Invalid parser or application configuration."""
    error_code = "NA-100"

    def __init__(self, message: str = "Invalid configuration", **kwargs):
        super().__init__(message, **kwargs)


# Input Errors (NA-2XX)
class ReportInputError(NightAuditError):
    """Report text could not be read."""
    error_code = "NA-200"

    def __init__(self, message: str = "Failed to read report text", **kwargs):
        super().__init__(message, **kwargs)


# Processing Errors (NA-3XX)
class CreditCardProcessingError(NightAuditError):
    """Credit card deposit records could not be built."""
    error_code = "NA-300"

    def __init__(self, message: str = "Failed to process credit card deposits", **kwargs):
        super().__init__(message, **kwargs)
