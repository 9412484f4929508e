"""
Base exception classes for application-wide error handling.

Every domain exception raised by this project derives from
BaseApplicationError so callers can branch on a machine-readable
error_code and serialize failures with to_dict().

Exception Hierarchy:
    BaseApplicationError (base)
    └── payments.exceptions.PaymentError - Payment adapter failures

Usage:
    from core.exceptions import BaseApplicationError

    try:
        ...
    except BaseApplicationError as e:
        return e.to_dict()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, processor codes, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a plain dict.

        Example:
            {
                "error": "Could not connect to Stripe. Please retry.",
                "error_code": "STRIPE_UNAVAILABLE",
                "details": {"stripe_code": "api_connection_error"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )
