"""
Payment-specific exceptions for the Stripe adapter.

Exception Hierarchy:
    PaymentError (base for payment domain)
    └── PaymentProcessingError - Payment processing failures
        └── StripeError - Base for all Stripe errors
            ├── StripeCardDeclinedError - Card declined (permanent)
            ├── StripeInsufficientFundsError - Insufficient funds (permanent)
            ├── StripeInvalidRequestError - Invalid request params (permanent)
            ├── StripeProtocolError - Response missing a required field (permanent)
            ├── StripeRateLimitError - Rate limited (transient)
            └── StripeAPIUnavailableError - API unavailable (transient)

The adapter never retries. is_retryable only tells the caller whether
repeating the whole operation later could succeed.

Usage:
    from payments.exceptions import StripeError, StripeProtocolError

    try:
        StripeAdapter.create_ephemeral_key(customer_id)
    except StripeError as e:
        logger.warning("Ephemeral key failed: %s", e.error_code)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any

# Error code carried by every failed payment sheet or customer creation result.
STRIPE_PAYMENT_ERROR = "STRIPE_PAYMENT_ERROR"


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """Base exception for all payment operations."""

    default_error_code: str = "PAYMENT_ERROR"


class PaymentProcessingError(PaymentError):
    """Raised when the payment processor fails to complete a request."""

    default_error_code: str = "PAYMENT_PROCESSING_ERROR"


# =============================================================================
# Stripe-Specific Exceptions
# =============================================================================


class StripeError(PaymentProcessingError):
    """
    Base exception for all Stripe-related errors.

    Provides common attributes for Stripe error handling:
    - stripe_code: Stripe's internal error code
    - decline_code: Card decline code (if applicable)
    - is_retryable: Whether the operation may succeed if repeated later
    """

    default_error_code: str = "STRIPE_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        decline_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if stripe_code:
            details["stripe_code"] = stripe_code
        if decline_code:
            details["decline_code"] = decline_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code
        self.decline_code = decline_code


# -----------------------------------------------------------------------------
# Permanent Errors
# -----------------------------------------------------------------------------


class StripeCardDeclinedError(StripeError):
    """
    Card was declined by the issuing bank.

    The decline_code attribute contains the specific reason
    (generic_decline, expired_card, incorrect_cvc, ...).
    """

    default_error_code: str = "CARD_DECLINED"


class StripeInsufficientFundsError(StripeError):
    """Insufficient funds on the payment method."""

    default_error_code: str = "INSUFFICIENT_FUNDS"


class StripeInvalidRequestError(StripeError):
    """
    Invalid request parameters sent to Stripe.

    Possible causes:
    - Unknown customer id
    - Amount or currency rejected by Stripe
    - Invalid or revoked API key

    Note:
        This usually indicates a bug or a configuration problem,
        not a user error.
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"


class StripeProtocolError(StripeError):
    """
    Stripe answered successfully but omitted a field we rely on.

    Raised when an EphemeralKey comes back without ``secret`` or a
    PaymentIntent comes back without ``client_secret``. Treated as a
    failure of the whole operation.

    Attributes:
        missing_field: Name of the absent response field
    """

    default_error_code: str = "STRIPE_PROTOCOL_ERROR"

    def __init__(self, message: str, missing_field: str, **kwargs: Any):
        details = kwargs.pop("details", None) or {}
        details["missing_field"] = missing_field
        super().__init__(message, details=details, **kwargs)
        self.missing_field = missing_field


# -----------------------------------------------------------------------------
# Transient Errors
# -----------------------------------------------------------------------------


class StripeRateLimitError(StripeError):
    """Rate limited by Stripe API."""

    default_error_code: str = "STRIPE_RATE_LIMITED"
    is_retryable: bool = True


class StripeAPIUnavailableError(StripeError):
    """
    Stripe API is temporarily unavailable.

    This covers:
    - Network connectivity issues and timeouts
    - Stripe server errors (5xx)
    - Unexpected errors raised by the SDK
    """

    default_error_code: str = "STRIPE_UNAVAILABLE"
    is_retryable: bool = True


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "STRIPE_PAYMENT_ERROR",
    # Payment domain
    "PaymentError",
    "PaymentProcessingError",
    # Stripe-specific
    "StripeError",
    "StripeCardDeclinedError",
    "StripeInsufficientFundsError",
    "StripeInvalidRequestError",
    "StripeProtocolError",
    "StripeRateLimitError",
    "StripeAPIUnavailableError",
]
