"""
Stripe API adapter for payment sheet operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions. All Stripe calls should go through this
adapter so the rest of the application never handles Stripe objects
directly.

Features:
- Configurable timeouts on all API calls
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Stateless: every call reconfigures the SDK from settings

The adapter never retries and never sends idempotency keys. Callers
decide whether a failed operation is worth repeating.

Configuration (via settings):
- STRIPE_SECRET_KEY: Stripe API secret key
- STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)
- STRIPE_EPHEMERAL_KEY_API_VERSION: API version pinned on ephemeral keys

Usage:
    from payments.adapters import StripeAdapter, CreatePaymentIntentParams

    key = StripeAdapter.create_ephemeral_key("cus_xxx")

    intent = StripeAdapter.create_payment_intent(
        CreatePaymentIntentParams(
            amount_cents=2000,
            currency="usd",
            customer_id="cus_xxx",
        )
    )
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import stripe
from django.conf import settings

from payments.exceptions import (
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeInsufficientFundsError,
    StripeInvalidRequestError,
    StripeProtocolError,
    StripeRateLimitError,
)
from payments.types import CreateCustomerRequest, CustomerRef

# Metadata key holding the application account id on Stripe customers.
ACCOUNT_ID_METADATA_KEY = "id"


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreatePaymentIntentParams:
    """
    Parameters for creating a Stripe PaymentIntent.

    Attributes:
        amount_cents: Payment amount in smallest currency unit (e.g., cents)
        currency: Lowercase ISO 4217 currency code
        customer_id: Stripe Customer ID the intent is attached to
        payment_method_types: Allowed payment methods (default: ['card'])
        shipping: Stripe ``shipping`` hash (see DeliveryAddress.to_stripe)
    """

    amount_cents: int
    currency: str
    customer_id: str
    payment_method_types: list[str] = field(default_factory=lambda: ["card"])
    shipping: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.amount_cents <= 0:
            raise ValueError("amount_cents must be positive")
        if not self.currency:
            raise ValueError("currency is required")
        if not self.customer_id:
            raise ValueError("customer_id is required")


@dataclass
class PaymentIntentResult:
    """
    Result from Stripe PaymentIntent creation.

    Attributes:
        id: PaymentIntent ID (pi_xxx)
        status: Current status (requires_payment_method, etc.)
        amount_cents: Amount in cents
        currency: Currency code
        client_secret: Secret for client-side confirmation
    """

    id: str
    status: str
    amount_cents: int
    currency: str
    client_secret: str


@dataclass
class EphemeralKeyResult:
    """
    Result from Stripe EphemeralKey creation.

    Attributes:
        id: EphemeralKey ID (ephkey_xxx)
        secret: Key secret handed to the client
        expires: Unix timestamp after which Stripe rejects the key
    """

    id: str
    secret: str
    expires: int | None = None


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    All methods are class methods - no instance state is maintained.

    Error channels:
    - find_customer_by_account_id lets Stripe's own exceptions through
      untouched so callers can inspect Stripe's error detail.
    - Every other operation translates Stripe exceptions into the
      payments.exceptions.StripeError family.

    Usage:
        customer = StripeAdapter.find_customer_by_account_id("acct-42")
        key = StripeAdapter.create_ephemeral_key(customer.id)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    @staticmethod
    def _configure_stripe() -> None:
        """Configure Stripe client with API key and timeout."""
        stripe.api_key = settings.STRIPE_SECRET_KEY
        timeout = getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10)
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Customers
    # =========================================================================

    @staticmethod
    def build_account_id_query(account_id: str) -> str:
        """
        Build a Customer search query matching the account id metadata.

        Single quotes inside the value are escaped as Stripe's search
        query language requires.
        """
        escaped = account_id.replace("\\", "\\\\").replace("'", "\\'")
        return f"metadata['{ACCOUNT_ID_METADATA_KEY}']:'{escaped}'"

    @classmethod
    def find_customer_by_account_id(
        cls,
        account_id: str,
        trace_id: str | None = None,
    ) -> CustomerRef:
        """
        Find the Stripe customer created for an application account.

        Args:
            account_id: Application account identifier stored in metadata
            trace_id: Optional trace ID for distributed tracing

        Returns:
            CustomerRef for the first matching customer

        Raises:
            stripe.InvalidRequestError: No customer matches
                (code ``resource_missing``, HTTP status 404)
            stripe.StripeError: Any Stripe failure, unchanged
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "find_customer_by_account_id",
            "account_id": account_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            found = stripe.Customer.search(
                query=cls.build_account_id_query(account_id),
                limit=1,
            )
        except stripe.StripeError as e:
            logger.warning(
                f"Stripe customer search failed: {type(e).__name__}",
                extra={
                    **log_context,
                    "stripe_code": e.code,
                    "duration_ms": (time.time() - start_time) * 1000,
                },
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        if not found.data:
            logger.info(
                "No Stripe customer for account",
                extra={**log_context, "duration_ms": duration_ms},
            )
            raise stripe.InvalidRequestError(
                f"No such customer with metadata {ACCOUNT_ID_METADATA_KEY}: '{account_id}'",
                param="query",
                code="resource_missing",
                http_status=404,
            )

        customer = found.data[0]
        logger.info(
            "Stripe operation completed",
            extra={
                **log_context,
                "customer_id": customer.id,
                "duration_ms": duration_ms,
            },
        )
        return CustomerRef(id=customer.id)

    @classmethod
    def create_customer(
        cls,
        params: CreateCustomerRequest,
        trace_id: str | None = None,
    ) -> CustomerRef:
        """
        Create a Stripe customer anchored to an application account.

        Only the metadata hash is sent. Name, email, address and every
        other personal field stay empty on Stripe's side.

        Args:
            params: Account id to store in metadata
            trace_id: Optional trace ID for distributed tracing

        Returns:
            CustomerRef for the new customer

        Raises:
            StripeInvalidRequestError: Invalid parameters or credentials
            StripeRateLimitError: Rate limited
            StripeAPIUnavailableError: Stripe service unavailable
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "create_customer",
            "account_id": params.account_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            customer = stripe.Customer.create(
                metadata={ACCOUNT_ID_METADATA_KEY: params.account_id},
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "customer_id": customer.id,
                    "duration_ms": duration_ms,
                },
            )

            return CustomerRef(id=customer.id)

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

    # =========================================================================
    # Payment Sheet Operations
    # =========================================================================

    @classmethod
    def create_ephemeral_key(
        cls,
        customer_id: str,
        trace_id: str | None = None,
    ) -> EphemeralKeyResult:
        """
        Create an ephemeral key scoped to a customer.

        The key lets a mobile client act as this customer for one
        payment session without holding the secret API key.

        Args:
            customer_id: Stripe Customer ID (cus_xxx)
            trace_id: Optional trace ID for distributed tracing

        Returns:
            EphemeralKeyResult with the key secret

        Raises:
            StripeInvalidRequestError: Unknown customer or bad parameters
            StripeProtocolError: Stripe returned the key without a secret
            StripeAPIUnavailableError: Stripe service unavailable
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "create_ephemeral_key",
            "customer_id": customer_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            key = stripe.EphemeralKey.create(
                customer=customer_id,
                stripe_version=settings.STRIPE_EPHEMERAL_KEY_API_VERSION,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_context = {
            **log_context,
            "ephemeral_key_id": key.id,
            "duration_ms": duration_ms,
        }

        secret = getattr(key, "secret", None)
        if not secret:
            cls._raise_missing_field("secret", "no ephemeral_key_secret", log_context)

        logger.info("Stripe operation completed", extra=log_context)

        return EphemeralKeyResult(
            id=key.id,
            secret=secret,
            expires=getattr(key, "expires", None),
        )

    @classmethod
    def create_payment_intent(
        cls,
        params: CreatePaymentIntentParams,
        trace_id: str | None = None,
    ) -> PaymentIntentResult:
        """
        Create a Stripe PaymentIntent.

        Args:
            params: Parameters for creating the PaymentIntent
            trace_id: Optional trace ID for distributed tracing

        Returns:
            PaymentIntentResult with the client secret

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInvalidRequestError: Invalid parameters
            StripeProtocolError: Stripe returned the intent without a client secret
            StripeAPIUnavailableError: Stripe service unavailable
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "create_payment_intent",
            "amount_cents": params.amount_cents,
            "currency": params.currency,
            "customer_id": params.customer_id,
            "has_shipping": params.shipping is not None,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            intent = stripe.PaymentIntent.create(
                amount=params.amount_cents,
                currency=params.currency,
                customer=params.customer_id,
                payment_method_types=params.payment_method_types,
                shipping=params.shipping,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_context = {
            **log_context,
            "payment_intent_id": intent.id,
            "status": intent.status,
            "duration_ms": duration_ms,
        }

        client_secret = getattr(intent, "client_secret", None)
        if not client_secret:
            cls._raise_missing_field(
                "client_secret", "no payment_client_secret", log_context
            )

        logger.info("Stripe operation completed", extra=log_context)

        return PaymentIntentResult(
            id=intent.id,
            status=intent.status,
            amount_cents=intent.amount,
            currency=intent.currency,
            client_secret=client_secret,
        )

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _raise_missing_field(
        cls,
        field_name: str,
        message: str,
        log_context: dict[str, Any],
    ) -> None:
        """
        Reject a successful Stripe response that lacks a required field.

        Raises:
            StripeProtocolError: Always
        """
        cls.get_logger().error(
            "Stripe response missing required field",
            extra={**log_context, "missing_field": field_name},
        )
        raise StripeProtocolError(message, missing_field=field_name)

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        The domain exception message carries Stripe's own description
        of the failure.

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInsufficientFundsError: Insufficient funds
            StripeInvalidRequestError: Invalid request or credentials
            StripeRateLimitError: Rate limited
            StripeAPIUnavailableError: API unavailable or unexpected error
        """
        logger = cls.get_logger()

        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.CardError):
            decline_code = getattr(error, "decline_code", None)
            logger.warning(
                "Card error from Stripe",
                extra={**log_context, "decline_code": decline_code},
            )

            if decline_code == "insufficient_funds":
                raise StripeInsufficientFundsError(
                    str(error.user_message or error),
                    stripe_code=error.code,
                    decline_code=decline_code,
                )

            raise StripeCardDeclinedError(
                str(error.user_message or error),
                stripe_code=error.code,
                decline_code=decline_code,
            )

        elif isinstance(error, stripe.InvalidRequestError):
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )
            raise StripeInvalidRequestError(
                str(error.user_message or error),
                stripe_code=error.code,
            )

        elif isinstance(error, stripe.RateLimitError):
            logger.warning(
                "Rate limited by Stripe",
                extra=log_context,
            )
            raise StripeRateLimitError(
                f"Stripe rate limit exceeded: {error.user_message or error}",
                stripe_code="rate_limit",
            )

        elif isinstance(error, stripe.APIConnectionError):
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Could not connect to Stripe: {error.user_message or error}",
                stripe_code="api_connection_error",
            )

        elif isinstance(error, stripe.APIError):
            logger.error(
                "Stripe API error",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Stripe service error: {error.user_message or error}",
                stripe_code="api_error",
            )

        elif isinstance(error, stripe.AuthenticationError):
            # Invalid API key - permanent, operational issue
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeInvalidRequestError(
                f"Stripe authentication failed: {error.user_message or error}",
                stripe_code="authentication_error",
            )

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
            )
