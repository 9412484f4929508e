"""
Payment adapters for external services.

All Stripe API calls go through StripeAdapter to ensure consistent
error handling, timeouts, and observability.

Usage:
    from payments.adapters import StripeAdapter, CreatePaymentIntentParams

    result = StripeAdapter.create_payment_intent(
        CreatePaymentIntentParams(
            amount_cents=5000,
            currency='usd',
            customer_id='cus_xxx',
        )
    )
"""

from payments.adapters.stripe_adapter import (
    ACCOUNT_ID_METADATA_KEY,
    CreatePaymentIntentParams,
    EphemeralKeyResult,
    PaymentIntentResult,
    StripeAdapter,
)

__all__ = [
    "ACCOUNT_ID_METADATA_KEY",
    "CreatePaymentIntentParams",
    "EphemeralKeyResult",
    "PaymentIntentResult",
    "StripeAdapter",
]
