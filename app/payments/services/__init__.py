"""
Payment services for Stripe mobile checkout.

This module provides:
- CustomerResolver: Finds or creates the Stripe customer for an account
- PaymentSheetService: Creates the secrets a client needs for a payment sheet

Usage:
    from payments.services import CustomerResolver, PaymentSheetService
    from payments.types import PaymentSheetRequest

    customer = CustomerResolver.get_or_create_customer("account-42")

    result = PaymentSheetService.create_payment_sheet(
        PaymentSheetRequest(
            amount_minor_units=2000,
            customer_id=customer.data.id,
            currency="usd",
        )
    )
"""

from payments.services.customer_resolver import CustomerResolver
from payments.services.payment_sheet import (
    PaymentSheetService,
    ValidatedSheetRequest,
)

__all__ = [
    "CustomerResolver",
    "PaymentSheetService",
    "ValidatedSheetRequest",
]
