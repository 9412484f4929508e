"""
Payment sheet service for mobile checkout.

Stripe's mobile PaymentSheet needs three values from the backend: an
ephemeral key secret for the customer, a PaymentIntent client secret and
the customer id. PaymentSheetService produces all of them in one call.

Pipeline (strictly sequential, first failure wins):
    1. Validate the customer id          - local, no Stripe call
    2. Resolve the currency              - local, no Stripe call
    3. Create the ephemeral key          - Stripe
    4. Create the card PaymentIntent     - Stripe
    5. Assemble the PaymentSheetBundle

The ephemeral key is created first so no PaymentIntent exists unless
the client can authenticate to use it. If step 4 fails the key is left
to expire on Stripe's side.

Usage:
    from payments.services import PaymentSheetService
    from payments.types import PaymentSheetRequest

    result = PaymentSheetService.create_payment_sheet(
        PaymentSheetRequest(
            amount_minor_units=2000,
            customer_id="cus_NffrFeUfNV2Hib",
            currency="usd",
        )
    )

    if result.success:
        bundle = result.data
    else:
        print(result.error, result.error_code)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.services import BaseService, ServiceResult

from payments.adapters import (
    CreatePaymentIntentParams,
    EphemeralKeyResult,
    PaymentIntentResult,
    StripeAdapter,
)
from payments.exceptions import STRIPE_PAYMENT_ERROR, StripeError
from payments.types import (
    Currency,
    PaymentSheetBundle,
    PaymentSheetRequest,
    parse_customer_id,
)


@dataclass
class ValidatedSheetRequest:
    """A PaymentSheetRequest whose customer id and currency passed validation."""

    customer_id: str
    currency: Currency
    amount_minor_units: int
    shipping: dict[str, Any] | None = None


class PaymentSheetService(BaseService):
    """
    Creates everything a client needs to present a payment sheet.

    Every failure - malformed input, a Stripe error, or a Stripe response
    missing a secret - is returned as ServiceResult.failure with
    error_code STRIPE_PAYMENT_ERROR. A successful result always carries a
    fully populated PaymentSheetBundle.
    """

    PAYMENT_METHOD_TYPES = ["card"]

    @classmethod
    def create_payment_sheet(
        cls,
        request: PaymentSheetRequest,
        trace_id: str | None = None,
    ) -> ServiceResult[PaymentSheetBundle]:
        """
        Create an ephemeral key and a PaymentIntent for a customer.

        Args:
            request: Amount, currency, customer and optional shipping
            trace_id: Optional trace ID for distributed tracing

        Returns:
            ServiceResult with the PaymentSheetBundle, or the first failure
        """
        logger = cls.get_logger()

        validated = cls._validate(request)
        if not validated:
            logger.info(
                "Payment sheet request rejected",
                extra={"reason": validated.error, "trace_id": trace_id},
            )
            return validated

        sheet = validated.data

        key = cls._create_ephemeral_key(sheet, trace_id)
        if not key:
            return key

        intent = cls._create_payment_intent(sheet, trace_id)
        if not intent:
            return intent

        logger.info(
            "Payment sheet created",
            extra={
                "customer_id": sheet.customer_id,
                "payment_intent_id": intent.data.id,
                "trace_id": trace_id,
            },
        )

        return ServiceResult.success(
            PaymentSheetBundle(
                payment_intent_id=intent.data.id,
                ephemeral_key_secret=key.data.secret,
                payment_client_secret=intent.data.client_secret,
                customer_id=request.customer_id,
            )
        )

    # =========================================================================
    # Pipeline Steps
    # =========================================================================

    @classmethod
    def _validate(cls, request: PaymentSheetRequest) -> ServiceResult[ValidatedSheetRequest]:
        """Check customer id, then currency. Never calls Stripe."""
        try:
            customer_id = parse_customer_id(request.customer_id)
        except ValueError as e:
            return ServiceResult.failure(
                str(e),
                error_code=STRIPE_PAYMENT_ERROR,
                errors={"customer_id": [str(e)]},
            )

        try:
            currency = Currency.parse(request.currency)
        except ValueError as e:
            return ServiceResult.failure(
                str(e),
                error_code=STRIPE_PAYMENT_ERROR,
                errors={"currency": [str(e)]},
            )

        shipping = None
        if request.delivery_address is not None:
            shipping = request.delivery_address.to_stripe()

        return ServiceResult.success(
            ValidatedSheetRequest(
                customer_id=customer_id,
                currency=currency,
                amount_minor_units=request.amount_minor_units,
                shipping=shipping,
            )
        )

    @classmethod
    def _create_ephemeral_key(
        cls,
        sheet: ValidatedSheetRequest,
        trace_id: str | None,
    ) -> ServiceResult[EphemeralKeyResult]:
        try:
            key = StripeAdapter.create_ephemeral_key(sheet.customer_id, trace_id=trace_id)
        except StripeError as e:
            return cls.handle_exception(e, "ephemeral key", error_code=STRIPE_PAYMENT_ERROR)
        return ServiceResult.success(key)

    @classmethod
    def _create_payment_intent(
        cls,
        sheet: ValidatedSheetRequest,
        trace_id: str | None,
    ) -> ServiceResult[PaymentIntentResult]:
        params = CreatePaymentIntentParams(
            amount_cents=sheet.amount_minor_units,
            currency=sheet.currency.value,
            customer_id=sheet.customer_id,
            payment_method_types=list(cls.PAYMENT_METHOD_TYPES),
            shipping=sheet.shipping,
        )
        try:
            intent = StripeAdapter.create_payment_intent(params, trace_id=trace_id)
        except StripeError as e:
            return cls.handle_exception(e, "payment intent", error_code=STRIPE_PAYMENT_ERROR)
        return ServiceResult.success(intent)
