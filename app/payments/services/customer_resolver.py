"""
Customer resolver for Stripe customers.

Each application account maps to a Stripe customer whose metadata holds
the account id under the ``id`` key. The Stripe customer carries no
other data: no name, email, phone or address is ever sent.

Error channels:
    - lookup_by_account_id: Stripe's native exceptions propagate unchanged
    - create_customer: failures come back as ServiceResult.failure with
      error_code STRIPE_PAYMENT_ERROR

Usage:
    from payments.services import CustomerResolver

    result = CustomerResolver.get_or_create_customer("account-42")
    if result.success:
        customer_id = result.data.id
"""

from __future__ import annotations

import stripe

from core.services import BaseService, ServiceResult

from payments.adapters import StripeAdapter
from payments.exceptions import STRIPE_PAYMENT_ERROR, StripeError
from payments.types import CreateCustomerRequest, CustomerRef


class CustomerResolver(BaseService):
    """Looks up or creates the Stripe customer behind an application account."""

    @classmethod
    def lookup_by_account_id(
        cls,
        account_id: str,
        trace_id: str | None = None,
    ) -> CustomerRef:
        """
        Find the Stripe customer for an application account.

        Args:
            account_id: Application account identifier
            trace_id: Optional trace ID for distributed tracing

        Returns:
            CustomerRef of the matching customer

        Raises:
            ValueError: account_id is empty
            stripe.InvalidRequestError: No customer matches (code ``resource_missing``)
            stripe.StripeError: Any other Stripe failure
        """
        if not account_id:
            raise ValueError("account_id is required")
        return StripeAdapter.find_customer_by_account_id(account_id, trace_id=trace_id)

    @classmethod
    def create_customer(
        cls,
        request: CreateCustomerRequest,
        trace_id: str | None = None,
    ) -> ServiceResult[CustomerRef]:
        """
        Create a Stripe customer for an application account.

        Not idempotent: every call creates a new Stripe customer, even for
        an account id that already has one. Use get_or_create_customer or
        lookup_by_account_id first to avoid duplicates.

        Args:
            request: Account id to anchor the customer to
            trace_id: Optional trace ID for distributed tracing

        Returns:
            ServiceResult with the new CustomerRef
        """
        try:
            customer = StripeAdapter.create_customer(request, trace_id=trace_id)
        except StripeError as e:
            return cls.handle_exception(e, "create customer", error_code=STRIPE_PAYMENT_ERROR)

        cls.get_logger().info(
            "Created Stripe customer",
            extra={"customer_id": customer.id, "trace_id": trace_id},
        )
        return ServiceResult.success(customer)

    @classmethod
    def get_or_create_customer(
        cls,
        account_id: str,
        trace_id: str | None = None,
    ) -> ServiceResult[CustomerRef]:
        """
        Return the account's Stripe customer, creating it when none exists.

        Only Stripe's ``resource_missing`` answer triggers creation. Any
        other lookup failure propagates as Stripe's own exception.

        Args:
            account_id: Application account identifier
            trace_id: Optional trace ID for distributed tracing

        Returns:
            ServiceResult with the existing or new CustomerRef

        Raises:
            stripe.StripeError: The lookup failed for a reason other than no match
        """
        try:
            customer = cls.lookup_by_account_id(account_id, trace_id=trace_id)
        except stripe.InvalidRequestError as e:
            if e.code != "resource_missing":
                raise
            return cls.create_customer(CreateCustomerRequest(account_id=account_id), trace_id)
        return ServiceResult.success(customer)
