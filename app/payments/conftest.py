"""
Pytest fixtures shared by the payments test suites.

This module provides fixtures for mocking the Stripe SDK, including
mock API responses and error conditions.

Sections:
    - Mock Stripe Objects
    - Mock Stripe Response Fixtures
    - Mock Stripe Error Fixtures
    - Mock Stripe Client Fixtures
"""

import uuid
from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest
import stripe


# =============================================================================
# Mock Stripe Objects
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object; missing fields read as None."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)


@dataclass
class MockStripeList:
    """Mock Stripe list/search response with data attribute."""

    items: list[MockStripeObject]
    has_more: bool = False

    @property
    def data(self) -> list[MockStripeObject]:
        return self.items


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def trace_id():
    """Generate a trace ID for testing."""
    return f"trace-{uuid.uuid4().hex[:16]}"


@pytest.fixture
def account_id():
    """Application account id stored in Stripe metadata."""
    return f"account-{uuid.uuid4().hex[:8]}"


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@pytest.fixture
def mock_customer():
    """Create a mock Customer response."""

    def _create(
        id: str = "cus_test123456",
        metadata: dict | None = None,
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "customer",
                "metadata": metadata or {},
            }
        )

    return _create


@pytest.fixture
def mock_ephemeral_key():
    """Create a mock EphemeralKey response."""

    def _create(
        id: str = "ephkey_test123456",
        secret: str | None = "ek_test_secret_abc123",
        expires: int = 1700003600,
    ) -> MockStripeObject:
        data = {
            "id": id,
            "object": "ephemeral_key",
            "expires": expires,
        }
        if secret is not None:
            data["secret"] = secret
        return MockStripeObject(data)

    return _create


@pytest.fixture
def mock_payment_intent():
    """Create a mock PaymentIntent response."""

    def _create(
        id: str = "pi_test123456",
        status: str = "requires_payment_method",
        amount: int = 2000,
        currency: str = "usd",
        client_secret: str | None = "pi_test123456_secret_abc123",
    ) -> MockStripeObject:
        data = {
            "id": id,
            "object": "payment_intent",
            "status": status,
            "amount": amount,
            "currency": currency,
        }
        if client_secret is not None:
            data["client_secret"] = client_secret
        return MockStripeObject(data)

    return _create


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def card_error():
    """Create a Stripe CardError."""

    def _create(
        message: str = "Your card was declined.",
        code: str = "card_declined",
        decline_code: str | None = "generic_decline",
    ) -> stripe.CardError:
        error = stripe.CardError(
            message=message,
            param=None,
            code=code,
        )
        error.decline_code = decline_code
        return error

    return _create


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""

    def _create(
        message: str = "No such customer: 'cus_missing'",
        param: str | None = "customer",
        code: str = "resource_missing",
    ) -> stripe.InvalidRequestError:
        return stripe.InvalidRequestError(
            message=message,
            param=param,
            code=code,
        )

    return _create


@pytest.fixture
def rate_limit_error():
    """Create a Stripe RateLimitError."""
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    """Create a Stripe APIConnectionError."""
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    """Create a Stripe APIError."""
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    """Create a Stripe AuthenticationError."""
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_customer(mock_customer):
    """Mock stripe.Customer API."""
    with patch("stripe.Customer") as mock:
        mock.create.return_value = mock_customer()
        mock.search.return_value = MockStripeList(items=[mock_customer()])
        yield mock


@pytest.fixture
def mock_stripe_ephemeral_key(mock_ephemeral_key):
    """Mock stripe.EphemeralKey API."""
    with patch("stripe.EphemeralKey") as mock:
        mock.create.return_value = mock_ephemeral_key()
        yield mock


@pytest.fixture
def mock_stripe_payment_intent(mock_payment_intent):
    """Mock stripe.PaymentIntent API."""
    with patch("stripe.PaymentIntent") as mock:
        mock.create.return_value = mock_payment_intent()
        yield mock


@pytest.fixture
def mock_stripe_http_client():
    """Mock stripe.RequestsClient so no real HTTP client is built."""
    with patch("stripe.RequestsClient") as mock:
        yield mock
