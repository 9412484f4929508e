"""
Tests for payment sheet value types.

Tests cover:
- Currency parsing
- Customer id format
- Request validation
- Shipping hash rendering
"""

import pytest

from payments.types import (
    CreateCustomerRequest,
    Currency,
    DeliveryAddress,
    PaymentSheetRequest,
    ShippingAddress,
    parse_customer_id,
)


# =============================================================================
# Currency Tests
# =============================================================================


class TestCurrency:
    """Tests for Currency.parse."""

    @pytest.mark.parametrize("code", ["usd", "USD", "Usd", "uSD"])
    def test_parse_any_casing(self, code):
        """Should resolve a code regardless of case."""
        assert Currency.parse(code) is Currency.USD

    def test_values_are_lowercase(self):
        """Should store every code in the lowercase form Stripe expects."""
        assert all(value == value.lower() for value in Currency.values)
        assert all(len(value) == 3 for value in Currency.values)

    def test_common_currencies_present(self):
        """Should include the currencies Stripe settles in most often."""
        for code in ["usd", "eur", "gbp", "jpy", "cad", "aud", "vnd"]:
            assert code in Currency.values

    @pytest.mark.parametrize("code", ["zzz", "xyz", "us", "usdd", ""])
    def test_unknown_code(self, code):
        """Should raise ValueError naming the rejected code."""
        with pytest.raises(ValueError, match="Unknown currency code"):
            Currency.parse(code)


# =============================================================================
# Customer Id Tests
# =============================================================================


class TestParseCustomerId:
    """Tests for parse_customer_id."""

    @pytest.mark.parametrize("value", ["cus_NffrFeUfNV2Hib", "cus_1", "cus_ABC123xyz"])
    def test_valid(self, value):
        """Should return a well-formed id unchanged."""
        assert parse_customer_id(value) == value

    @pytest.mark.parametrize(
        "value",
        ["", "cus_", "cus", "cus_abc def", "cus_abc_def", "pi_123", " cus_123", None],
    )
    def test_invalid(self, value):
        """Should raise ValueError for anything but cus_ plus alphanumerics."""
        with pytest.raises(ValueError, match="Invalid Stripe customer id"):
            parse_customer_id(value)


# =============================================================================
# Request Tests
# =============================================================================


class TestCreateCustomerRequest:
    """Tests for CreateCustomerRequest validation."""

    def test_valid(self):
        """Should keep the account id."""
        assert CreateCustomerRequest(account_id="account-42").account_id == "account-42"

    def test_account_id_required(self):
        """Should raise ValueError for an empty account id."""
        with pytest.raises(ValueError, match="account_id is required"):
            CreateCustomerRequest(account_id="")


class TestPaymentSheetRequest:
    """Tests for PaymentSheetRequest validation."""

    def test_valid(self):
        """Should accept a positive integer amount."""
        request = PaymentSheetRequest(
            amount_minor_units=2000,
            customer_id="cus_NffrFeUfNV2Hib",
            currency="usd",
        )

        assert request.amount_minor_units == 2000
        assert request.delivery_address is None

    @pytest.mark.parametrize("amount", [0, -1, -2000])
    def test_amount_must_be_positive(self, amount):
        """Should raise ValueError for zero or negative amounts."""
        with pytest.raises(ValueError, match="amount_minor_units must be positive"):
            PaymentSheetRequest(
                amount_minor_units=amount,
                customer_id="cus_NffrFeUfNV2Hib",
                currency="usd",
            )

    @pytest.mark.parametrize("amount", [20.0, "2000", True, None])
    def test_amount_must_be_integer(self, amount):
        """Should raise ValueError for non-integer amounts."""
        with pytest.raises(ValueError, match="amount_minor_units must be an integer"):
            PaymentSheetRequest(
                amount_minor_units=amount,
                customer_id="cus_NffrFeUfNV2Hib",
                currency="usd",
            )


# =============================================================================
# Delivery Address Tests
# =============================================================================


class TestDeliveryAddress:
    """Tests for DeliveryAddress.to_stripe."""

    def test_full_address(self):
        """Should render every populated field."""
        delivery = DeliveryAddress(
            name="Ada Lovelace",
            address=ShippingAddress(
                line1="12 St James's Sq",
                line2="Flat 2",
                city="London",
                state="Greater London",
                postal_code="SW1Y 4JH",
                country="GB",
            ),
            carrier="Royal Mail",
            phone="+44 20 7946 0000",
            tracking_number="RM123456789GB",
        )

        assert delivery.to_stripe() == {
            "name": "Ada Lovelace",
            "address": {
                "line1": "12 St James's Sq",
                "line2": "Flat 2",
                "city": "London",
                "state": "Greater London",
                "postal_code": "SW1Y 4JH",
                "country": "GB",
            },
            "carrier": "Royal Mail",
            "phone": "+44 20 7946 0000",
            "tracking_number": "RM123456789GB",
        }

    def test_drops_unset_fields(self):
        """Should omit None values at both levels."""
        delivery = DeliveryAddress(name="Ada", address=ShippingAddress(country="US"))

        assert delivery.to_stripe() == {"name": "Ada", "address": {"country": "US"}}

    def test_name_required(self):
        """Should raise ValueError for an empty recipient name."""
        with pytest.raises(ValueError, match="name is required"):
            DeliveryAddress(name="", address=ShippingAddress())
