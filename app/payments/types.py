"""
Data types for Stripe payment sheet operations.

This module defines the value objects exchanged between callers and the
payment services. None of them is persisted; each lives only for the
call that produced it.

Types:
    Currency: ISO 4217 currencies accepted by Stripe
    CustomerRef: A Stripe-side customer
    CreateCustomerRequest: Input for creating a Stripe customer
    ShippingAddress / DeliveryAddress: Optional shipping details for an intent
    PaymentSheetRequest: Input for creating a payment sheet
    PaymentSheetBundle: Secrets handed to the mobile client

Usage:
    from payments.types import PaymentSheetRequest

    request = PaymentSheetRequest(
        amount_minor_units=2000,
        customer_id="cus_NffrFeUfNV2Hib",
        currency="USD",
    )
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

from django.db import models

CUSTOMER_ID_PATTERN = re.compile(r"^cus_[A-Za-z0-9]+$")


class Currency(models.TextChoices):
    """
    Presentment currencies accepted by Stripe, as lowercase ISO 4217 codes.

    Use Currency.parse() to normalize caller input; it accepts any casing.
    """

    AED = "aed"
    AFN = "afn"
    ALL = "all"
    AMD = "amd"
    ANG = "ang"
    AOA = "aoa"
    ARS = "ars"
    AUD = "aud"
    AWG = "awg"
    AZN = "azn"
    BAM = "bam"
    BBD = "bbd"
    BDT = "bdt"
    BGN = "bgn"
    BHD = "bhd"
    BIF = "bif"
    BMD = "bmd"
    BND = "bnd"
    BOB = "bob"
    BRL = "brl"
    BSD = "bsd"
    BWP = "bwp"
    BYN = "byn"
    BZD = "bzd"
    CAD = "cad"
    CDF = "cdf"
    CHF = "chf"
    CLP = "clp"
    CNY = "cny"
    COP = "cop"
    CRC = "crc"
    CVE = "cve"
    CZK = "czk"
    DJF = "djf"
    DKK = "dkk"
    DOP = "dop"
    DZD = "dzd"
    EGP = "egp"
    ETB = "etb"
    EUR = "eur"
    FJD = "fjd"
    FKP = "fkp"
    GBP = "gbp"
    GEL = "gel"
    GIP = "gip"
    GMD = "gmd"
    GNF = "gnf"
    GTQ = "gtq"
    GYD = "gyd"
    HKD = "hkd"
    HNL = "hnl"
    HTG = "htg"
    HUF = "huf"
    IDR = "idr"
    ILS = "ils"
    INR = "inr"
    ISK = "isk"
    JMD = "jmd"
    JOD = "jod"
    JPY = "jpy"
    KES = "kes"
    KGS = "kgs"
    KHR = "khr"
    KMF = "kmf"
    KRW = "krw"
    KWD = "kwd"
    KYD = "kyd"
    KZT = "kzt"
    LAK = "lak"
    LBP = "lbp"
    LKR = "lkr"
    LRD = "lrd"
    LSL = "lsl"
    MAD = "mad"
    MDL = "mdl"
    MGA = "mga"
    MKD = "mkd"
    MMK = "mmk"
    MNT = "mnt"
    MOP = "mop"
    MUR = "mur"
    MVR = "mvr"
    MWK = "mwk"
    MXN = "mxn"
    MYR = "myr"
    MZN = "mzn"
    NAD = "nad"
    NGN = "ngn"
    NIO = "nio"
    NOK = "nok"
    NPR = "npr"
    NZD = "nzd"
    OMR = "omr"
    PAB = "pab"
    PEN = "pen"
    PGK = "pgk"
    PHP = "php"
    PKR = "pkr"
    PLN = "pln"
    PYG = "pyg"
    QAR = "qar"
    RON = "ron"
    RSD = "rsd"
    RUB = "rub"
    RWF = "rwf"
    SAR = "sar"
    SBD = "sbd"
    SCR = "scr"
    SEK = "sek"
    SGD = "sgd"
    SHP = "shp"
    SLE = "sle"
    SOS = "sos"
    SRD = "srd"
    STD = "std"
    SZL = "szl"
    THB = "thb"
    TJS = "tjs"
    TND = "tnd"
    TOP = "top"
    TRY = "try"
    TTD = "ttd"
    TWD = "twd"
    TZS = "tzs"
    UAH = "uah"
    UGX = "ugx"
    USD = "usd"
    UYU = "uyu"
    UZS = "uzs"
    VND = "vnd"
    VUV = "vuv"
    WST = "wst"
    XAF = "xaf"
    XCD = "xcd"
    XOF = "xof"
    XPF = "xpf"
    YER = "yer"
    ZAR = "zar"
    ZMW = "zmw"

    @classmethod
    def parse(cls, code: str) -> Currency:
        """
        Resolve a currency code case-insensitively.

        Raises:
            ValueError: The code is not a Stripe currency
        """
        try:
            return cls(code.lower())
        except ValueError:
            raise ValueError(f"Unknown currency code: {code!r}") from None


def parse_customer_id(value: str) -> str:
    """
    Validate a Stripe customer id (``cus_`` followed by an alphanumeric suffix).

    Returns:
        The id unchanged

    Raises:
        ValueError: The value is not a Stripe customer id
    """
    if not isinstance(value, str) or not CUSTOMER_ID_PATTERN.match(value):
        raise ValueError(f"Invalid Stripe customer id: {value!r}")
    return value


@dataclass
class CustomerRef:
    """
    Reference to a Stripe customer.

    Attributes:
        id: Stripe customer ID (cus_xxx), always assigned by Stripe
    """

    id: str


@dataclass
class CreateCustomerRequest:
    """
    Parameters for creating a Stripe customer.

    The account id is stored as Stripe metadata under the ``id`` key. It is
    not the Stripe customer id.

    Attributes:
        account_id: Application account identifier
    """

    account_id: str

    def __post_init__(self) -> None:
        if not self.account_id:
            raise ValueError("account_id is required")


@dataclass
class ShippingAddress:
    """Postal address passed to Stripe as ``shipping.address``."""

    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass
class DeliveryAddress:
    """
    Shipping details attached to a PaymentIntent.

    Attributes:
        name: Recipient name (required by Stripe)
        address: Postal address
        carrier: Delivery company, e.g. 'UPS'
        phone: Recipient phone number
        tracking_number: Carrier tracking number
    """

    name: str
    address: ShippingAddress
    carrier: str | None = None
    phone: str | None = None
    tracking_number: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name is required")

    def to_stripe(self) -> dict[str, Any]:
        """Render as the ``shipping`` parameter, dropping unset fields."""
        shipping = {key: value for key, value in asdict(self).items() if value is not None}
        shipping["address"] = {
            key: value for key, value in shipping["address"].items() if value is not None
        }
        return shipping


@dataclass
class PaymentSheetRequest:
    """
    Parameters for creating a payment sheet.

    Attributes:
        amount_minor_units: Amount in the currency's smallest unit (e.g., cents)
        customer_id: Stripe customer ID (cus_xxx)
        currency: ISO 4217 currency code, any casing
        delivery_address: Optional shipping details forwarded verbatim
    """

    amount_minor_units: int
    customer_id: str
    currency: str
    delivery_address: DeliveryAddress | None = None

    def __post_init__(self) -> None:
        if isinstance(self.amount_minor_units, bool) or not isinstance(
            self.amount_minor_units, int
        ):
            raise ValueError("amount_minor_units must be an integer")
        if self.amount_minor_units <= 0:
            raise ValueError("amount_minor_units must be positive")


@dataclass
class PaymentSheetBundle:
    """
    Everything a mobile client needs to present Stripe's PaymentSheet.

    Attributes:
        payment_intent_id: PaymentIntent ID (pi_xxx)
        ephemeral_key_secret: Secret of the customer-scoped ephemeral key
        payment_client_secret: PaymentIntent client secret
        customer_id: The customer id the caller supplied
    """

    payment_intent_id: str
    ephemeral_key_secret: str
    payment_client_secret: str
    customer_id: str
