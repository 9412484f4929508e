"""
Payments app for Stripe mobile checkout.

This app handles:
- Stripe customer lookup and creation keyed by application account id
- Payment sheet creation (ephemeral key + PaymentIntent secrets)

All Stripe calls go through payments.adapters.StripeAdapter.

Usage:
    from payments.services import CustomerResolver, PaymentSheetService
"""
