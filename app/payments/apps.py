"""
Payments app configuration.

This app provides the Stripe adapter and the payment sheet services.
It defines no models.
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    name = "payments"
    verbose_name = "Payments"
