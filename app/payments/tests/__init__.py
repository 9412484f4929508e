"""
Payments app tests.

Test modules:
- test_types.py: Currency, customer id and request value type tests

Adapter and service tests live beside their modules in adapters/tests/
and services/tests/. Shared Stripe fixtures are in payments/conftest.py.
"""
