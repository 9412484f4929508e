"""
Project-wide pytest configuration.

Django itself is configured by the repository-level conftest.py.
App-specific fixtures are defined in each app's conftest.py.
"""

import pytest


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_payment_sheet.py, test_customer_resolver.py, test_services.py → integration
      (service pipelines running against a mocked Stripe SDK)
    - test_types.py, test_exceptions.py, test_stripe_adapter.py → unit
    - Unmatched files → integration

    Explicit markers on test functions/classes take precedence.
    """
    integration_patterns = [
        "test_payment_sheet.py",
        "test_customer_resolver.py",
        "test_services.py",
    ]

    unit_patterns = [
        "test_types.py",
        "test_exceptions.py",
        "test_stripe_adapter.py",
    ]

    for item in items:
        # Skip if test already has unit/integration marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)
