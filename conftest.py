"""
Root pytest configuration for the Django project.

This module configures Django before collection. App-specific fixtures
are defined in each app's tests/conftest.py.
"""

import os

import django

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()
