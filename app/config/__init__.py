# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains the Django settings module. The payments app is a
# library-style app embedded by a host process; no URLs, ASGI/WSGI entry
# points or background workers are defined here.
# =============================================================================
