"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  Each domain (cards, customers, greetings) exposes a
router defined in ``api/v1/endpoints`` backed by a service class in
``services``.  Request and response bodies live in ``schemas``.
"""

from .main import app  # noqa: F401
