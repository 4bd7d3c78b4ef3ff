"""
Top‑level package for the CashCard API.

This file makes ``cashcard_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``cashcard_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
