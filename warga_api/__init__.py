"""
Top‑level package for the Warga API.

This file makes ``warga_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``warga_api.app.main``.  All functionality lives in submodules under
``app``.
"""

__all__ = []
