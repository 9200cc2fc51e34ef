"""
Version 1 of the API.

Breaking changes belong in a new version subpackage (e.g. ``v2``).
"""
