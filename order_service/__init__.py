"""Paginated order listing service with join-fetched products."""

__version__ = "1.0.0"
