"""Takedesk - content takedown service."""

__version__ = "0.1.0"
