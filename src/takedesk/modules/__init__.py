"""Takedesk application modules."""
