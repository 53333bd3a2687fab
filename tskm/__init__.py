"""Closed sequence, margin-closed phrase and partial-order mining over chord sequences."""

__version__ = "1.0.0"