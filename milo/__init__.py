"""Milo - AI backend for a Sui wallet assistant."""

__version__ = "1.0.0"
