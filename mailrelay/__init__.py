"""Compose-and-relay email service."""

__version__ = "1.0.0"
