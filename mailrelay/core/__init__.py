"""Core utilities for the mail relay service."""

from mailrelay.core.config import settings
from mailrelay.core.error_handlers import register_exception_handlers

__all__ = ["settings", "register_exception_handlers"]
