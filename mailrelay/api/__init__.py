"""HTTP API for the mail relay service."""

from mailrelay.api.v1 import router as email_router

__all__ = ["email_router"]
