"""Helpers shared by the HTTP service and the compose client."""

from mailrelay.shared.formatting import format_file_size
from mailrelay.shared.validators import (
    split_address_list,
    validate_email,
    validate_email_list,
)

__all__ = [
    "format_file_size",
    "split_address_list",
    "validate_email",
    "validate_email_list",
]
