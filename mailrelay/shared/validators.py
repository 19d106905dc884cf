"""Shared validation utilities"""

import re
from typing import List

# local-part "@" domain, the domain holding at least one dot, no whitespace
# and no second "@" anywhere.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ADDRESS_SEPARATORS = re.compile(r"[,;]")


def validate_email(email: str) -> bool:
    """Return True when ``email`` is a single well-formed address.

    Purely syntactic; no DNS or mailbox checks are made.
    """
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email) is not None


def split_address_list(value: str) -> List[str]:
    """Split a comma/semicolon separated address list, trimming each element.

    Empty elements are kept so that ``validate_email_list`` can reject
    inputs such as ``"a@b.com,"``.
    """
    if not value or not value.strip():
        return []
    return [part.strip() for part in ADDRESS_SEPARATORS.split(value)]


def validate_email_list(value: str) -> bool:
    """
    Validate a list of recipients.

    Args:
        value: Addresses separated by commas (or semicolons)

    Returns:
        True if the list is non-empty and every element is a valid address
    """
    addresses = split_address_list(value)
    if not addresses:
        return False
    return all(validate_email(address) for address in addresses)


__all__ = ["EMAIL_PATTERN", "split_address_list", "validate_email", "validate_email_list"]
