# =============================================================================
# Address Validation
# =============================================================================
# A permissive syntactic filter for email addresses. It rejects obviously
# malformed input early; it is not an RFC 5322 parser and does no DNS checks.
# =============================================================================

import re

# local-part@domain.tld, where the TLD is letters only and at least 2 long
ADDRESS_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def is_valid_address(address: str) -> bool:
    """
    Check whether `address` looks like a usable email address.

    Example:
        >>> is_valid_address("user@example.com")
        True
        >>> is_valid_address("user@localhost")
        False
    """
    if not isinstance(address, str):
        return False
    return ADDRESS_PATTERN.fullmatch(address) is not None
