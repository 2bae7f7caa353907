"""
SHA-1 fingerprinting and prefix/suffix split for the k-anonymity range API.

Only the first five hex characters of the fingerprint are ever disclosed
to the Pwned Passwords service. The remaining 35 stay in this process and
are matched locally against the range response.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import hashlib
import string

from breachguard.exceptions import InvalidInput

PREFIX_LENGTH = 5
FINGERPRINT_LENGTH = hashlib.sha1().digest_size * 2

_HEX_DIGITS = frozenset(string.hexdigits)


def fingerprint(password: str) -> str:
    """Return the uppercase SHA-1 hex digest of a password.

    Args:
        password: Password to hash (NOT stored or logged)

    Returns:
        40-character uppercase hexadecimal fingerprint
    """
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def split(fp: str) -> tuple[str, str]:
    """Split a fingerprint into its disclosed prefix and withheld suffix.

    The split is a lossless partition: ``prefix + suffix == fp.upper()``.
    """
    if len(fp) < PREFIX_LENGTH:
        raise ValueError(f"fingerprint must be at least {PREFIX_LENGTH} characters")
    fp = fp.upper()
    return fp[:PREFIX_LENGTH], fp[PREFIX_LENGTH:]


def normalize_fingerprint(value: str) -> str:
    """Validate a caller-supplied SHA-1 hex digest and uppercase it."""
    value = (value or "").strip()
    if len(value) != FINGERPRINT_LENGTH or not set(value) <= _HEX_DIGITS:
        raise InvalidInput(
            f"SHA-1 hash must be {FINGERPRINT_LENGTH} hexadecimal characters"
        )
    return value.upper()
