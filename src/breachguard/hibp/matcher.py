"""
Parsing and matching of Pwned Passwords range responses.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from typing import Iterable

from breachguard.exceptions import UpstreamError
from breachguard.hibp.models import ExposureResult, RangeRow

# The range API always answers with CRLF line endings
ROW_DELIMITER = "\r\n"


def parse_range_body(body: str) -> list[RangeRow]:
    """Parse a range response body into rows.

    Response format: ``SUFFIX:COUNT\\r\\n`` per line. Blank lines are
    skipped; anything else that does not parse is a malformed body.
    """
    rows = []
    for line in body.split(ROW_DELIMITER):
        line = line.strip()
        if not line:
            continue

        suffix_tail, sep, count = line.partition(":")
        if not sep or not suffix_tail:
            raise UpstreamError(f"Malformed range row: {line[:50]!r}")
        try:
            occurrences = int(count)
        except ValueError:
            raise UpstreamError(f"Malformed range count: {line[:50]!r}") from None
        if occurrences < 0:
            raise UpstreamError(f"Negative range count: {line[:50]!r}")

        rows.append(RangeRow(suffix_tail=suffix_tail.upper(), count=occurrences))

    return rows


def match(rows: Iterable[RangeRow], suffix: str, hash_prefix: str = "") -> ExposureResult:
    """Find the row whose suffix equals ``suffix`` and return its count.

    The whole suffix is compared, so a row that merely starts with (or is
    a prefix of) the suffix never matches. If the corpus returns more than
    one matching row, the first one wins.

    Args:
        rows: Rows from a range response
        suffix: Withheld part of the password fingerprint
        hash_prefix: Disclosed prefix, recorded on the result

    Returns:
        ExposureResult with the occurrence count (0 when absent)
    """
    suffix = suffix.upper()
    for row in rows:
        if row.suffix_tail.upper() == suffix:
            return ExposureResult(occurrences=row.count, hash_prefix=hash_prefix)
    return ExposureResult(occurrences=0, hash_prefix=hash_prefix)
