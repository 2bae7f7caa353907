"""
Email breach lookups.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging

from breachguard.exceptions import InvalidInput, LookupFailed, UpstreamError, UpstreamNotFound
from breachguard.hibp.client import HIBPClient
from breachguard.hibp.models import BreachRecord

logger = logging.getLogger(__name__)


class BreachLookupService:
    """Look up the known breaches for an email address."""

    def __init__(self, client: HIBPClient):
        self.client = client

    async def lookup(self, email: str | None) -> list[BreachRecord]:
        """Return the breach records for an email, or [] if there are none.

        A 404 from HIBP means "no breaches on record" and is a normal
        outcome. Every other upstream failure raises LookupFailed.

        Raises:
            InvalidInput: email is absent or empty
            LookupFailed: the lookup failed
        """
        if not isinstance(email, str) or not email.strip():
            raise InvalidInput("Email is required")

        try:
            return await self.client.breach_query(email.strip())
        except UpstreamNotFound:
            return []
        except UpstreamError as e:
            logger.error(f"Breach lookup failed: {e}")
            raise LookupFailed("Could not look up breaches") from e
