"""
Password exposure checking.

Combines the zxcvbn strength score with the Pwned Passwords exposure count.
The two legs run concurrently and are joined before a result is returned.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from typing import Callable

from breachguard.exceptions import ExposureCheckFailed, InvalidInput, UpstreamError
from breachguard.hibp import codec, matcher
from breachguard.hibp.client import HIBPClient
from breachguard.hibp.models import ExposureResult, PasswordCheckResult, StrengthResult
from breachguard.services.strength import score

logger = logging.getLogger(__name__)


class PasswordExposureChecker:
    """Check a password's strength and how often it appears in breaches.

    Uses k-anonymity - only the first 5 characters of the SHA-1 hash
    are sent to the range API. The password itself is never logged.
    """

    def __init__(
        self,
        client: HIBPClient,
        scorer: Callable[[str], StrengthResult] = score,
    ):
        self.client = client
        self.scorer = scorer

    async def check(self, password: str | None) -> PasswordCheckResult:
        """Score a password and count its exposures.

        Raises:
            InvalidInput: password is absent or empty
            ExposureCheckFailed: the exposure count could not be obtained
        """
        if not isinstance(password, str) or not password:
            raise InvalidInput("Password is required")

        prefix, suffix = codec.split(codec.fingerprint(password))

        strength, exposure = await asyncio.gather(
            asyncio.to_thread(self.scorer, password),
            self._exposure(prefix, suffix),
            return_exceptions=True,
        )

        # A missing count must never be reported as zero exposures
        if isinstance(exposure, BaseException):
            if isinstance(exposure, UpstreamError):
                logger.error(f"Password exposure check failed: {exposure}")
                raise ExposureCheckFailed("Could not check password exposure") from exposure
            raise exposure

        if isinstance(strength, BaseException):
            raise strength

        return PasswordCheckResult(strength=strength, exposure=exposure)

    async def check_hash(self, sha1_hash: str) -> ExposureResult:
        """Count exposures of a pre-computed SHA-1 fingerprint.

        Raises:
            InvalidInput: the value is not a 40-character hex digest
            ExposureCheckFailed: the exposure count could not be obtained
        """
        prefix, suffix = codec.split(codec.normalize_fingerprint(sha1_hash))
        try:
            return await self._exposure(prefix, suffix)
        except UpstreamError as e:
            logger.error(f"Password exposure check failed: {e}")
            raise ExposureCheckFailed("Could not check password exposure") from e

    async def _exposure(self, prefix: str, suffix: str) -> ExposureResult:
        rows = await self.client.range_query(prefix)
        return matcher.match(rows, suffix, hash_prefix=prefix)
