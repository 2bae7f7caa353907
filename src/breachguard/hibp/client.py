"""
Have I Been Pwned API client.

Implements the two upstream calls BreachGuard depends on:
- Password range queries against Pwned Passwords (k-anonymity, no API key)
- Email breach lookups against the HIBP v3 API (API key required)

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from breachguard.exceptions import ConfigurationError, UpstreamError, UpstreamNotFound
from breachguard.hibp.codec import PREFIX_LENGTH
from breachguard.hibp.matcher import parse_range_body
from breachguard.hibp.models import BreachRecord, RangeRow

logger = logging.getLogger(__name__)


class HIBPClient:
    """Client for the Pwned Passwords range API and HIBP API v3.

    Every call is a single live request; there is no caching and no
    retrying. Errors are raised as ``UpstreamError`` carrying the HTTP
    status when one was received.
    """

    # API endpoints
    HIBP_API_BASE = "https://haveibeenpwned.com/api/v3"
    PWNED_PASSWORDS_API = "https://api.pwnedpasswords.com"

    DEFAULT_TIMEOUT = 10.0  # seconds
    DEFAULT_USER_AGENT = "BreachGuard/1.0"

    def __init__(
        self,
        api_key: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
        breach_api_base: str = HIBP_API_BASE,
        range_api_base: str = PWNED_PASSWORDS_API,
        add_padding: bool = False,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize HIBP client.

        Args:
            api_key: HIBP API key (required for email breach lookups)
            user_agent: User-Agent header for requests
            timeout: Total seconds allowed per request (default: 10)
            breach_api_base: Base URL of the HIBP v3 API
            range_api_base: Base URL of the Pwned Passwords API
            add_padding: Ask the range API to pad responses
            session: Existing session to use (left open on close)
        """
        self.api_key = api_key
        self.user_agent = user_agent
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.breach_api_base = breach_api_base.rstrip("/")
        self.range_api_base = range_api_base.rstrip("/")
        self.add_padding = add_padding
        self._session = session
        self._owns_session = session is None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close HTTP session if this client opened it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "HIBPClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _request(
        self,
        url: str,
        headers: dict | None = None,
        expect_json: bool = False,
    ) -> tuple[int, Any]:
        """Make a GET request and return the status and decoded body.

        Args:
            url: Full URL
            headers: Additional headers
            expect_json: Decode the body as JSON instead of text

        Returns:
            Tuple of (status_code, response_data). ``response_data`` is
            None for any non-2xx status.

        Raises:
            UpstreamError: on timeout, connection failure or undecodable body
        """
        session = await self._ensure_session()

        request_headers = {
            "User-Agent": self.user_agent,
        }
        if headers:
            request_headers.update(headers)

        try:
            async with session.get(
                url,
                headers=request_headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status

                if not 200 <= status < 300:
                    if status == 429:
                        retry_after = response.headers.get("Retry-After", "?")
                        logger.warning(f"Rate limited by upstream. Retry after {retry_after}s")
                    return status, None

                try:
                    if expect_json:
                        return status, await response.json(content_type=None)
                    return status, await response.text()
                except ValueError as e:
                    # json.JSONDecodeError and UnicodeDecodeError
                    raise UpstreamError(f"Malformed response body: {e}", status=status) from e

        except asyncio.TimeoutError:
            raise UpstreamError("Request timeout") from None
        except aiohttp.ClientError as e:
            # Includes InvalidURL, which is also a ValueError
            raise UpstreamError(f"Request failed: {e}") from e

    # =========================================================================
    # Password Range Query (K-Anonymity)
    # =========================================================================

    async def range_query(self, prefix: str) -> list[RangeRow]:
        """Fetch every known hash suffix sharing a 5-character prefix.

        Only the prefix is sent; the caller matches its own suffix locally.

        Args:
            prefix: First 5 hex characters of the SHA-1 fingerprint

        Returns:
            Rows of (suffix_tail, count) in upstream order
        """
        if len(prefix) != PREFIX_LENGTH:
            raise ValueError(f"range prefix must be exactly {PREFIX_LENGTH} characters")

        url = f"{self.range_api_base}/range/{prefix.upper()}"
        headers = {"Add-Padding": "true"} if self.add_padding else None

        logger.debug(f"Querying password range {prefix.upper()}")
        # Password API doesn't require API key
        status, data = await self._request(url, headers=headers)

        if not 200 <= status < 300:
            raise UpstreamError("Pwned Passwords range query failed", status=status)

        return parse_range_body(data)

    # =========================================================================
    # Email Breach Query
    # =========================================================================

    async def breach_query(self, email: str) -> list[BreachRecord]:
        """Fetch the breaches an email address appears in.

        Args:
            email: Email address to check

        Returns:
            Breach records exactly as returned by the API

        Raises:
            UpstreamNotFound: the account has no breaches on record (404)
            UpstreamError: any other failure
        """
        if not self.api_key:
            raise ConfigurationError("HIBP API key required. Set HIBP_API_KEY environment variable.")

        url = (
            f"{self.breach_api_base}/breachedaccount/{quote(email, safe='')}"
            f"?truncateResponse=false"
        )
        headers = {
            "hibp-api-key": self.api_key,
            "Accept": "application/json",
        }

        status, data = await self._request(url, headers=headers, expect_json=True)

        if status == 404:
            # Not found - no breaches for this account
            raise UpstreamNotFound("No breaches on record")

        if not 200 <= status < 300:
            raise UpstreamError("HIBP breach query failed", status=status)

        if not isinstance(data, list):
            raise UpstreamError("Malformed breach response: expected a JSON array", status=status)

        return data
