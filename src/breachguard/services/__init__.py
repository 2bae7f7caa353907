"""
Credential hygiene services: password exposure checks and breach lookups.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from breachguard.config import GatewayConfig
from breachguard.hibp.models import BreachRecord, PasswordCheckResult
from breachguard.services.breaches import BreachLookupService
from breachguard.services.password import PasswordExposureChecker
from breachguard.services.strength import score

__all__ = [
    "BreachLookupService",
    "PasswordExposureChecker",
    "check_password",
    "lookup_breaches",
    "score",
]


async def check_password(password: str | None, config: GatewayConfig) -> PasswordCheckResult:
    """Run one password check with a client built from ``config``."""
    async with config.client() as client:
        return await PasswordExposureChecker(client).check(password)


async def lookup_breaches(email: str | None, config: GatewayConfig) -> list[BreachRecord]:
    """Run one breach lookup with a client built from ``config``."""
    async with config.client() as client:
        return await BreachLookupService(client).lookup(email)
