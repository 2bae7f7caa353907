"""
Have I Been Pwned (HIBP) integration module.

Provides breach lookups for email addresses and password exposure
checks using the Pwned Passwords range API with k-anonymity.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from breachguard.hibp.models import (
    BreachRecord,
    ExposureResult,
    PasswordCheckResult,
    RangeRow,
    RiskLevel,
    StrengthResult,
)
from breachguard.hibp.client import HIBPClient

__all__ = [
    "HIBPClient",
    "BreachRecord",
    "ExposureResult",
    "PasswordCheckResult",
    "RangeRow",
    "RiskLevel",
    "StrengthResult",
]
