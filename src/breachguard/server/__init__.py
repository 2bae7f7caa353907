"""
BreachGuard HTTP gateway.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from breachguard.server.gateway import RequestGateway, create_app
from breachguard.server.ratelimit import FixedWindowRateLimiter, RateLimitDecision

__all__ = [
    "RequestGateway",
    "create_app",
    "FixedWindowRateLimiter",
    "RateLimitDecision",
]
