"""
Data models for Pwned Passwords and HIBP breach responses.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Breach records are passed through verbatim from the HIBP API.
BreachRecord = dict[str, Any]


class RiskLevel(str, Enum):
    """Risk level based on password exposure."""

    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class RangeRow:
    """One ``SUFFIX:COUNT`` line of a Pwned Passwords range response."""

    suffix_tail: str
    count: int


@dataclass(frozen=True)
class ExposureResult:
    """Result of matching a password suffix against a range response."""

    occurrences: int = 0
    # Never store the suffix or the password, only the disclosed prefix
    hash_prefix: str = ""

    @property
    def is_pwned(self) -> bool:
        """Check if password was found in breaches."""
        return self.occurrences > 0

    @property
    def risk_level(self) -> RiskLevel:
        """Determine risk level based on occurrences."""
        if self.occurrences == 0:
            return RiskLevel.SAFE
        elif self.occurrences < 10:
            return RiskLevel.LOW
        elif self.occurrences < 100:
            return RiskLevel.MEDIUM
        elif self.occurrences < 10000:
            return RiskLevel.HIGH
        else:
            return RiskLevel.CRITICAL

    @property
    def risk_description(self) -> str:
        """Get human-readable risk description."""
        descriptions = {
            RiskLevel.SAFE: "This password has not been found in any known data breaches.",
            RiskLevel.LOW: f"This password has been seen {self.occurrences} times in data breaches. Consider changing it.",
            RiskLevel.MEDIUM: f"This password has been seen {self.occurrences} times. You should change it.",
            RiskLevel.HIGH: f"This password has been seen {self.occurrences:,} times! Change it immediately.",
            RiskLevel.CRITICAL: f"This password has been seen {self.occurrences:,} times! It's extremely common and must be changed.",
        }
        return descriptions[self.risk_level]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "is_pwned": self.is_pwned,
            "occurrences": self.occurrences,
            "risk_level": self.risk_level.value,
            "risk_description": self.risk_description,
            "hash_prefix": self.hash_prefix,
        }


@dataclass(frozen=True)
class StrengthResult:
    """Password strength as reported by the scorer, passed through as-is."""

    score: int
    suggestions: list[str] = field(default_factory=list)
    warning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "score": self.score,
            "suggestions": list(self.suggestions),
            "warning": self.warning,
        }


@dataclass(frozen=True)
class PasswordCheckResult:
    """Combined strength and exposure result for one password."""

    strength: StrengthResult
    exposure: ExposureResult

    @property
    def pwned_count(self) -> int:
        return self.exposure.occurrences

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation used by ``POST /password``."""
        return {
            "strength": self.strength.to_dict(),
            "pwnedCount": self.pwned_count,
        }
