"""
Configuration for the BreachGuard gateway and HIBP client.

Built once at process start and never mutated afterwards.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from breachguard.exceptions import ConfigurationError
from breachguard.hibp.client import HIBPClient


def _split_origins(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(origin.strip().rstrip("/") for origin in value.split(",") if origin.strip())


def _truthy(value: str | None) -> bool:
    return (value or "").lower() in ("true", "yes", "1")


@dataclass(frozen=True)
class GatewayConfig:
    """Configuration for the HTTP gateway."""

    # Breach corpus credential (required)
    hibp_api_key: str | None = None

    # Cross-origin sources allowed to call the API
    allowed_origins: tuple[str, ...] = ()

    # Rate limiting: rate_limit_max requests per client per window
    rate_limit_window: float = 60.0
    rate_limit_max: int = 100

    # Upstream settings
    request_timeout: float = HIBPClient.DEFAULT_TIMEOUT
    breach_api_base: str = HIBPClient.HIBP_API_BASE
    range_api_base: str = HIBPClient.PWNED_PASSWORDS_API
    user_agent: str = HIBPClient.DEFAULT_USER_AGENT
    add_padding: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    url_prefix: str = ""
    # Key rate limits on the address the nearest proxy appended to X-Forwarded-For
    trust_proxy: bool = False

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "GatewayConfig":
        """Load configuration from environment variables.

        Values from a ``.env`` file are loaded first but never override
        variables already set in the environment.

        Raises:
            ConfigurationError: a value is unparsable or a required one is missing
        """
        load_dotenv(env_file)

        problems = []

        def number(name: str, default: str, kind: type) -> Any:
            raw = os.environ.get(name, default)
            try:
                return kind(raw)
            except ValueError:
                problems.append(f"{name} must be a number, got {raw!r}")
                return kind(default)

        config = cls(
            hibp_api_key=os.environ.get("HIBP_API_KEY") or None,
            allowed_origins=_split_origins(os.environ.get("ALLOWED_ORIGINS")),
            rate_limit_window=number("BREACHGUARD_RATE_LIMIT_WINDOW", "60", float),
            rate_limit_max=number("BREACHGUARD_RATE_LIMIT_MAX", "100", int),
            request_timeout=number("BREACHGUARD_REQUEST_TIMEOUT", str(HIBPClient.DEFAULT_TIMEOUT), float),
            breach_api_base=os.environ.get("BREACHGUARD_BREACH_API", HIBPClient.HIBP_API_BASE),
            range_api_base=os.environ.get("BREACHGUARD_RANGE_API", HIBPClient.PWNED_PASSWORDS_API),
            user_agent=os.environ.get("BREACHGUARD_USER_AGENT", HIBPClient.DEFAULT_USER_AGENT),
            add_padding=_truthy(os.environ.get("BREACHGUARD_ADD_PADDING")),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=number("PORT", "3000", int),
            url_prefix=os.environ.get("BREACHGUARD_URL_PREFIX", ""),
            trust_proxy=_truthy(os.environ.get("BREACHGUARD_TRUST_PROXY")),
        )

        problems.extend(config.validate())
        if problems:
            raise ConfigurationError("Invalid configuration: " + "; ".join(problems), problems)

        return config

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if not self.hibp_api_key:
            errors.append("HIBP_API_KEY is required")
        if self.rate_limit_window <= 0:
            errors.append("Rate limit window must be positive")
        if self.rate_limit_max < 1:
            errors.append("Rate limit max must be at least 1")
        if self.request_timeout <= 0:
            errors.append("Request timeout must be positive")
        if self.url_prefix and not self.url_prefix.startswith("/"):
            errors.append("URL prefix must start with '/'")

        return errors

    def client(self) -> HIBPClient:
        """Build an HIBP client from this configuration."""
        return HIBPClient(
            api_key=self.hibp_api_key,
            user_agent=self.user_agent,
            timeout=self.request_timeout,
            breach_api_base=self.breach_api_base,
            range_api_base=self.range_api_base,
            add_padding=self.add_padding,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (excludes sensitive values)."""
        return {
            "hibp_api_key_set": bool(self.hibp_api_key),
            "allowed_origins": list(self.allowed_origins),
            "rate_limit_window": self.rate_limit_window,
            "rate_limit_max": self.rate_limit_max,
            "request_timeout": self.request_timeout,
            "breach_api_base": self.breach_api_base,
            "range_api_base": self.range_api_base,
            "user_agent": self.user_agent,
            "add_padding": self.add_padding,
            "host": self.host,
            "port": self.port,
            "url_prefix": self.url_prefix,
            "trust_proxy": self.trust_proxy,
        }
