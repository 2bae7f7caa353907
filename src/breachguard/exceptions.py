"""
Error taxonomy shared by the HIBP client, the services and the gateway.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class BreachGuardError(Exception):
    """Base class for all BreachGuard errors."""


class InvalidInput(BreachGuardError):
    """A required field is missing, empty or malformed (client error)."""


class ConfigurationError(BreachGuardError):
    """Required configuration is absent or invalid. Fatal at startup."""

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []


class UpstreamNotFound(BreachGuardError):
    """The upstream answered 404: no data on record (not a failure)."""


class UpstreamError(BreachGuardError):
    """Transport failure, timeout, malformed body or unexpected status."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        message = super().__str__()
        if self.status is None:
            return message
        return f"{message} (HTTP {self.status})"


class ServiceFailure(BreachGuardError):
    """An operation could not produce a trustworthy result."""


class ExposureCheckFailed(ServiceFailure):
    """The password exposure count could not be obtained."""


class LookupFailed(ServiceFailure):
    """The email breach lookup failed for a reason other than 'not found'."""
