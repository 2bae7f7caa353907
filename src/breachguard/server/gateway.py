"""
BreachGuard HTTP gateway - JSON API for password and email breach checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Awaitable, Callable

from flask import Blueprint, Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from breachguard import __version__
from breachguard.config import GatewayConfig
from breachguard.exceptions import (
    BreachGuardError,
    ExposureCheckFailed,
    InvalidInput,
    LookupFailed,
)
from breachguard.hibp.models import BreachRecord, PasswordCheckResult
from breachguard.server.ratelimit import FixedWindowRateLimiter
from breachguard.services import check_password, lookup_breaches

logger = logging.getLogger(__name__)

PasswordCheck = Callable[[Any], Awaitable[PasswordCheckResult]]
BreachLookup = Callable[[Any], Awaitable[list[BreachRecord]]]

# Failure kind -> (status, client-facing message). Ordered most specific first.
FAILURE_RESPONSES: list[tuple[type[BreachGuardError], int, str | None]] = [
    (InvalidInput, 400, None),  # None: echo the validation message
    (ExposureCheckFailed, 500, "Error checking pwned passwords"),
    (LookupFailed, 500, "Error querying breach API"),
    (BreachGuardError, 500, "Internal server error"),
]

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class RequestGateway:
    """REST API gateway for BreachGuard.

    Provides endpoints for:
    - Password strength and exposure checks (POST /password)
    - Email breach lookups (POST /breaches)
    - Health check (GET /health)

    Every request passes the CORS allow-list and the rate limiter before
    it reaches a service. Service failures are mapped to responses in one
    place (``_failure_response``).
    """

    def __init__(
        self,
        config: GatewayConfig,
        password_check: PasswordCheck | None = None,
        breach_lookup: BreachLookup | None = None,
        rate_limiter: FixedWindowRateLimiter | None = None,
    ):
        self.config = config
        self.password_check = password_check or partial(check_password, config=config)
        self.breach_lookup = breach_lookup or partial(lookup_breaches, config=config)
        self.rate_limiter = rate_limiter or FixedWindowRateLimiter(
            max_requests=config.rate_limit_max,
            window=config.rate_limit_window,
        )

        # Create Flask app
        self.app = Flask(__name__)
        self.app.json.sort_keys = False
        if config.trust_proxy:
            # remote_addr becomes the address appended by the nearest proxy
            self.app.wsgi_app = ProxyFix(self.app.wsgi_app, x_for=1)
        CORS(
            self.app,
            origins=list(config.allowed_origins),
            methods=["GET", "POST"],
        )
        self._setup_perimeter()
        self._setup_routes()
        self._setup_error_handlers()

    def _client_key(self) -> str:
        """Identify the client for rate limiting."""
        return request.remote_addr or "unknown"

    def _setup_perimeter(self):
        """Setup CORS enforcement, rate limiting and response headers."""

        @self.app.before_request
        def enforce_origin():
            origin = request.headers.get("Origin")
            if origin and origin.rstrip("/") not in self.config.allowed_origins:
                logger.warning(f"Rejected request from disallowed origin {origin}")
                return jsonify({"error": "Origin not allowed"}), 403

        @self.app.before_request
        def enforce_rate_limit():
            client_key = self._client_key()
            decision = self.rate_limiter.hit(client_key)
            g.rate_limit = decision
            if not decision.allowed:
                logger.warning(f"Rate limit exceeded for {client_key}")
                return jsonify({"error": "Too many requests, please try again later"}), 429

        @self.app.after_request
        def add_headers(response):
            for name, value in SECURITY_HEADERS.items():
                response.headers.setdefault(name, value)
            decision = g.get("rate_limit")
            if decision is not None:
                response.headers.update(decision.headers())
            response.headers["X-BreachGuard-Version"] = __version__
            return response

    def _setup_routes(self):
        """Setup Flask routes."""
        api = Blueprint("api", __name__)

        # ================================================================
        # Health check
        # ================================================================

        @api.route("/health", methods=["GET"])
        def health():
            return jsonify({"status": "OK"})

        # ================================================================
        # Credential checks
        # ================================================================

        @api.route("/password", methods=["POST"])
        def password():
            """Score a password and count its appearances in breaches."""
            result = asyncio.run(self.password_check(_payload_field("password")))
            return jsonify(result.to_dict())

        @api.route("/breaches", methods=["POST"])
        def breaches():
            """List the breaches an email address appears in."""
            records = asyncio.run(self.breach_lookup(_payload_field("email")))
            return jsonify(records)

        self.app.register_blueprint(api, url_prefix=self.config.url_prefix or None)

    def _setup_error_handlers(self):
        """Map failures to JSON responses."""

        @self.app.errorhandler(BreachGuardError)
        def handle_failure(exc: BreachGuardError):
            return _failure_response(exc)

        @self.app.errorhandler(HTTPException)
        def handle_http_error(exc: HTTPException):
            return jsonify({"error": exc.description or exc.name}), exc.code

        @self.app.errorhandler(Exception)
        def handle_unexpected(exc: Exception):
            logger.exception(f"Unhandled error on {request.method} {request.path}")
            return jsonify({"error": "Internal server error"}), 500

    def run(self, host: str | None = None, port: int | None = None, debug: bool = False):
        """Run the server."""
        self.app.run(
            host=host or self.config.host,
            port=port or self.config.port,
            debug=debug,
        )


def _payload_field(name: str) -> Any:
    """Read a field from a JSON or form-encoded request body."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data.get(name)
    return request.form.get(name)


def _failure_response(exc: BreachGuardError):
    for kind, status, message in FAILURE_RESPONSES:
        if isinstance(exc, kind):
            if status >= 500:
                logger.error(f"{type(exc).__name__}: {exc} (cause: {exc.__cause__!r})")
            return jsonify({"error": message or str(exc)}), status
    return jsonify({"error": "Internal server error"}), 500


def create_app(config: GatewayConfig, **kwargs) -> Flask:
    """Build the Flask application for ``config``."""
    return RequestGateway(config, **kwargs).app
