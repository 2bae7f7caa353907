"""
Password strength scoring backed by zxcvbn.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from zxcvbn import zxcvbn

from breachguard.hibp.models import StrengthResult


def score(password: str) -> StrengthResult:
    """Score a password from 0 (guessable) to 4 (very unguessable).

    The zxcvbn feedback is passed through unchanged, except that an empty
    warning is reported as None.
    """
    result = zxcvbn(password)
    feedback = result.get("feedback") or {}

    return StrengthResult(
        score=int(result["score"]),
        suggestions=list(feedback.get("suggestions") or []),
        warning=feedback.get("warning") or None,
    )
