"""
BreachGuard - credential hygiene checks for client applications.

Exposes two checks over HTTP: whether an email address appears in known
data breaches, and whether a candidate password is weak and/or exposed
in the Pwned Passwords corpus (using k-anonymity, so the password and its
full hash never leave this process).

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "1.0.0"
