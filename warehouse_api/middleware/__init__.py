### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Middleware Package -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Middleware Package

Contains middleware for request processing:
- credentials: Header precedence tables per route family
- auth: Authenticators, authorizer and the require_access dependency
- rate_limit: Tiered fixed-window rate limiting
- logging: Request/response logging
"""

from .auth import (
    AccessRequirement,
    ApiKeyAuthenticator,
    RoleAuthorizer,
    SessionAuthenticator,
    require_access,
)
from .credentials import ACCOUNT, COURIER, CUSTOMER, STAFF, WAREHOUSE, resolve_credential
from .logging import RequestLoggingMiddleware
from .rate_limit import RateLimiter, RateLimitExceededError, build_rate_limiter, rate_limit

__all__ = [
    "ACCOUNT",
    "COURIER",
    "CUSTOMER",
    "STAFF",
    "WAREHOUSE",
    "AccessRequirement",
    "ApiKeyAuthenticator",
    "RateLimitExceededError",
    "RateLimiter",
    "RequestLoggingMiddleware",
    "RoleAuthorizer",
    "SessionAuthenticator",
    "build_rate_limiter",
    "rate_limit",
    "require_access",
    "resolve_credential",
]
