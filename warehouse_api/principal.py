### Description ###
# Warehouse API - Clean J Shipping Backend
# - Principal & Authentication Results -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Principal & Authentication Results

The resolved identity handed to route handlers, and the result values the
authenticators and the authorizer return instead of raising. Only the access
dependency turns a failed result into an AccessDenied exception, and a single
application exception handler writes the HTTP response for it.
"""

from dataclasses import dataclass, field
from enum import Enum


class PrincipalKind(str, Enum):
    """Which actor population a principal belongs to"""

    STAFF = "staff"
    CUSTOMER = "customer"
    COURIER_KEY = "courier-key"
    WAREHOUSE_KEY = "warehouse-key"


SESSION_KINDS = (PrincipalKind.STAFF, PrincipalKind.CUSTOMER)
KEY_KINDS = (PrincipalKind.COURIER_KEY, PrincipalKind.WAREHOUSE_KEY)


@dataclass(frozen=True)
class Principal:
    """
    Identity resolved for the current request.

    Session principals carry a role; key principals carry permissions and the
    owning courier code. Created per request and never persisted.
    """

    kind: PrincipalKind
    id: int
    role: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)
    courier_code: str | None = None
    user_code: str | None = None
    key_prefix: str | None = None

    @property
    def is_session(self) -> bool:
        return self.kind in SESSION_KINDS

    @property
    def is_key(self) -> bool:
        return self.kind in KEY_KINDS

    @property
    def display_name(self) -> str:
        """Short label for log lines"""
        if self.is_key:
            return f"{self.kind.value}:{self.key_prefix or self.id}"
        return f"{self.kind.value}:{self.user_code or self.id}({self.role})"


class AuthErrorKind(str, Enum):
    """Every way authentication or authorization can fail"""

    MISSING_CREDENTIAL = "missing_credential"
    MALFORMED_TOKEN = "malformed_token"
    EXPIRED_TOKEN = "expired_token"
    SUBJECT_NOT_FOUND = "subject_not_found"
    ACCOUNT_INACTIVE = "account_inactive"
    KEY_NOT_FOUND = "key_not_found"
    KEY_EXPIRED = "key_expired"
    KEY_REVOKED = "key_revoked"
    INSUFFICIENT_ROLE = "insufficient_role"

    @property
    def status_code(self) -> int:
        return _FORBIDDEN.get(self, 401)

    @property
    def category(self) -> str:
        """Error class the kind is reported under"""
        return _CATEGORIES[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_FORBIDDEN = {
    AuthErrorKind.ACCOUNT_INACTIVE: 403,
    AuthErrorKind.INSUFFICIENT_ROLE: 403,
}

_CATEGORIES = {
    AuthErrorKind.MISSING_CREDENTIAL: "MissingCredential",
    AuthErrorKind.MALFORMED_TOKEN: "MalformedCredential",
    AuthErrorKind.SUBJECT_NOT_FOUND: "MalformedCredential",
    AuthErrorKind.EXPIRED_TOKEN: "ExpiredCredential",
    AuthErrorKind.KEY_EXPIRED: "ExpiredCredential",
    AuthErrorKind.KEY_NOT_FOUND: "RevokedCredential",
    AuthErrorKind.KEY_REVOKED: "RevokedCredential",
    AuthErrorKind.ACCOUNT_INACTIVE: "AccountInactive",
    AuthErrorKind.INSUFFICIENT_ROLE: "InsufficientRole",
}

_MESSAGES = {
    AuthErrorKind.MISSING_CREDENTIAL: "Authentication required",
    AuthErrorKind.MALFORMED_TOKEN: "Invalid token. Please provide a valid authentication token.",
    AuthErrorKind.EXPIRED_TOKEN: "Token has expired. Please login again to get a new token.",
    AuthErrorKind.SUBJECT_NOT_FOUND: "User not found. The token is invalid or the user has been deleted.",
    AuthErrorKind.ACCOUNT_INACTIVE: "Account is not active. Please contact support to activate your account.",
    AuthErrorKind.KEY_NOT_FOUND: "Invalid API key",
    AuthErrorKind.KEY_EXPIRED: "API key has expired",
    AuthErrorKind.KEY_REVOKED: "API key has been revoked",
    AuthErrorKind.INSUFFICIENT_ROLE: "Access denied",
}


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an authentication attempt: a principal or an error kind"""

    principal: Principal | None = None
    error: AuthErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.principal is not None and self.error is None

    @classmethod
    def success(cls, principal: Principal) -> "AuthResult":
        return cls(principal=principal)

    @classmethod
    def failure(cls, error: AuthErrorKind, detail: str | None = None) -> "AuthResult":
        return cls(error=error, detail=detail)


class AccessDenied(Exception):
    """Raised by the access dependency once a request is rejected"""

    def __init__(self, error: AuthErrorKind, detail: str | None = None, headers: dict | None = None):
        self.error = error
        self.detail = detail or error.message
        self.headers = headers
        super().__init__(self.detail)

    @property
    def status_code(self) -> int:
        return self.error.status_code
