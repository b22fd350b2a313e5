### Description ###
# Warehouse API - Clean J Shipping Backend
# - Authentication & Authorization Middleware -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Authentication & Authorization

One access dependency per route:

    principal: Principal = Depends(require_access(STAFF, roles={"admin"}, tier="general"))

runs the full pipeline in order: resolve the credential for the route family,
authenticate it (session token or API key), authorize the principal, then
count the request against its rate limit tier. Rejected requests are counted
too, by client IP, so failed guesses hit the same tier. Authenticators and the
authorizer return result values; the dependency raises AccessDenied once and
the application handler turns it into the error response.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from warehouse_api.database import get_db
from warehouse_api.dependencies import get_session_verifier
from warehouse_api.middleware.credentials import (
    Credential,
    CourierKeyCredential,
    MissingCredential,
    RouteFamily,
    SessionCredential,
    WarehouseKeyCredential,
    resolve_credential,
)
from warehouse_api.middleware.rate_limit import RateLimiter, get_rate_limiter
from warehouse_api.models import KeyPurpose
from warehouse_api.models.user import STAFF_ROLES
from warehouse_api.principal import AccessDenied, AuthErrorKind, AuthResult, Principal, PrincipalKind
from warehouse_api.services.key_store import KeyStore
from warehouse_api.services.session import SessionVerifier
from warehouse_api.services.user_store import UserStore
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)

KEY_PRINCIPAL_KINDS = {
    KeyPurpose.COURIER: PrincipalKind.COURIER_KEY,
    KeyPurpose.WAREHOUSE: PrincipalKind.WAREHOUSE_KEY,
}


class SessionAuthenticator:
    """Verifies a session token and reloads the subject from the user store"""

    def __init__(self, verifier: SessionVerifier, users: UserStore):
        self.verifier = verifier
        self.users = users

    def authenticate(self, token: str) -> AuthResult:
        claims = self.verifier.verify(token)
        if isinstance(claims, AuthErrorKind):
            return AuthResult.failure(claims)

        user = self.users.find_active_subject(claims.subject_id)
        if user is None:
            return AuthResult.failure(AuthErrorKind.SUBJECT_NOT_FOUND)
        if not user.is_active:
            return AuthResult.failure(
                AuthErrorKind.ACCOUNT_INACTIVE,
                f"Account is {user.account_status}. Please contact support to activate your account.",
            )

        kind = PrincipalKind.STAFF if user.role in STAFF_ROLES else PrincipalKind.CUSTOMER
        return AuthResult.success(
            Principal(kind=kind, id=user.id, role=user.role, user_code=user.user_code)
        )


class ApiKeyAuthenticator:
    """Looks up a raw API key within one purpose partition"""

    def __init__(self, keys: KeyStore, purpose: KeyPurpose):
        self.keys = keys
        self.purpose = KeyPurpose(purpose)

    def authenticate(self, raw_key: str, now: Optional[datetime] = None) -> AuthResult:
        """
        Check order: unknown key, then revoked, then expired.
        A successful check records the use on the key.
        """
        api_key = self.keys.find_key_by_value(raw_key, self.purpose)
        if api_key is None:
            return AuthResult.failure(AuthErrorKind.KEY_NOT_FOUND)
        if not api_key.is_active:
            return AuthResult.failure(AuthErrorKind.KEY_REVOKED)
        if api_key.is_expired(now):
            return AuthResult.failure(AuthErrorKind.KEY_EXPIRED)

        self.keys.record_use(api_key, now)

        return AuthResult.success(
            Principal(
                kind=KEY_PRINCIPAL_KINDS[self.purpose],
                id=api_key.id,
                permissions=frozenset(api_key.permissions or ()),
                courier_code=api_key.courier_code,
                key_prefix=api_key.key_prefix,
            )
        )


def authenticate_credential(
    credential: Credential,
    sessions: SessionAuthenticator,
    courier_keys: ApiKeyAuthenticator,
    warehouse_keys: ApiKeyAuthenticator,
    now: Optional[datetime] = None,
) -> AuthResult:
    """Send a resolved credential to the authenticator for its type"""
    if isinstance(credential, SessionCredential):
        return sessions.authenticate(credential.value)
    if isinstance(credential, CourierKeyCredential):
        return courier_keys.authenticate(credential.value, now)
    if isinstance(credential, WarehouseKeyCredential):
        return warehouse_keys.authenticate(credential.value, now)
    raise TypeError(f"Unsupported credential type: {type(credential).__name__}")


@dataclass(frozen=True)
class AccessRequirement:
    """
    What a route demands of a principal.

    roles applies to session principals. permissions applies to key
    principals; None means the route admits no API keys at all.
    """

    roles: frozenset[str] = frozenset()
    permissions: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: Optional[str] = None

    @property
    def error(self) -> Optional[AuthErrorKind]:
        return None if self.allowed else AuthErrorKind.INSUFFICIENT_ROLE


class RoleAuthorizer:
    """
    Decides whether a principal may use a route.

    Session principals pass on role membership. Key principals pass only when
    the route lists permissions and the key holds every one of them (exact
    match). A key never satisfies a role check and a session never satisfies a
    permission check.
    """

    def authorize(
        self, principal: Principal, requirement: Union[AccessRequirement, Iterable[str]]
    ) -> AuthorizationDecision:
        if not isinstance(requirement, AccessRequirement):
            requirement = AccessRequirement(roles=frozenset(requirement))

        if principal.is_session:
            if principal.role in requirement.roles:
                return AuthorizationDecision(True)
            return AuthorizationDecision(
                False, f"Access denied. Required role: {' or '.join(sorted(requirement.roles)) or 'none'}"
            )

        if requirement.permissions is None:
            return AuthorizationDecision(False, "Access denied. API keys are not accepted on this route")

        missing = [p for p in requirement.permissions if p not in principal.permissions]
        if missing:
            return AuthorizationDecision(False, f"Access denied. Missing permission: {', '.join(missing)}")
        return AuthorizationDecision(True)


authorizer = RoleAuthorizer()


def _deny(
    request: Request,
    family: RouteFamily,
    error: AuthErrorKind,
    detail: Optional[str] = None,
    limiter: Optional[RateLimiter] = None,
    tier: Optional[str] = None,
):
    request_id = getattr(request.state, "request_id", "-")
    logger.warning(
        f"[{request_id}] {error.category} ({error.value}) on {request.method} {request.url.path} "
        f"[{family.name}]"
    )
    if limiter is not None and tier is not None:
        limiter.check_rejected(tier, request)
    headers = None
    if error.status_code == 401:
        takes_keys = family.accepted & {CourierKeyCredential, WarehouseKeyCredential}
        headers = {"WWW-Authenticate": "ApiKey, Bearer" if takes_keys else "Bearer"}
    raise AccessDenied(error, detail, headers=headers)


def require_access(
    family: RouteFamily,
    roles: Iterable[str] = (),
    permissions: Optional[Iterable[str]] = None,
    tier: Optional[str] = None,
):
    """
    Dependency factory for protected routes.

    Args:
        family: Route family whose precedence table picks the credential
        roles: Roles admitted for session principals
        permissions: Permissions every admitted key must hold (None: no keys)
        tier: Rate limit tier counted after the principal is admitted, and
            by client IP for every rejected request

    Usage:
        @router.get("/api-keys")
        async def list_keys(principal: Principal = Depends(require_access(STAFF, roles={"admin"}))):
            ...
    """
    requirement = AccessRequirement(
        roles=frozenset(roles),
        permissions=tuple(permissions) if permissions is not None else None,
    )

    async def check_access(
        request: Request,
        db: Session = Depends(get_db),
        verifier: SessionVerifier = Depends(get_session_verifier),
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> Principal:
        credential = resolve_credential(request.headers, family)
        if isinstance(credential, MissingCredential):
            _deny(request, family, AuthErrorKind.MISSING_CREDENTIAL, credential.detail, limiter, tier)

        keys = KeyStore(db)
        result = authenticate_credential(
            credential,
            sessions=SessionAuthenticator(verifier, UserStore(db)),
            courier_keys=ApiKeyAuthenticator(keys, KeyPurpose.COURIER),
            warehouse_keys=ApiKeyAuthenticator(keys, KeyPurpose.WAREHOUSE),
        )
        if not result.ok:
            _deny(request, family, result.error, result.detail, limiter, tier)

        principal = result.principal
        decision = authorizer.authorize(principal, requirement)
        if not decision.allowed:
            _deny(request, family, decision.error, decision.reason, limiter, tier)

        request.state.log_identity = principal.display_name

        if tier is not None:
            limiter.check(tier, request)

        return principal

    return check_access
