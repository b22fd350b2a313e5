### Description ###
# Warehouse API - Clean J Shipping Backend
# - Session Tokens -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Session Tokens

Issues and verifies the signed HS256 tokens handed out by the staff and
customer login endpoints. Claims: sub (user id), role, user_code, iat, exp and
type="session". The role claim is informational only; authorization always
re-reads the role from the user store.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

import jwt

from warehouse_api.principal import AuthErrorKind

TOKEN_TYPE = "session"


@dataclass(frozen=True)
class SessionClaims:
    """Verified contents of a session token"""

    subject_id: int
    role: Optional[str]
    user_code: Optional[str]
    issued_at: datetime
    expires_at: datetime


class SessionVerifier:
    """Signs and checks session tokens with a shared secret"""

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime: timedelta = timedelta(days=7)):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds"""
        return int(self.lifetime.total_seconds())

    def issue(
        self,
        subject_id: int,
        role: str,
        user_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        issued_at = now or datetime.utcnow()
        payload = {
            "sub": str(subject_id),
            "role": role,
            "user_code": user_code,
            "type": TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Union[SessionClaims, AuthErrorKind]:
        """
        Verify signature and expiry of a session token.

        Returns:
            SessionClaims, or EXPIRED_TOKEN / MALFORMED_TOKEN
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            return AuthErrorKind.EXPIRED_TOKEN
        except jwt.InvalidTokenError:
            return AuthErrorKind.MALFORMED_TOKEN

        if payload.get("type") != TOKEN_TYPE:
            return AuthErrorKind.MALFORMED_TOKEN

        try:
            subject_id = int(payload["sub"])
        except (TypeError, ValueError):
            return AuthErrorKind.MALFORMED_TOKEN

        return SessionClaims(
            subject_id=subject_id,
            role=payload.get("role"),
            user_code=payload.get("user_code"),
            issued_at=datetime.utcfromtimestamp(payload["iat"]),
            expires_at=datetime.utcfromtimestamp(payload["exp"]),
        )
