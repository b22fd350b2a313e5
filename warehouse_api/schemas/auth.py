### Description ###
# Warehouse API - Clean J Shipping Backend
# - Auth Schemas -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Auth Schemas

Pydantic models for login, account and principal endpoints.
"""

from datetime import datetime

from pydantic import Field

from warehouse_api.schemas.responses import CamelModel


class LoginRequest(CamelModel):
    """Email/password login"""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Account details (no password hash)"""

    id: int
    user_code: str
    email: str
    first_name: str
    last_name: str
    role: str
    account_status: str
    last_login: datetime | None = None
    created_at: datetime


class LoginResponse(CamelModel):
    """Login response with session token"""

    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class PrincipalResponse(CamelModel):
    """Identity resolved for the current request"""

    kind: str
    id: int
    role: str | None = None
    permissions: list[str] = Field(default_factory=list)
    courier_code: str | None = None
    user_code: str | None = None
    key_prefix: str | None = None

    @classmethod
    def from_principal(cls, principal) -> "PrincipalResponse":
        return cls(
            kind=principal.kind.value,
            id=principal.id,
            role=principal.role,
            permissions=sorted(principal.permissions),
            courier_code=principal.courier_code,
            user_code=principal.user_code,
            key_prefix=principal.key_prefix,
        )
