### Description ###
# Warehouse API - Clean J Shipping Backend
# - Auth Router -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Auth API Endpoints

- Staff and customer login (issues session tokens)
- Current principal lookup
- Password change
"""

from typing import Iterable

from fastapi import APIRouter, Depends, HTTPException, status

from warehouse_api.dependencies import get_session_verifier, get_user_store
from warehouse_api.middleware.auth import require_access
from warehouse_api.middleware.credentials import ACCOUNT
from warehouse_api.middleware.rate_limit import RateLimiter, RateLimitStatus, get_rate_limiter, rate_limit
from warehouse_api.models.user import ROLE_CUSTOMER, ROLES, STAFF_ROLES
from warehouse_api.principal import Principal
from warehouse_api.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PrincipalResponse,
    UserResponse,
)
from warehouse_api.schemas.responses import APIResponse
from warehouse_api.services.session import SessionVerifier
from warehouse_api.services.user_store import UserStore
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()


def _login(
    data: LoginRequest,
    roles: Iterable[str],
    limit: RateLimitStatus,
    users: UserStore,
    verifier: SessionVerifier,
    limiter: RateLimiter,
) -> APIResponse[LoginResponse]:
    user = users.find_by_email(data.email, roles=roles)

    # Unknown email, wrong password and inactive account all look the same to the caller
    if user is None or not user.is_active or not user.check_password(data.password):
        logger.warning(f"Failed login for {data.email} ({limit.count}/{limit.limit} attempts)")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    limiter.refund(limit.tier, limit.identity)
    users.record_login(user)

    token = verifier.issue(user.id, user.role, user.user_code)
    logger.info(f"User {user.user_code} ({user.role}) logged in")

    return APIResponse(
        success=True,
        message="Login successful",
        data=LoginResponse(
            token=token,
            expires_in=verifier.expires_in,
            user=UserResponse.model_validate(user),
        ),
    )


@router.post(
    "/login",
    response_model=APIResponse[LoginResponse],
    summary="Staff login",
    description="Authenticate an admin or warehouse account and get a session token",
)
async def staff_login(
    data: LoginRequest,
    limit: RateLimitStatus = Depends(rate_limit("auth")),
    users: UserStore = Depends(get_user_store),
    verifier: SessionVerifier = Depends(get_session_verifier),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> APIResponse[LoginResponse]:
    return _login(data, STAFF_ROLES, limit, users, verifier, limiter)


@router.post(
    "/customer/login",
    response_model=APIResponse[LoginResponse],
    summary="Customer login",
    description="Authenticate a customer account and get a session token",
)
async def customer_login(
    data: LoginRequest,
    limit: RateLimitStatus = Depends(rate_limit("auth")),
    users: UserStore = Depends(get_user_store),
    verifier: SessionVerifier = Depends(get_session_verifier),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> APIResponse[LoginResponse]:
    return _login(data, (ROLE_CUSTOMER,), limit, users, verifier, limiter)


@router.get(
    "/me",
    response_model=APIResponse[PrincipalResponse],
    summary="Current principal",
)
async def get_me(
    principal: Principal = Depends(require_access(ACCOUNT, roles=ROLES, tier="general")),
) -> APIResponse[PrincipalResponse]:
    return APIResponse(success=True, data=PrincipalResponse.from_principal(principal))


@router.post(
    "/change-password",
    response_model=APIResponse[None],
    summary="Change password",
)
async def change_password(
    data: ChangePasswordRequest,
    principal: Principal = Depends(require_access(ACCOUNT, roles=ROLES, tier="password-reset")),
    users: UserStore = Depends(get_user_store),
) -> APIResponse[None]:
    user = users.get(principal.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not user.check_password(data.current_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    user.set_password(data.new_password)
    users.save(user)
    logger.info(f"User {user.user_code} changed their password")

    return APIResponse(success=True, message="Password updated successfully")
