### Description ###
# Warehouse API - Clean J Shipping Backend
# - Staff Router -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Staff Management API Endpoints

Admin-only account administration.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from warehouse_api.dependencies import get_user_store
from warehouse_api.middleware.auth import require_access
from warehouse_api.middleware.credentials import STAFF
from warehouse_api.models.user import ROLE_ADMIN, STATUS_INACTIVE
from warehouse_api.principal import Principal
from warehouse_api.schemas.auth import UserResponse
from warehouse_api.schemas.responses import APIResponse
from warehouse_api.services.user_store import UserStore
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()


@router.post(
    "/staff/{user_id}/deactivate",
    response_model=APIResponse[UserResponse],
    summary="Deactivate account",
    description="Deactivate a staff or customer account. Admins cannot deactivate themselves.",
)
async def deactivate_user(
    user_id: int,
    principal: Principal = Depends(require_access(STAFF, roles={ROLE_ADMIN}, tier="general")),
    users: UserStore = Depends(get_user_store),
) -> APIResponse[UserResponse]:
    if principal.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot deactivate your own account",
        )

    user = users.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {user_id} not found")

    user.account_status = STATUS_INACTIVE
    users.save(user)
    logger.info(f"User {user.user_code} deactivated by {principal.display_name}")

    return APIResponse(
        success=True,
        message="Account deactivated",
        data=UserResponse.model_validate(user),
    )
