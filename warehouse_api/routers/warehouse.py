### Description ###
# Warehouse API - Clean J Shipping Backend
# - Warehouse Router -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Warehouse API Endpoints

Reachable with a warehouse API key (X-API-Key) or a staff session token.
"""

from fastapi import APIRouter, Depends

from warehouse_api.middleware.auth import require_access
from warehouse_api.middleware.credentials import WAREHOUSE
from warehouse_api.models.user import STAFF_ROLES
from warehouse_api.principal import Principal
from warehouse_api.schemas.auth import PrincipalResponse
from warehouse_api.schemas.responses import APIResponse

router = APIRouter()


@router.get(
    "/context",
    response_model=APIResponse[PrincipalResponse],
    summary="Warehouse caller context",
    description="Identity of the warehouse integration or staff member making the call",
)
async def get_warehouse_context(
    principal: Principal = Depends(
        require_access(WAREHOUSE, roles=STAFF_ROLES, permissions=["warehouse:read"], tier="general")
    ),
) -> APIResponse[PrincipalResponse]:
    return APIResponse(success=True, data=PrincipalResponse.from_principal(principal))
