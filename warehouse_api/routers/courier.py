### Description ###
# Warehouse API - Clean J Shipping Backend
# - Courier Router -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Courier Integration Endpoints

Called by courier portals (KCD Logistics) with a courier API key, either in
X-KCD-API-Key or as Authorization: Bearer <raw key>.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from warehouse_api.config import get_api_settings
from warehouse_api.middleware.auth import require_access
from warehouse_api.middleware.credentials import COURIER
from warehouse_api.principal import Principal
from warehouse_api.schemas.responses import APIResponse, CamelModel

router = APIRouter()


class CourierConnectionResponse(CamelModel):
    courier_code: str
    timestamp: datetime
    server: str
    version: str
    status: str = "connected"


@router.post(
    "/TestCourierProvider",
    response_model=APIResponse[CourierConnectionResponse],
    summary="Courier connection test",
    description="Used by the courier portal to validate its API access token",
)
async def test_courier_provider(
    principal: Principal = Depends(
        require_access(COURIER, permissions=["kcd_integration"], tier="api-key")
    ),
) -> APIResponse[CourierConnectionResponse]:
    settings = get_api_settings()
    return APIResponse(
        success=True,
        message="Courier API connection test successful",
        data=CourierConnectionResponse(
            courier_code=principal.courier_code,
            timestamp=datetime.now(timezone.utc),
            server="Clean J Shipping Backend",
            version=settings.api_version,
        ),
    )
