### Description ###
# Warehouse API - Clean J Shipping Backend
# - Key Management Router -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Key Management API Endpoints

Admin-only endpoints for courier and warehouse integration keys:
- Issue (the key is returned once, in this response only)
- List, inspect and connection summary
- Revoke (keys are never deleted)
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from warehouse_api.dependencies import get_key_lifecycle
from warehouse_api.middleware.auth import require_access
from warehouse_api.middleware.credentials import STAFF
from warehouse_api.models import KeyPurpose
from warehouse_api.models.user import ROLE_ADMIN
from warehouse_api.principal import Principal
from warehouse_api.schemas.key_management import (
    APIKeyCreate,
    APIKeyCreatedResponse,
    APIKeyListResponse,
    APIKeyResponse,
    KeyInfoResponse,
)
from warehouse_api.schemas.responses import APIResponse
from warehouse_api.services.errors import InvalidKeyRequest, KeyNotFoundError
from warehouse_api.services.key_lifecycle import ApiKeyLifecycleManager

router = APIRouter()

require_admin = require_access(STAFF, roles={ROLE_ADMIN}, tier="general")


def _next_steps(courier_code: str, purpose: KeyPurpose) -> list[str]:
    if purpose == KeyPurpose.WAREHOUSE:
        return [
            "1. Copy the apiKey value above",
            "2. Configure the warehouse integration to send it in the X-API-Key header",
            "3. Verify with GET /api/warehouse/context",
        ]
    return [
        "1. Copy the apiKey value above (plain token, no prefix)",
        "2. Go to https://pack.kcdlogistics.com",
        f"3. Admin → Couriers → {courier_code} → Edit",
        '4. Go to "Courier System API" tab',
        '5. Paste the key into the "API Access Token" field',
        "6. Save and test",
    ]


@router.post(
    "/api-keys",
    response_model=APIResponse[APIKeyCreatedResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Issue API key",
    description="Issue a new integration API key. The key is shown only in this response.",
)
async def create_api_key(
    data: APIKeyCreate,
    principal: Principal = Depends(require_admin),
    lifecycle: ApiKeyLifecycleManager = Depends(get_key_lifecycle),
) -> APIResponse[APIKeyCreatedResponse]:
    try:
        issued = lifecycle.issue(
            courier_code=data.courier_code,
            created_by=principal.id,
            expires_in_days=data.expires_in,
            description=data.description,
            purpose=data.purpose,
            permissions=data.permissions,
            name=data.name,
        )
    except InvalidKeyRequest as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    meta = issued.metadata
    return APIResponse(
        success=True,
        message="API key generated successfully. Save it now; it will not be shown again.",
        data=APIKeyCreatedResponse(
            id=meta.id,
            api_key=issued.raw_key,
            key_prefix=meta.key_prefix,
            courier_code=meta.courier_code,
            purpose=meta.purpose,
            description=meta.description,
            permissions=list(meta.permissions),
            expires_at=meta.expires_at,
            created_at=meta.created_at,
            next_steps=_next_steps(meta.courier_code, KeyPurpose(meta.purpose)),
        ),
    )


@router.get(
    "/api-keys",
    response_model=APIResponse[APIKeyListResponse],
    summary="List API keys",
)
async def list_api_keys(
    principal: Principal = Depends(require_admin),
    lifecycle: ApiKeyLifecycleManager = Depends(get_key_lifecycle),
    courier_code: str | None = Query(None, alias="courierCode"),
    purpose: KeyPurpose | None = Query(None),
    active_only: bool = Query(False, alias="activeOnly"),
) -> APIResponse[APIKeyListResponse]:
    keys = lifecycle.list_keys(courier_code, purpose, active_only=active_only)
    return APIResponse(
        success=True,
        data=APIKeyListResponse(
            total=len(keys),
            active=sum(1 for k in keys if k.is_active and not k.is_expired),
            api_keys=[APIKeyResponse.model_validate(k) for k in keys],
        ),
    )


@router.get(
    "/api-keys/info",
    response_model=APIResponse[KeyInfoResponse],
    summary="Courier connection info",
    description="Whether a courier has a usable key, and its usage totals",
)
async def get_api_key_info(
    principal: Principal = Depends(require_admin),
    lifecycle: ApiKeyLifecycleManager = Depends(get_key_lifecycle),
    courier_code: str = Query("CLEAN", alias="courierCode"),
    purpose: KeyPurpose = Query(KeyPurpose.COURIER),
) -> APIResponse[KeyInfoResponse]:
    try:
        info = lifecycle.get_info(courier_code, purpose)
    except InvalidKeyRequest as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return APIResponse(success=True, data=KeyInfoResponse.model_validate(info))


@router.get(
    "/api-keys/{key_id}",
    response_model=APIResponse[APIKeyResponse],
    summary="Get API key",
)
async def get_api_key(
    key_id: int,
    principal: Principal = Depends(require_admin),
    lifecycle: ApiKeyLifecycleManager = Depends(get_key_lifecycle),
) -> APIResponse[APIKeyResponse]:
    try:
        meta = lifecycle.get(key_id)
    except KeyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return APIResponse(success=True, data=APIKeyResponse.model_validate(meta))


@router.post(
    "/api-keys/{key_id}/revoke",
    response_model=APIResponse[APIKeyResponse],
    summary="Revoke API key",
    description="Deactivate a key. Repeating the call changes nothing.",
)
async def revoke_api_key(
    key_id: int,
    principal: Principal = Depends(require_admin),
    lifecycle: ApiKeyLifecycleManager = Depends(get_key_lifecycle),
) -> APIResponse[APIKeyResponse]:
    try:
        meta, changed = lifecycle.revoke(key_id, revoked_by=principal.id)
    except KeyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return APIResponse(
        success=True,
        message="API key revoked" if changed else "API key was already revoked",
        data=APIKeyResponse.model_validate(meta),
    )
