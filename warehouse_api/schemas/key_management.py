### Description ###
# Warehouse API - Clean J Shipping Backend
# - Key Management Schemas -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Key Management Schemas

Pydantic models for the admin API key endpoints.
"""

from datetime import datetime

from pydantic import Field

from warehouse_api.models import KeyPurpose
from warehouse_api.schemas.responses import CamelModel


class APIKeyCreate(CamelModel):
    """Issue a new API key"""

    courier_code: str = Field(default="CLEAN", min_length=1, max_length=20, description="Owning courier code")
    description: str = Field(
        default="KCD Logistics Integration API Key", max_length=500, description="Description"
    )
    expires_in: int = Field(default=365, ge=1, le=3650, description="Days until the key expires")
    purpose: KeyPurpose = Field(default=KeyPurpose.COURIER, description="courier or warehouse")
    permissions: list[str] | None = Field(
        default=None,
        description="Permissions (defaults: kcd_integration for courier, warehouse:read for warehouse)",
    )
    name: str | None = Field(default=None, max_length=100, description="Display name")


class APIKeyResponse(CamelModel):
    """API key metadata (never includes the key itself)"""

    id: int
    purpose: str
    courier_code: str
    name: str
    description: str | None = None
    key_prefix: str
    permissions: list[str]
    is_active: bool
    is_expired: bool
    expires_at: datetime
    created_at: datetime
    created_by: int
    last_used_at: datetime | None = None
    usage_count: int = 0
    deactivated_at: datetime | None = None
    deactivated_by: int | None = None


class APIKeyCreatedResponse(CamelModel):
    """
    Response when a key is issued.

    api_key is shown only here; it cannot be retrieved again.
    """

    id: int
    api_key: str
    key_prefix: str
    courier_code: str
    purpose: str
    description: str | None = None
    permissions: list[str]
    expires_at: datetime
    created_at: datetime
    next_steps: list[str]


class APIKeyListResponse(CamelModel):
    total: int
    active: int
    api_keys: list[APIKeyResponse]


class KeyInfoResponse(CamelModel):
    """Connection summary for one courier"""

    courier_code: str
    purpose: str
    has_active_key: bool
    active_key_count: int
    last_used: datetime | None = None
    total_usage: int
    active_keys: list[APIKeyResponse]
