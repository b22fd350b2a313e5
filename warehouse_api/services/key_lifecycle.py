### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Key Lifecycle -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Key Lifecycle

Issue, inspect and revoke courier/warehouse API keys.

The raw key leaves this module exactly once, in the IssuedKey returned by
issue(). Every other view is ApiKeyMetadata, which has no field that could
carry the key or its digest.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from warehouse_api.models import APIKey, KeyPurpose
from warehouse_api.services.errors import InvalidKeyRequest, KeyNotFoundError
from warehouse_api.services.key_store import KeyStore
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)

MAX_EXPIRY_DAYS = 3650


@dataclass(frozen=True)
class ApiKeyMetadata:
    """Everything about a key except its value"""

    id: int
    purpose: str
    courier_code: str
    name: str
    description: Optional[str]
    key_prefix: str
    permissions: tuple[str, ...]
    is_active: bool
    is_expired: bool
    expires_at: datetime
    created_at: datetime
    created_by: int
    last_used_at: Optional[datetime]
    usage_count: int
    deactivated_at: Optional[datetime]
    deactivated_by: Optional[int]

    @classmethod
    def from_model(cls, api_key: APIKey, now: Optional[datetime] = None) -> "ApiKeyMetadata":
        return cls(
            id=api_key.id,
            purpose=api_key.purpose,
            courier_code=api_key.courier_code,
            name=api_key.name,
            description=api_key.description,
            key_prefix=api_key.key_prefix,
            permissions=tuple(api_key.permissions or ()),
            is_active=bool(api_key.is_active),
            is_expired=api_key.is_expired(now),
            expires_at=api_key.expires_at,
            created_at=api_key.created_at,
            created_by=api_key.created_by,
            last_used_at=api_key.last_used_at,
            usage_count=api_key.usage_count or 0,
            deactivated_at=api_key.deactivated_at,
            deactivated_by=api_key.deactivated_by,
        )


@dataclass(frozen=True)
class IssuedKey:
    """A freshly issued key. raw_key is not recoverable after this."""

    raw_key: str
    metadata: ApiKeyMetadata


@dataclass(frozen=True)
class KeyInfo:
    """Connection summary for one courier"""

    courier_code: str
    purpose: str
    has_active_key: bool
    active_key_count: int
    last_used: Optional[datetime]
    total_usage: int
    active_keys: tuple[ApiKeyMetadata, ...]


def normalize_courier_code(courier_code: Optional[str]) -> str:
    code = (courier_code or "").strip().upper()
    if not code:
        raise InvalidKeyRequest("courier_code is required")
    return code


class ApiKeyLifecycleManager:
    """Issues and revokes keys through a KeyStore"""

    def __init__(
        self,
        store: KeyStore,
        environment: str = "live",
        key_length: int = 32,
        default_expiry_days: int = 365,
    ):
        self.store = store
        self.environment = environment
        self.key_length = key_length
        self.default_expiry_days = default_expiry_days

    def issue(
        self,
        courier_code: str,
        created_by: int,
        expires_in_days: Optional[int] = None,
        description: Optional[str] = None,
        purpose: KeyPurpose = KeyPurpose.COURIER,
        permissions: Optional[Sequence[str]] = None,
        name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> IssuedKey:
        """
        Generate, persist and return a new key.

        Args:
            courier_code: Owning courier, trimmed and upper-cased
            created_by: Admin user id recorded on the key
            expires_in_days: Validity window (defaults to default_expiry_days)
            description: Free-text description
            purpose: courier or warehouse
            permissions: Permission strings (defaults per purpose)
            name: Display name (defaults to "<CODE> <Purpose> Integration")
            now: Issue time, for tests

        Raises:
            InvalidKeyRequest: Blank courier code, bad expiry or permissions
            StoreUnavailable: Key could not be persisted
        """
        code = normalize_courier_code(courier_code)
        days = self.default_expiry_days if expires_in_days is None else expires_in_days
        if not 1 <= days <= MAX_EXPIRY_DAYS:
            raise InvalidKeyRequest(f"expires_in_days must be between 1 and {MAX_EXPIRY_DAYS}")

        try:
            purpose = KeyPurpose(purpose)
        except ValueError:
            raise InvalidKeyRequest(f"Unknown key purpose '{purpose}'")

        if permissions is not None:
            permissions = [p.strip() for p in permissions if p and p.strip()]
            if not permissions:
                raise InvalidKeyRequest("permissions must not be empty")

        now = now or datetime.utcnow()
        api_key, raw_key = APIKey.create_key(
            courier_code=code,
            created_by=created_by,
            expires_at=APIKey.expiry_from_days(days, now),
            purpose=purpose,
            name=name,
            description=description,
            permissions=permissions,
            environment=self.environment,
            length=self.key_length,
        )
        api_key.created_at = now
        self.store.persist(api_key)

        logger.info(
            f"Issued {purpose.value} API key {api_key.key_prefix}... for {code} "
            f"(id={api_key.id}, expires {api_key.expires_at:%Y-%m-%d}, by user {created_by})"
        )
        return IssuedKey(raw_key=raw_key, metadata=ApiKeyMetadata.from_model(api_key, now))

    def get(self, key_id: int, now: Optional[datetime] = None) -> ApiKeyMetadata:
        api_key = self.store.get(key_id)
        if api_key is None:
            raise KeyNotFoundError(key_id)
        return ApiKeyMetadata.from_model(api_key, now)

    def list_keys(
        self,
        courier_code: Optional[str] = None,
        purpose: Optional[KeyPurpose] = None,
        active_only: bool = False,
        now: Optional[datetime] = None,
    ) -> List[ApiKeyMetadata]:
        code = courier_code.strip().upper() if courier_code and courier_code.strip() else None
        keys = self.store.find_by_courier(code, purpose, active_only=active_only)
        return [ApiKeyMetadata.from_model(k, now) for k in keys]

    def get_info(
        self,
        courier_code: str,
        purpose: KeyPurpose = KeyPurpose.COURIER,
        now: Optional[datetime] = None,
    ) -> KeyInfo:
        """
        Connection summary for a courier.

        A key counts as active only when it is both un-revoked and unexpired.
        Usage totals cover every key the courier has held.
        """
        code = normalize_courier_code(courier_code)
        purpose = KeyPurpose(purpose)
        now = now or datetime.utcnow()

        keys = [ApiKeyMetadata.from_model(k, now) for k in self.store.find_by_courier(code, purpose)]
        active = tuple(k for k in keys if k.is_active and not k.is_expired)
        used = [k.last_used_at for k in keys if k.last_used_at is not None]

        return KeyInfo(
            courier_code=code,
            purpose=purpose.value,
            has_active_key=bool(active),
            active_key_count=len(active),
            last_used=max(used) if used else None,
            total_usage=sum(k.usage_count for k in keys),
            active_keys=active,
        )

    def revoke(self, key_id: int, revoked_by: int, now: Optional[datetime] = None) -> tuple[ApiKeyMetadata, bool]:
        """
        Revoke a key. Revoking an already revoked key changes nothing.

        Returns:
            (metadata, changed) where changed is False for a repeat revoke

        Raises:
            KeyNotFoundError: Unknown key id
        """
        api_key = self.store.get(key_id)
        if api_key is None:
            raise KeyNotFoundError(key_id)

        changed = api_key.deactivate(revoked_by, now)
        if changed:
            self.store.persist(api_key)
            logger.info(f"Revoked API key {api_key.key_prefix}... (id={api_key.id}) by user {revoked_by}")
        return ApiKeyMetadata.from_model(api_key, now), changed
