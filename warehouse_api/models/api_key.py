### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Key Model -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Key Model

Stores API keys issued to courier and warehouse integrations with:
- SHA-256 digest of the key value - the actual key is only shown once on creation
- Key prefix for identification (environment tag + first random chars, plaintext)
- Purpose partition (courier vs. warehouse integration)
- Permissions (JSON list of allowed operations)
- Mandatory expiration, revocation audit and usage counters

Keys are never deleted; revocation only flips is_active so usage history survives.
"""

import hashlib
import secrets
import string
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String

from warehouse_api.database import Base


class KeyPurpose(str, Enum):
    """Which integration a key was issued for"""

    COURIER = "courier"
    WAREHOUSE = "warehouse"


# Fixed type prefix per purpose; the environment tag follows it (kcd_live_..., wh_test_...)
KEY_TYPE_PREFIXES = {
    KeyPurpose.COURIER: "kcd",
    KeyPurpose.WAREHOUSE: "wh",
}

DEFAULT_PERMISSIONS = {
    KeyPurpose.COURIER: ["kcd_integration"],
    KeyPurpose.WAREHOUSE: ["warehouse:read"],
}


def digest_key(plaintext: str) -> str:
    """Digest a key for storage and exact-value lookup"""
    return hashlib.sha256(plaintext.encode()).hexdigest()


def key_prefix_for(purpose: KeyPurpose, environment: str = "live") -> str:
    """Recognizable prefix for keys of a purpose, e.g. 'kcd_live_'"""
    return f"{KEY_TYPE_PREFIXES[KeyPurpose(purpose)]}_{environment}_"


def generate_api_key(prefix: str = "kcd_live_", length: int = 32) -> str:
    """
    Generate a secure random API key.

    Format: {prefix}{random_chars}
    Example: kcd_live_a1B2c3D4e5F6g7H8i9J0k1L2m3N4o5P6

    Args:
        prefix: Recognizable prefix identifying key type and environment
        length: Length of the random portion (default 32)

    Returns:
        New API key string
    """
    chars = string.ascii_letters + string.digits
    random_part = "".join(secrets.choice(chars) for _ in range(length))
    return f"{prefix}{random_part}"


class APIKey(Base):
    """
    API Key model - long-lived credential for an external integration.

    Only the digest of the key is stored; the raw value cannot be retrieved.
    The prefix (type, environment and first 4 random chars) is kept in
    plaintext so operators can tell keys apart.
    """

    __tablename__ = "api_keys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    purpose = Column(String(20), nullable=False, default=KeyPurpose.COURIER.value)
    courier_code = Column(String(20), nullable=False, index=True)  # e.g. "CLEAN"
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)

    # Key storage - only prefix is visible, full key is digested
    key_prefix = Column(String(24), nullable=False)
    key_hash = Column(String(64), nullable=False, unique=True)

    # e.g. ["kcd_integration"] or ["warehouse:read", "packages:write"]
    permissions = Column(JSON, default=list, nullable=False)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    # Tracking
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    last_used_at = Column(DateTime, nullable=True)
    usage_count = Column(Integer, default=0, nullable=False)

    # Revocation audit
    deactivated_at = Column(DateTime, nullable=True)
    deactivated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        Index("ix_api_keys_active_expiry", "is_active", "expires_at"),
        Index("ix_api_keys_purpose_courier", "purpose", "courier_code"),
    )

    def __repr__(self):
        return f"<APIKey(id={self.id}, courier='{self.courier_code}', prefix='{self.key_prefix}')>"

    @classmethod
    def create_key(
        cls,
        courier_code: str,
        created_by: int,
        expires_at: datetime,
        purpose: KeyPurpose = KeyPurpose.COURIER,
        name: Optional[str] = None,
        description: Optional[str] = None,
        permissions: Optional[List[str]] = None,
        environment: str = "live",
        length: int = 32,
    ) -> tuple["APIKey", str]:
        """
        Create a new API key with a generated secret.

        Returns both the APIKey model instance and the plaintext key.
        The plaintext key should be shown to the caller once and never stored.

        Args:
            courier_code: Code of the owning courier (e.g. "CLEAN")
            created_by: ID of the admin issuing the key
            expires_at: Expiration datetime (UTC)
            purpose: Integration partition the key authenticates against
            name: Human-readable name for the key
            description: Optional description
            permissions: List of permission strings (defaults per purpose)
            environment: Environment tag embedded in the prefix
            length: Length of the random portion

        Returns:
            Tuple of (APIKey instance, plaintext key string)
        """
        purpose = KeyPurpose(purpose)
        prefix = key_prefix_for(purpose, environment)
        plaintext_key = generate_api_key(prefix=prefix, length=length)

        if permissions is None:
            permissions = list(DEFAULT_PERMISSIONS[purpose])

        api_key = cls(
            purpose=purpose.value,
            courier_code=courier_code,
            name=name or f"{courier_code} {purpose.value.title()} Integration",
            description=description,
            key_prefix=plaintext_key[: len(prefix) + 4],
            key_hash=digest_key(plaintext_key),
            permissions=permissions,
            is_active=True,
            expires_at=expires_at,
            created_by=created_by,
            usage_count=0,
        )

        return api_key, plaintext_key

    @staticmethod
    def expiry_from_days(days: int, now: Optional[datetime] = None) -> datetime:
        """Expiration timestamp for a key valid for `days` from now"""
        return (now or datetime.utcnow()) + timedelta(days=days)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Expired once now reaches expires_at"""
        return (now or datetime.utcnow()) >= self.expires_at

    def record_use(self, now: Optional[datetime] = None):
        """Record that this key was used (updates last_used_at and usage_count)"""
        self.last_used_at = now or datetime.utcnow()
        self.usage_count = (self.usage_count or 0) + 1

    def deactivate(self, deactivated_by: Optional[int], now: Optional[datetime] = None) -> bool:
        """
        Revoke this key. Returns False when it was already inactive.

        The revocation audit fields are only written the first time.
        """
        if not self.is_active:
            return False
        self.is_active = False
        self.deactivated_at = now or datetime.utcnow()
        self.deactivated_by = deactivated_by
        return True
