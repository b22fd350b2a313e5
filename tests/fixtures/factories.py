"""
Factory functions for creating test model instances.

These factories create valid model instances with sensible defaults,
making it easy to set up test scenarios.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from warehouse_api.models import APIKey, KeyPurpose, User
from warehouse_api.models.user import ROLE_ADMIN, STATUS_ACTIVE

DEFAULT_PASSWORD = "Sup3rSecret!"


class FakeClock:
    """Manually advanced clock for rate limiter windows"""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def create_user(
    db: Session,
    role: str = ROLE_ADMIN,
    email: Optional[str] = None,
    user_code: Optional[str] = None,
    password: str = DEFAULT_PASSWORD,
    account_status: str = STATUS_ACTIVE,
    first_name: str = "Test",
    last_name: str = "User",
) -> User:
    """
    Create and persist a user for testing.

    Args:
        db: Database session
        role: admin, warehouse or customer
        email: Login email (default: <role>-<n>@example.com)
        user_code: Unique user code (default derived from role)
        password: Plaintext password to hash
        account_status: pending, active or inactive

    Returns:
        Created User instance
    """
    count = db.query(User).count() + 1
    user = User(
        user_code=user_code or f"{role[:3].upper()}-{count:03d}",
        email=email or f"{role}-{count}@example.com",
        first_name=first_name,
        last_name=last_name,
        role=role,
        account_status=account_status,
    )
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_api_key(
    db: Session,
    created_by: User,
    courier_code: str = "CLEAN",
    purpose: KeyPurpose = KeyPurpose.COURIER,
    permissions: Optional[list[str]] = None,
    expires_at: Optional[datetime] = None,
    is_active: bool = True,
) -> tuple[APIKey, str]:
    """
    Create and persist an API key for testing.

    Args:
        db: Database session
        created_by: Issuing admin
        courier_code: Owning courier
        purpose: courier or warehouse
        permissions: Permission list (default per purpose)
        expires_at: Expiration (default: 30 days from now)
        is_active: Whether key is active

    Returns:
        Tuple of (APIKey instance, plaintext key string)
    """
    api_key, plaintext = APIKey.create_key(
        courier_code=courier_code,
        created_by=created_by.id,
        expires_at=expires_at or datetime.utcnow() + timedelta(days=30),
        purpose=purpose,
        permissions=permissions,
        environment="test",
    )

    if not is_active:
        api_key.deactivate(created_by.id)

    db.add(api_key)
    db.commit()
    db.refresh(api_key)
    return api_key, plaintext
