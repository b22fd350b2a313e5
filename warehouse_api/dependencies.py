### Description ###
# Warehouse API - Clean J Shipping Backend
# - FastAPI Dependencies -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
FastAPI Dependencies

Provides dependency injection for:
- Session token verifier
- API key and user stores (bound to the request's DB session)
- API key lifecycle manager
- Configuration settings

Tests swap any of these through app.dependency_overrides.
"""

from datetime import timedelta

from fastapi import Depends
from sqlalchemy.orm import Session

from warehouse_api.config import APISettings, get_api_settings
from warehouse_api.database import get_db
from warehouse_api.services.key_lifecycle import ApiKeyLifecycleManager
from warehouse_api.services.key_store import KeyStore
from warehouse_api.services.session import SessionVerifier
from warehouse_api.services.user_store import UserStore


def get_settings() -> APISettings:
    return get_api_settings()


def get_session_verifier(settings: APISettings = Depends(get_settings)) -> SessionVerifier:
    """Verifier configured from WAREHOUSE_JWT_* settings"""
    return SessionVerifier(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(hours=settings.jwt_expires_hours),
    )


def get_key_store(db: Session = Depends(get_db)) -> KeyStore:
    return KeyStore(db)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_key_lifecycle(
    store: KeyStore = Depends(get_key_store),
    settings: APISettings = Depends(get_settings),
) -> ApiKeyLifecycleManager:
    """Lifecycle manager issuing keys for the configured environment"""
    return ApiKeyLifecycleManager(
        store,
        environment=settings.api_key_environment,
        key_length=settings.api_key_length,
        default_expiry_days=settings.default_key_expiry_days,
    )
