### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Services Package -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Services Package

Contains business logic and data access services:
- key_store / user_store: SQLAlchemy data access
- session: session token issue/verify
- key_lifecycle: API key issue, inspect and revoke
"""

from .errors import InvalidKeyRequest, KeyNotFoundError, StoreUnavailable
from .key_lifecycle import ApiKeyLifecycleManager, ApiKeyMetadata, IssuedKey, KeyInfo
from .key_store import KeyStore
from .session import SessionClaims, SessionVerifier
from .user_store import UserStore

__all__ = [
    "ApiKeyLifecycleManager",
    "ApiKeyMetadata",
    "InvalidKeyRequest",
    "IssuedKey",
    "KeyInfo",
    "KeyNotFoundError",
    "KeyStore",
    "SessionClaims",
    "SessionVerifier",
    "StoreUnavailable",
    "UserStore",
]
