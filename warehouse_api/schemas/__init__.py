### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Schemas Package -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Schemas Package

Contains Pydantic models for request/response validation:
- auth: Login, account and principal schemas
- key_management: API key issue/list/info schemas
- responses: Common response schemas
"""

from .auth import ChangePasswordRequest, LoginRequest, LoginResponse, PrincipalResponse, UserResponse
from .key_management import (
    APIKeyCreate,
    APIKeyCreatedResponse,
    APIKeyListResponse,
    APIKeyResponse,
    KeyInfoResponse,
)
from .responses import APIResponse, CamelModel, ErrorResponse, HealthResponse

__all__ = [
    "APIKeyCreate",
    "APIKeyCreatedResponse",
    "APIKeyListResponse",
    "APIKeyResponse",
    "APIResponse",
    "CamelModel",
    "ChangePasswordRequest",
    "ErrorResponse",
    "HealthResponse",
    "KeyInfoResponse",
    "LoginRequest",
    "LoginResponse",
    "PrincipalResponse",
    "UserResponse",
]
