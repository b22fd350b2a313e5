### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Models Package -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Models Package

Contains SQLAlchemy models for the application database:
- User: Staff and customer accounts (session login)
- APIKey: Courier/warehouse integration credential
- AccessLog: Request/response audit log
"""

from warehouse_api.models.user import User
from warehouse_api.models.api_key import APIKey, KeyPurpose, digest_key, generate_api_key
from warehouse_api.models.access_log import AccessLog

__all__ = [
    "User",
    "APIKey",
    "KeyPurpose",
    "AccessLog",
    "digest_key",
    "generate_api_key",
]
