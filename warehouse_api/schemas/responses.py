### Description ###
# Warehouse API - Clean J Shipping Backend
# - Common Response Schemas -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Common Response Schemas

Pydantic models for standardized API responses. JSON field names are
camelCase; Python attribute names stay snake_case.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class APIResponse(CamelModel, Generic[T]):
    """Standard API response wrapper"""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class ErrorDetail(CamelModel):
    """Error detail for validation errors"""

    field: Optional[str] = None
    message: str
    code: Optional[str] = None


class ErrorResponse(CamelModel):
    """Standard error response"""

    success: bool = False
    error: str
    code: Optional[str] = None
    details: Optional[List[ErrorDetail]] = None
    request_id: Optional[str] = None
    retry_after: Optional[int] = None


class HealthResponse(CamelModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    app_db_connected: bool
