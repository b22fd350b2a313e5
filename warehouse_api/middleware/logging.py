### Description ###
# Warehouse API - Clean J Shipping Backend
# - Request Logging Middleware -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Request Logging Middleware

Logs all API requests with attribution information:
- Who: masked credential (API key or bearer token)
- What: Endpoint, method, parameters
- When: Timestamp
- Result: Status code, response time

Logs to both file and SQLite database for audit.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from warehouse_api.config import get_api_settings
from warehouse_api.database import SessionLocal
from warehouse_api.models.access_log import AccessLog
from warehouse_api.utils import setup_logger

# Set up API request logger
api_logger = setup_logger("warehouse_api.requests", log_to_console=False)


def mask_credential(request: Request) -> str | None:
    """
    Short, non-secret hint of the credential a request carried.

    API keys keep their first 8 characters ("kcd_live..."); bearer values keep
    the first 8 after a "bearer:" tag.
    """
    settings = get_api_settings()
    for header in (settings.courier_key_header, settings.api_key_header):
        value = request.headers.get(header, "").strip()
        if value:
            return value[:8] + "..." if len(value) > 8 else value

    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() == "bearer" and token:
        return f"bearer:{token[:8]}..."
    return None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging all API requests

    Captures:
    - Request ID (UUID)
    - Method and path
    - Credential (masked)
    - Client IP
    - Response status
    - Response time

    Excludes health/docs/admin requests from database logging (still logs to file).
    """

    # Paths to exclude from database logging
    EXCLUDE_FROM_DB = (
        "/health",
        "/api/admin/",
        "/api/docs",
        "/api/redoc",
        "/api/openapi.json",
        "/favicon.ico",
    )

    def _should_log_to_db(self, path: str) -> bool:
        """Check if request should be logged to database"""
        return path != "/" and not any(path.startswith(prefix) for prefix in self.EXCLUDE_FROM_DB)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        method = request.method
        path = request.url.path
        query = str(request.url.query) if request.url.query else ""
        client_ip = request.client.host if request.client else "unknown"
        credential_hint = mask_credential(request)

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            api_logger.error(f"[{request_id}] ERROR {method} {path} - {e!s}")
            raise

        response_time = (time.time() - start_time) * 1000  # ms

        who = getattr(request.state, "log_identity", None) or "-"
        log_entry = (
            f"[{request_id}] "
            f"{method} {path}"
            f"{f'?{query}' if query else ''} "
            f"| cred={credential_hint or 'none'} "
            f"| who={who} "
            f"| ip={client_ip} "
            f"| status={status_code} "
            f"| time={response_time:.2f}ms"
        )

        if status_code >= 500:
            api_logger.error(log_entry)
        elif status_code >= 400:
            api_logger.warning(log_entry)
        else:
            api_logger.info(log_entry)

        response.headers["X-Request-ID"] = request_id

        if self._should_log_to_db(path):
            self._save_access_log(
                AccessLog.create_from_request(
                    request_id=request_id,
                    method=method,
                    path=path,
                    status_code=status_code,
                    response_time_ms=response_time,
                    credential_hint=credential_hint,
                    query_string=query or None,
                    client_ip=client_ip,
                    user_agent=request.headers.get("User-Agent"),
                )
            )

        return response

    def _save_access_log(self, entry: AccessLog):
        """Save access log entry to database in its own session"""
        try:
            db = SessionLocal()
            try:
                db.add(entry)
                db.commit()
            finally:
                db.close()
        except Exception as e:
            # Log the error but don't fail the request
            api_logger.error(f"Failed to save access log: {e!s}")
