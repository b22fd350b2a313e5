### Description ###
# Warehouse API - Clean J Shipping Backend
# - Access Log Model -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Access Log Model

Records API requests for audit and analytics:
- Who: masked credential that was presented
- What: HTTP method, path, response status
- When: Timestamp
- How long: Response time
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Index, Integer, String

from warehouse_api.database import Base


class AccessLog(Base):
    """
    Access log model - records API request/response details.

    Used for:
    - Security auditing (repeated 401s from one IP, revoked keys still in use)
    - Courier integration usage analytics
    - Debugging/troubleshooting
    """

    __tablename__ = "access_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Request identification
    request_id = Column(String(36), nullable=False)

    # Masked credential, e.g. "kcd_live..." or "bearer:eyJhbGci..."
    credential_hint = Column(String(32), nullable=True)

    # Request details
    method = Column(String(10), nullable=False)
    path = Column(String(500), nullable=False)
    query_string = Column(String(1000), nullable=True)
    client_ip = Column(String(45), nullable=True)  # IPv4 or IPv6
    user_agent = Column(String(500), nullable=True)

    # Response details
    status_code = Column(Integer, nullable=False)
    response_time_ms = Column(Float, nullable=True)

    # Timestamp
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        Index("ix_access_logs_path_created", "path", "created_at"),
        Index("ix_access_logs_status_created", "status_code", "created_at"),
    )

    def __repr__(self):
        return f"<AccessLog(id={self.id}, method='{self.method}', path='{self.path}', status={self.status_code})>"

    @classmethod
    def create_from_request(
        cls,
        request_id: str,
        method: str,
        path: str,
        status_code: int,
        response_time_ms: float,
        credential_hint: str | None = None,
        query_string: str | None = None,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> "AccessLog":
        """
        Create an access log entry from request details.

        Returns:
            AccessLog instance (not yet committed to database)
        """
        return cls(
            request_id=request_id,
            method=method,
            path=path,
            status_code=status_code,
            response_time_ms=response_time_ms,
            credential_hint=credential_hint,
            query_string=query_string,
            client_ip=client_ip,
            user_agent=user_agent,
        )
