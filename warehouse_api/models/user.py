### Description ###
# Warehouse API - Clean J Shipping Backend
# - User Model -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
User Model

Staff (admin, warehouse) and customer accounts that sign in with a password
and receive a session token.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from warehouse_api.config import hash_password, verify_password
from warehouse_api.database import Base

ROLE_ADMIN = "admin"
ROLE_WAREHOUSE = "warehouse"
ROLE_CUSTOMER = "customer"

ROLES = (ROLE_ADMIN, ROLE_WAREHOUSE, ROLE_CUSTOMER)
STAFF_ROLES = (ROLE_ADMIN, ROLE_WAREHOUSE)

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class User(Base):
    """
    User model - a person who logs in.

    Examples:
        - role="admin"      - issues API keys, manages staff
        - role="warehouse"  - warehouse floor staff
        - role="customer"   - shipping customer (CLEAN-0001)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_code = Column(String(20), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    first_name = Column(String(50), nullable=False, default="")
    last_name = Column(String(50), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_CUSTOMER)
    account_status = Column(String(20), nullable=False, default=STATUS_PENDING)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, code='{self.user_code}', role='{self.role}')>"

    @property
    def is_active(self) -> bool:
        return self.account_status == STATUS_ACTIVE

    def set_password(self, password: str):
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)
