### Description ###
# Warehouse API - Clean J Shipping Backend
# - User Store -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
User Store

Data access for staff and customer accounts.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, Iterator, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from warehouse_api.models import User
from warehouse_api.models.user import ROLE_ADMIN
from warehouse_api.services.errors import StoreUnavailable
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)


class UserStore:
    """Persistence for User rows"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User store failure during {operation}: {e}")
            raise StoreUnavailable(operation, e) from e

    def find_active_subject(self, subject_id: int) -> Optional[User]:
        """
        Fetch the current record for a session subject.

        Returns the user whatever its account status, so the caller can tell a
        deleted account (None) from a deactivated one (is_active False). Role
        and status always come from here, never from the token.
        """
        with self._guard("find_active_subject"):
            return self.db.query(User).filter(User.id == subject_id).first()

    def get(self, user_id: int) -> Optional[User]:
        with self._guard("get"):
            return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str, roles: Optional[Iterable[str]] = None) -> Optional[User]:
        """Case-insensitive email lookup, optionally restricted to some roles"""
        with self._guard("find_by_email"):
            query = self.db.query(User).filter(func.lower(User.email) == email.strip().lower())
            if roles is not None:
                query = query.filter(User.role.in_(list(roles)))
            return query.first()

    def count_admins(self) -> int:
        with self._guard("count_admins"):
            return self.db.query(User).filter(User.role == ROLE_ADMIN).count()

    def save(self, user: User) -> User:
        with self._guard("save"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user

    def record_login(self, user: User, now: Optional[datetime] = None) -> None:
        with self._guard("record_login"):
            user.last_login = now or datetime.utcnow()
            self.db.commit()
