### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Key Store -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Key Store

Data access for API keys on top of the request's SQLAlchemy session.
Database errors are rolled back, logged and re-raised as StoreUnavailable so
callers never see driver details.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from warehouse_api.models import APIKey, KeyPurpose, digest_key
from warehouse_api.services.errors import StoreUnavailable
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)


class KeyStore:
    """Persistence for APIKey rows"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"API key store failure during {operation}: {e}")
            raise StoreUnavailable(operation, e) from e

    def find_key_by_value(self, raw_key: str, purpose: Optional[KeyPurpose] = None) -> Optional[APIKey]:
        """
        Look up a key by its exact raw value.

        Active, revoked and expired keys are all returned so the caller can
        report which of those states rejected the request.
        """
        with self._guard("find_key_by_value"):
            query = self.db.query(APIKey).filter(APIKey.key_hash == digest_key(raw_key))
            if purpose is not None:
                query = query.filter(APIKey.purpose == KeyPurpose(purpose).value)
            return query.first()

    def get(self, key_id: int) -> Optional[APIKey]:
        with self._guard("get"):
            return self.db.query(APIKey).filter(APIKey.id == key_id).first()

    def find_by_courier(
        self,
        courier_code: Optional[str] = None,
        purpose: Optional[KeyPurpose] = None,
        active_only: bool = False,
    ) -> List[APIKey]:
        """Keys newest first, optionally narrowed by courier, purpose and status"""
        with self._guard("find_by_courier"):
            query = self.db.query(APIKey)
            if courier_code:
                query = query.filter(APIKey.courier_code == courier_code)
            if purpose is not None:
                query = query.filter(APIKey.purpose == KeyPurpose(purpose).value)
            if active_only:
                query = query.filter(APIKey.is_active == True)  # noqa: E712
            return query.order_by(APIKey.created_at.desc(), APIKey.id.desc()).all()

    def persist(self, api_key: APIKey) -> APIKey:
        with self._guard("persist"):
            self.db.add(api_key)
            self.db.commit()
            self.db.refresh(api_key)
            return api_key

    def record_use(self, api_key: APIKey, now: Optional[datetime] = None) -> None:
        """Bump usage counters after a successful authentication"""
        with self._guard("record_use"):
            api_key.record_use(now)
            self.db.commit()
