"""
Unit tests for API key lifecycle (issue, info, list, revoke).
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from warehouse_api.middleware.auth import ApiKeyAuthenticator
from warehouse_api.models import APIKey, KeyPurpose
from warehouse_api.principal import AuthErrorKind
from warehouse_api.services.errors import InvalidKeyRequest, KeyNotFoundError, StoreUnavailable
from warehouse_api.services.key_lifecycle import ApiKeyLifecycleManager
from warehouse_api.services.key_store import KeyStore

from tests.fixtures.factories import create_api_key


@pytest.fixture
def lifecycle(test_db):
    return ApiKeyLifecycleManager(KeyStore(test_db), environment="test")


class TestIssue:
    """Test key issuance."""

    def test_thirty_day_key(self, test_db, lifecycle, admin_user):
        """Issued key expires in 30 days and authenticates immediately."""
        before = datetime.utcnow()
        issued = lifecycle.issue("CLEAN", created_by=admin_user.id, expires_in_days=30)
        after = datetime.utcnow()

        assert before + timedelta(days=30) <= issued.metadata.expires_at <= after + timedelta(days=30)
        assert issued.metadata.is_active is True
        assert issued.metadata.usage_count == 0

        result = ApiKeyAuthenticator(KeyStore(test_db), KeyPurpose.COURIER).authenticate(issued.raw_key)
        assert result.ok
        assert result.principal.id == issued.metadata.id

    def test_key_format(self, lifecycle, admin_user):
        issued = lifecycle.issue("CLEAN", created_by=admin_user.id)
        assert issued.raw_key.startswith("kcd_test_")
        assert len(issued.raw_key) == len("kcd_test_") + 32
        assert issued.metadata.key_prefix == issued.raw_key[: len("kcd_test_") + 4]

    def test_warehouse_key_format(self, lifecycle, admin_user):
        issued = lifecycle.issue("CLEAN", created_by=admin_user.id, purpose=KeyPurpose.WAREHOUSE)
        assert issued.raw_key.startswith("wh_test_")
        assert issued.metadata.permissions == ("warehouse:read",)

    def test_defaults(self, lifecycle, admin_user):
        issued = lifecycle.issue("CLEAN", created_by=admin_user.id)
        meta = issued.metadata
        assert meta.permissions == ("kcd_integration",)
        assert meta.created_by == admin_user.id
        assert (meta.expires_at - meta.created_at) == timedelta(days=365)

    def test_courier_code_normalized(self, lifecycle, admin_user):
        issued = lifecycle.issue("  clean ", created_by=admin_user.id)
        assert issued.metadata.courier_code == "CLEAN"

    @pytest.mark.parametrize("code", ["", "   ", None])
    def test_blank_courier_code_rejected(self, test_db, lifecycle, admin_user, code):
        with pytest.raises(InvalidKeyRequest):
            lifecycle.issue(code, created_by=admin_user.id)
        assert test_db.query(APIKey).count() == 0

    @pytest.mark.parametrize("days", [0, -5, 3651])
    def test_bad_expiry_rejected(self, lifecycle, admin_user, days):
        with pytest.raises(InvalidKeyRequest):
            lifecycle.issue("CLEAN", created_by=admin_user.id, expires_in_days=days)

    def test_empty_permissions_rejected(self, lifecycle, admin_user):
        with pytest.raises(InvalidKeyRequest):
            lifecycle.issue("CLEAN", created_by=admin_user.id, permissions=["", " "])

    def test_raw_key_not_stored(self, test_db, lifecycle, admin_user):
        issued = lifecycle.issue("CLEAN", created_by=admin_user.id)
        row = test_db.query(APIKey).one()
        assert issued.raw_key not in (row.key_hash, row.key_prefix, row.name, row.description)

    def test_metadata_has_no_secret_fields(self, lifecycle, admin_user):
        issued = lifecycle.issue("CLEAN", created_by=admin_user.id)
        fields = set(vars(issued.metadata))
        assert not fields & {"key", "raw_key", "api_key", "key_hash"}
        assert issued.raw_key not in map(str, vars(issued.metadata).values())

    def test_persist_failure_surfaces_store_unavailable(self, admin_user):
        store = MagicMock()
        store.persist.side_effect = StoreUnavailable("persist")
        manager = ApiKeyLifecycleManager(store)

        with pytest.raises(StoreUnavailable):
            manager.issue("CLEAN", created_by=admin_user.id)


class TestInfoAndList:
    """Test connection info and listing."""

    def test_info_without_keys(self, lifecycle):
        info = lifecycle.get_info("CLEAN")
        assert info.has_active_key is False
        assert info.active_key_count == 0
        assert info.last_used is None
        assert info.total_usage == 0

    def test_info_counts_only_usable_keys(self, test_db, lifecycle, admin_user):
        active, _ = create_api_key(test_db, created_by=admin_user)
        revoked, _ = create_api_key(test_db, created_by=admin_user, is_active=False)
        expired, _ = create_api_key(
            test_db, created_by=admin_user, expires_at=datetime.utcnow() - timedelta(days=1)
        )
        create_api_key(test_db, created_by=admin_user, courier_code="TASOKO")

        used_at = datetime(2026, 3, 1, 9, 30)
        revoked.usage_count = 4
        revoked.last_used_at = used_at
        active.usage_count = 2
        test_db.commit()

        info = lifecycle.get_info("clean")

        assert info.courier_code == "CLEAN"
        assert info.has_active_key is True
        assert info.active_key_count == 1
        assert [k.id for k in info.active_keys] == [active.id]
        assert info.total_usage == 6
        assert info.last_used == used_at

    def test_info_is_per_purpose(self, test_db, lifecycle, admin_user):
        create_api_key(test_db, created_by=admin_user, purpose=KeyPurpose.WAREHOUSE)
        assert lifecycle.get_info("CLEAN", KeyPurpose.COURIER).has_active_key is False
        assert lifecycle.get_info("CLEAN", KeyPurpose.WAREHOUSE).has_active_key is True

    def test_list_filters(self, test_db, lifecycle, admin_user):
        create_api_key(test_db, created_by=admin_user)
        create_api_key(test_db, created_by=admin_user, is_active=False)
        create_api_key(test_db, created_by=admin_user, courier_code="TASOKO")

        assert len(lifecycle.list_keys()) == 3
        assert len(lifecycle.list_keys("clean")) == 2
        assert len(lifecycle.list_keys("CLEAN", active_only=True)) == 1
        assert len(lifecycle.list_keys(purpose=KeyPurpose.WAREHOUSE)) == 0

    def test_get_unknown(self, lifecycle):
        with pytest.raises(KeyNotFoundError):
            lifecycle.get(404)


class TestRevoke:
    """Test revocation."""

    def test_revoke_blocks_authentication(self, test_db, lifecycle, admin_user, courier_key):
        api_key, plaintext = courier_key

        meta, changed = lifecycle.revoke(api_key.id, revoked_by=admin_user.id)

        assert changed is True
        assert meta.is_active is False
        assert meta.deactivated_by == admin_user.id
        result = ApiKeyAuthenticator(KeyStore(test_db), KeyPurpose.COURIER).authenticate(plaintext)
        assert result.error is AuthErrorKind.KEY_REVOKED

    def test_revoke_is_idempotent(self, lifecycle, admin_user, warehouse_user, courier_key):
        api_key, _ = courier_key

        first, _ = lifecycle.revoke(api_key.id, revoked_by=admin_user.id)
        second, changed = lifecycle.revoke(api_key.id, revoked_by=warehouse_user.id)

        assert changed is False
        assert second.deactivated_at == first.deactivated_at
        assert second.deactivated_by == admin_user.id

    def test_revoke_keeps_row(self, test_db, lifecycle, admin_user, courier_key):
        api_key, _ = courier_key
        lifecycle.revoke(api_key.id, revoked_by=admin_user.id)
        assert test_db.query(APIKey).filter(APIKey.id == api_key.id).count() == 1

    def test_revoke_unknown(self, lifecycle, admin_user):
        with pytest.raises(KeyNotFoundError):
            lifecycle.revoke(12345, revoked_by=admin_user.id)
