"""
Unit tests for APIKey model.

Tests key generation, digest lookup, expiry and revocation.
"""

from datetime import datetime, timedelta

from warehouse_api.models.api_key import (
    APIKey,
    KeyPurpose,
    digest_key,
    generate_api_key,
    key_prefix_for,
)


class TestKeyGeneration:
    """Test API key generation."""

    def test_generate_key_has_prefix(self):
        """Generated key should start with the requested prefix."""
        key = generate_api_key(prefix="kcd_live_")
        assert key.startswith("kcd_live_")

    def test_generate_key_default_length(self):
        """Default key is prefix + 32 random chars."""
        key = generate_api_key()
        assert len(key) == len("kcd_live_") + 32

    def test_generate_key_unique(self):
        """Each generated key should be unique."""
        keys = [generate_api_key() for _ in range(100)]
        assert len(set(keys)) == 100

    def test_generate_key_alphanumeric(self):
        """Random part is alphanumeric."""
        key = generate_api_key(prefix="wh_test_")
        assert key[len("wh_test_"):].isalnum()

    def test_prefix_per_purpose(self):
        assert key_prefix_for(KeyPurpose.COURIER) == "kcd_live_"
        assert key_prefix_for(KeyPurpose.WAREHOUSE, "test") == "wh_test_"


class TestKeyDigest:
    """Test key digesting."""

    def test_digest_is_sha256_hex(self):
        digest = digest_key("kcd_live_abc")
        assert len(digest) == 64
        assert digest != "kcd_live_abc"

    def test_digest_is_deterministic(self):
        assert digest_key("same") == digest_key("same")
        assert digest_key("same") != digest_key("other")


class TestAPIKeyModel:
    """Test APIKey model methods."""

    def _key(self, **overrides):
        defaults = {
            "courier_code": "CLEAN",
            "created_by": 1,
            "expires_at": datetime.utcnow() + timedelta(days=30),
        }
        defaults.update(overrides)
        return APIKey.create_key(**defaults)

    def test_create_key_stores_digest_not_plaintext(self):
        api_key, plaintext = self._key()
        assert api_key.key_hash == digest_key(plaintext)
        assert plaintext not in (api_key.key_hash, api_key.key_prefix)

    def test_create_key_prefix_shows_four_random_chars(self):
        api_key, plaintext = self._key()
        assert api_key.key_prefix == plaintext[: len("kcd_live_") + 4]

    def test_create_key_default_permissions(self):
        courier, _ = self._key()
        warehouse, _ = self._key(purpose=KeyPurpose.WAREHOUSE)
        assert courier.permissions == ["kcd_integration"]
        assert warehouse.permissions == ["warehouse:read"]
        assert warehouse.purpose == "warehouse"

    def test_create_key_default_name(self):
        api_key, _ = self._key()
        assert api_key.name == "CLEAN Courier Integration"

    def test_expiry_boundary(self):
        """A key is expired from the instant now reaches expires_at."""
        expires = datetime(2026, 1, 1, 12, 0, 0)
        api_key, _ = self._key(expires_at=expires)
        assert api_key.is_expired(expires - timedelta(microseconds=1)) is False
        assert api_key.is_expired(expires) is True

    def test_record_use(self):
        api_key, _ = self._key()
        api_key.usage_count = 0
        now = datetime(2026, 5, 1)

        api_key.record_use(now)
        api_key.record_use(now)

        assert api_key.usage_count == 2
        assert api_key.last_used_at == now

    def test_deactivate_is_idempotent(self):
        api_key, _ = self._key()
        first = datetime(2026, 5, 1)

        assert api_key.deactivate(7, first) is True
        assert api_key.deactivate(8, first + timedelta(days=1)) is False

        assert api_key.is_active is False
        assert api_key.deactivated_at == first
        assert api_key.deactivated_by == 7
