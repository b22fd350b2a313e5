"""
Integration tests for warehouse router.

Tests /api/warehouse/context with warehouse keys and staff sessions.
"""

from unittest.mock import patch

from warehouse_api.services.errors import StoreUnavailable
from warehouse_api.services.key_store import KeyStore

CONTEXT_PATH = "/api/warehouse/context"


class TestWarehouseContext:
    """Test GET /api/warehouse/context endpoint."""

    def test_warehouse_key(self, client, warehouse_key):
        api_key, plaintext = warehouse_key

        response = client.get(CONTEXT_PATH, headers={"X-API-Key": plaintext})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["kind"] == "warehouse-key"
        assert data["id"] == api_key.id
        assert data["permissions"] == ["warehouse:read"]
        assert data["keyPrefix"] == api_key.key_prefix

    def test_staff_session(self, client, warehouse_headers, warehouse_user):
        response = client.get(CONTEXT_PATH, headers=warehouse_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["kind"] == "staff"
        assert data["role"] == "warehouse"
        assert data["userCode"] == warehouse_user.user_code

    def test_customer_session_forbidden(self, client, customer_headers):
        response = client.get(CONTEXT_PATH, headers=customer_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "insufficient_role"

    def test_courier_key_not_accepted(self, client, courier_key):
        _, plaintext = courier_key

        response = client.get(CONTEXT_PATH, headers={"X-API-Key": plaintext})

        assert response.status_code == 401
        assert response.json()["code"] == "key_not_found"

    def test_key_header_wins_over_session(self, client, warehouse_key, customer_headers):
        _, plaintext = warehouse_key

        response = client.get(CONTEXT_PATH, headers={"X-API-Key": plaintext, **customer_headers})

        assert response.status_code == 200
        assert response.json()["data"]["kind"] == "warehouse-key"

    def test_missing_credential(self, client):
        response = client.get(CONTEXT_PATH)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "ApiKey, Bearer"


class TestStoreFailure:
    """Credential store faults are server errors, not auth failures."""

    def test_store_unavailable_is_500(self, client):
        with patch.object(KeyStore, "find_key_by_value", side_effect=StoreUnavailable("lookup")):
            response = client.get(CONTEXT_PATH, headers={"X-API-Key": "wh_live_whatever"})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "store_unavailable"
        assert body["error"] == "Internal server error"
        assert "WWW-Authenticate" not in response.headers
