"""
Unit tests for credential resolution.

Each route family picks exactly one credential from the request headers,
following its own precedence table.
"""

import pytest

from warehouse_api.middleware.credentials import (
    ACCOUNT,
    COURIER,
    CUSTOMER,
    STAFF,
    WAREHOUSE,
    CourierKeyCredential,
    MissingCredential,
    SessionCredential,
    WarehouseKeyCredential,
    resolve_credential,
)


class TestSessionFamilies:
    """staff / customer / account accept only a bearer session token."""

    @pytest.mark.parametrize("family", [STAFF, CUSTOMER, ACCOUNT])
    def test_bearer_becomes_session(self, family):
        result = resolve_credential({"Authorization": "Bearer abc.def.ghi"}, family)
        assert result == SessionCredential(value="abc.def.ghi", header="Authorization")

    @pytest.mark.parametrize("family", [STAFF, CUSTOMER, ACCOUNT])
    def test_api_key_header_ignored(self, family):
        result = resolve_credential({"X-API-Key": "wh_live_x", "X-KCD-API-Key": "kcd_live_x"}, family)
        assert isinstance(result, MissingCredential)

    def test_scheme_is_case_insensitive(self):
        result = resolve_credential({"authorization": "bearer tok"}, STAFF)
        assert result == SessionCredential(value="tok", header="Authorization")

    def test_other_scheme_skipped(self):
        result = resolve_credential({"Authorization": "Basic dXNlcjpwYXNz"}, STAFF)
        assert isinstance(result, MissingCredential)

    @pytest.mark.parametrize("value", ["", "Bearer", "Bearer ", "   "])
    def test_empty_bearer_skipped(self, value):
        result = resolve_credential({"Authorization": value}, STAFF)
        assert isinstance(result, MissingCredential)


class TestWarehouseFamily:
    """X-API-Key first, then bearer session token."""

    def test_api_key_header(self):
        result = resolve_credential({"X-API-Key": "wh_live_abc"}, WAREHOUSE)
        assert result == WarehouseKeyCredential(value="wh_live_abc", header="X-API-Key")

    def test_api_key_wins_over_bearer(self):
        headers = {"X-API-Key": "wh_live_abc", "Authorization": "Bearer session.token"}
        result = resolve_credential(headers, WAREHOUSE)
        assert isinstance(result, WarehouseKeyCredential)

    def test_blank_api_key_falls_back_to_bearer(self):
        headers = {"X-API-Key": "  ", "Authorization": "Bearer session.token"}
        result = resolve_credential(headers, WAREHOUSE)
        assert result == SessionCredential(value="session.token", header="Authorization")

    def test_courier_header_not_accepted(self):
        result = resolve_credential({"X-KCD-API-Key": "kcd_live_abc"}, WAREHOUSE)
        assert isinstance(result, MissingCredential)


class TestCourierFamily:
    """X-KCD-API-Key first, then bearer treated as a raw key."""

    def test_courier_header(self):
        result = resolve_credential({"X-KCD-API-Key": "kcd_live_abc"}, COURIER)
        assert result == CourierKeyCredential(value="kcd_live_abc", header="X-KCD-API-Key")

    def test_bearer_is_raw_key_not_session(self):
        result = resolve_credential({"Authorization": "Bearer kcd_live_abc"}, COURIER)
        assert result == CourierKeyCredential(value="kcd_live_abc", header="Authorization")

    def test_courier_header_wins_over_bearer(self):
        headers = {"Authorization": "Bearer other", "X-KCD-API-Key": "kcd_live_abc"}
        result = resolve_credential(headers, COURIER)
        assert result.value == "kcd_live_abc"

    def test_warehouse_header_not_accepted(self):
        result = resolve_credential({"X-API-Key": "wh_live_abc"}, COURIER)
        assert isinstance(result, MissingCredential)


class TestMissingCredential:
    """Rejection when nothing usable was presented."""

    def test_no_headers(self):
        result = resolve_credential({}, COURIER)
        assert result == MissingCredential(
            family="courier",
            expected=("X-KCD-API-Key", "Authorization: Bearer <token>"),
        )

    def test_detail_lists_expected_headers(self):
        result = resolve_credential({}, WAREHOUSE)
        assert "X-API-Key" in result.detail
        assert "Authorization: Bearer" in result.detail

    def test_accepted_kinds(self):
        assert WAREHOUSE.accepted == frozenset({WarehouseKeyCredential, SessionCredential})
        assert COURIER.accepted == frozenset({CourierKeyCredential})
