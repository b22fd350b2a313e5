"""
Unit tests for config.yaml loading and validation.
"""

import pytest
from pydantic import ValidationError

from warehouse_api.config import DEFAULT_CONFIG, hash_password, load_yaml_config, verify_password
from warehouse_api.config_schema import get_validation_errors, validate_config


class TestConfigSchema:
    """Test config.yaml validation."""

    def test_empty_config_uses_defaults(self):
        config = validate_config({})
        assert config.application.timezone == "UTC"
        assert config.rate_limits == {}
        assert config.admin.email == "admin@localhost"

    def test_none_config(self):
        assert validate_config(None).admin.user_code == "ADMIN-001"

    def test_rate_limit_overrides(self):
        config = validate_config({"rate_limits": {"auth": {"limit": 20}}})
        assert config.rate_limits["auth"].limit == 20
        assert config.rate_limits["auth"].window_seconds is None

    @pytest.mark.parametrize("tier", [{"limit": 0}, {"window_seconds": 0}, {"window_seconds": 90000}])
    def test_rate_limit_bounds(self, tier):
        with pytest.raises(ValidationError):
            validate_config({"rate_limits": {"auth": tier}})

    def test_invalid_timezone(self):
        errors = get_validation_errors({"application": {"timezone": "Mars/Olympus"}})
        assert len(errors) == 1
        assert errors[0].startswith("application.timezone")

    def test_valid_config_has_no_errors(self):
        assert get_validation_errors({"application": {"timezone": "America/Jamaica"}}) == []


class TestYamlLoading:
    """Test config file creation and loading."""

    def test_missing_file_created_from_default(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"

        loaded = load_yaml_config(str(path))

        assert path.read_text(encoding="utf-8") == DEFAULT_CONFIG
        assert loaded["rate_limits"]["auth"]["limit"] == 10
        validate_config(loaded)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml_config(str(path)) == {}


class TestPasswords:
    """Test bcrypt helpers."""

    def test_hash_and_verify(self):
        hashed = hash_password("correct horse")
        assert hashed.startswith("$2")
        assert verify_password("correct horse", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_missing_hash(self):
        assert verify_password("anything", None) is False
