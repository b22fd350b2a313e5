### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Configuration -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Configuration Management

Uses Pydantic Settings for configuration with environment variable support.
Loads settings from .env file and data/config.yaml.

Config file location (in order of precedence):
1. WAREHOUSE_CONFIG_PATH environment variable
2. data/config.yaml (default)
"""

import os
from functools import lru_cache
from pathlib import Path

import bcrypt
import yaml
from pydantic_settings import BaseSettings

from warehouse_api.config_schema import AppConfig, validate_config


def get_project_root() -> Path:
    """Get the project root directory"""
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """
    Get the path to config.yaml.

    Priority:
    1. WAREHOUSE_CONFIG_PATH environment variable (if set)
    2. data/config.yaml (default location)
    """
    env_path = os.environ.get("WAREHOUSE_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    return get_project_root() / "data" / "config.yaml"


def get_version() -> str:
    """Read version from VERSION file"""
    version_file = get_project_root() / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


class APISettings(BaseSettings):
    """API Server Settings"""

    # API Configuration
    api_title: str = "Clean J Shipping Warehouse API"
    api_version: str = get_version()
    api_prefix: str = "/api"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 5000

    # Database Configuration (app DB - SQLite by default)
    database_url: str | None = None

    # Session tokens
    jwt_secret: str = "change-this-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_hours: int = 24 * 7

    # Credential headers
    api_key_header: str = "X-API-Key"
    courier_key_header: str = "X-KCD-API-Key"

    # API key issuance
    api_key_environment: str = "live"  # embedded in the key prefix, e.g. kcd_live_
    api_key_length: int = 32
    default_key_expiry_days: int = 365

    # Rate Limiting
    # "memory://" keeps counters in-process; anything else (e.g. redis://host:6379)
    # is handed to the limits storage backend and shared between instances
    rate_limit_storage_uri: str = "memory://"

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    # Timezone (loaded from config.yaml)
    timezone: str = "UTC"

    class Config:
        env_prefix = "WAREHOUSE_"
        env_file = ".env"
        extra = "ignore"


DEFAULT_CONFIG = """# Warehouse API Configuration
# Main configuration file for access control and application settings

# Application Settings
application:
  # Timezone for logs and timestamps (IANA timezone name)
  timezone: "America/Jamaica"

  logging:
    level: "INFO"             # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_to_file: true         # Enable file logging
    log_to_console: true      # Enable console logging

# Rate Limit Tiers
# Override the window (seconds) or limit (requests per window) of any tier.
# Tiers: general, auth, api-key, upload, password-reset, strict
# Counters are per instance unless WAREHOUSE_RATE_LIMIT_STORAGE_URI points
# at a shared store (e.g. redis://localhost:6379).
rate_limits:
  general:
    window_seconds: 900
    limit: 100
  auth:
    window_seconds: 900
    limit: 10
  api-key:
    window_seconds: 60
    limit: 1000
  upload:
    window_seconds: 3600
    limit: 50
  password-reset:
    window_seconds: 3600
    limit: 3

# Bootstrap Admin Account
# Created on startup when no admin account exists.
admin:
  email: "admin@localhost"
  user_code: "ADMIN-001"
  # password_hash: "$2b$12$..."  # Generate with: python -c "import bcrypt; print(bcrypt.hashpw(b'YOUR_PASSWORD', bcrypt.gensalt()).decode())"
  # Leave password_hash commented out to print a one-time generated password
"""


def load_yaml_config(config_path: str | None = None) -> dict:
    """Load configuration from YAML file, creating default if missing"""
    config_file = get_config_path() if config_path is None else Path(config_path)

    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)
        print(f"Created default configuration file: {config_file}")

    with open(config_file, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_app_config() -> AppConfig:
    """Get the validated config.yaml contents"""
    return validate_config(load_yaml_config())


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings instance"""
    app_config = get_app_config()
    return APISettings(timezone=app_config.application.timezone)


def hash_password(password: str) -> str:
    """Hash a password for storage"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str | None) -> bool:
    """Verify a plaintext password against a stored bcrypt hash"""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode(), password_hash.encode())
