### Description ###
# Warehouse API - Clean J Shipping Backend
# - Config Schema Validation -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Config Schema Validation

Pydantic models for validating config.yaml structure.
Provides clear error messages when configuration is invalid.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_to_file: bool = Field(default=True, description="Enable file logging")
    log_to_console: bool = Field(default=True, description="Enable console logging")


class ApplicationConfig(BaseModel):
    """Application settings"""

    timezone: str = Field(
        default="UTC",
        description="IANA timezone name (e.g., America/Jamaica)",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone"""
        try:
            from zoneinfo import ZoneInfo

            ZoneInfo(v)
        except Exception:
            raise ValueError(
                f"Invalid timezone '{v}'. Use IANA format like 'America/Jamaica' or 'UTC'"
            )
        return v


class RateLimitTierConfig(BaseModel):
    """Quota/window override for a single rate limit tier"""

    window_seconds: Optional[int] = Field(default=None, ge=1, le=86400)
    limit: Optional[int] = Field(default=None, ge=1)


class AdminConfig(BaseModel):
    """Bootstrap admin account created on first start"""

    email: str = Field(default="admin@localhost", min_length=3, description="Admin email")
    user_code: str = Field(default="ADMIN-001", description="Admin user code")
    password_hash: Optional[str] = Field(
        default=None,
        description="bcrypt password hash (leave empty to generate a one-time password)",
    )


class AppConfig(BaseModel):
    """
    Root configuration model for config.yaml

    Validates the entire configuration structure on load.
    """

    application: ApplicationConfig = Field(default_factory=ApplicationConfig)
    rate_limits: Dict[str, RateLimitTierConfig] = Field(default_factory=dict)
    admin: AdminConfig = Field(default_factory=AdminConfig)

    model_config = {"populate_by_name": True}


def validate_config(config_dict: dict) -> AppConfig:
    """
    Validate a config dictionary against the schema.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        pydantic.ValidationError: If config is invalid
    """
    return AppConfig.model_validate(config_dict or {})


def get_validation_errors(config_dict: dict) -> List[str]:
    """
    Get a list of validation errors for a config dictionary.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        List of error messages (empty if valid)
    """
    try:
        validate_config(config_dict)
        return []
    except Exception as e:
        from pydantic import ValidationError

        if isinstance(e, ValidationError):
            return [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
        return [str(e)]
