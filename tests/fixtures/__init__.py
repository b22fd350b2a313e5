"""
Test fixtures and factories for Warehouse API tests.
"""

from tests.fixtures.factories import FakeClock, create_api_key, create_user

__all__ = [
    "FakeClock",
    "create_api_key",
    "create_user",
]
