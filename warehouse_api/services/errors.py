### Description ###
# Warehouse API - Clean J Shipping Backend
# - Service Errors -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Service Errors

Exceptions raised by the stores and the key lifecycle manager. Route handlers
let StoreUnavailable propagate to the application handler, which answers with a
generic 500 and keeps the underlying database error in the log only.
"""


class StoreUnavailable(Exception):
    """The credential or user store could not be reached"""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store unavailable during {operation}")


class KeyNotFoundError(LookupError):
    """No API key with the given id"""

    def __init__(self, key_id: int):
        self.key_id = key_id
        super().__init__(f"API key {key_id} not found")


class InvalidKeyRequest(ValueError):
    """Issuance parameters were rejected before anything was persisted"""
