### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Routers Package -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
API Routers Package

Contains endpoint routers for different resources:
- auth: Staff/customer login, current principal, password change
- keys: API key management (admin)
- staff: Account administration (admin)
- warehouse: Warehouse integration endpoints
- courier: Courier portal endpoints
"""

from .auth import router as auth_router
from .courier import router as courier_router
from .keys import router as keys_router
from .staff import router as staff_router
from .warehouse import router as warehouse_router

__all__ = ["auth_router", "courier_router", "keys_router", "staff_router", "warehouse_router"]
