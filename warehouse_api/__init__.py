### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Package -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Warehouse API Package

FastAPI backend for Clean J Shipping: staff/customer sessions, courier and
warehouse integration API keys, and tiered rate limiting.
"""

__version__ = "1.0.0"
