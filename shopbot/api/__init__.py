"""
API Package
===========
HTTP клиент витрины магазина.
"""

from .store_client import StoreClient

__all__ = ['StoreClient']
