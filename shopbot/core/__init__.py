"""
Core Package
============
Configuration, logging, exceptions and data models.
"""

from .config import Settings, get_settings, load_settings
from .exceptions import ConfigError, ParseError, ShopBotError, TransportError
from .models import CatalogSnapshot, Category, Product

__all__ = [
    'Settings', 'get_settings', 'load_settings',
    'ShopBotError', 'TransportError', 'ParseError', 'ConfigError',
    'Product', 'Category', 'CatalogSnapshot',
]
