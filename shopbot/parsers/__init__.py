"""
Parsers Package
===============
Извлечение товаров и категорий из HTML витрины.
"""

from .document import HtmlNode
from .extractor import build_categories, extract_category_links, extract_product_elements
from .normalizer import ProductNormalizer

__all__ = [
    'HtmlNode',
    'extract_product_elements',
    'extract_category_links',
    'build_categories',
    'ProductNormalizer',
]
