"""
Сервис каталога: загрузка страниц магазина, разбор товаров и кэширование.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from shopbot.api.store_client import StoreClient
from shopbot.core.models import Category, Product
from shopbot.parsers.extractor import build_categories, extract_category_links, extract_product_elements
from shopbot.parsers.normalizer import ProductNormalizer
from shopbot.services.catalog_cache import CatalogCache

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_PATH = "catalog"


def filter_products(products: Iterable[Product], query: str) -> list[Product]:
    """Поиск по вхождению подстроки в название, без учёта регистра."""
    needle = query.strip().casefold()
    if not needle:
        return []
    return [product for product in products if needle in product.title.casefold()]


class CatalogService:
    """
    Связывает HTTP клиент, разбор HTML и кэш.

    Кэш используется только для каталога по умолчанию (без категории и без
    принудительного обновления). Ошибки загрузки пробрасываются вызывающему:
    устаревший кэш не подставляется вместо упавшего запроса.
    """

    def __init__(self, client: StoreClient, cache: CatalogCache):
        self.client = client
        self.cache = cache
        self.normalizer = ProductNormalizer(client.store_url)

    async def fetch_catalog(self, category: Optional[str] = None) -> list[Product]:
        url = self.client.resolve(category or DEFAULT_CATEGORY_PATH)
        logger.info("Запрос каталога: %s", url)
        try:
            html = await self.client.fetch(url)
        except Exception as e:
            logger.error("Ошибка получения каталога: %s", e)
            raise

        elements = extract_product_elements(html, url)
        products = [self.normalizer.normalize(element) for element in elements]
        products = [product for product in products if product.title]
        logger.info("Получено товаров: %d", len(products))
        return products

    async def fetch_categories(self) -> list[Category]:
        url = self.client.resolve("/")
        logger.info("Запрос категорий: %s", url)
        try:
            html = await self.client.fetch(url)
        except Exception as e:
            logger.error("Ошибка получения категорий: %s", e)
            raise

        categories = build_categories(extract_category_links(html), self.client.store_url)
        logger.info("Получено категорий: %d", len(categories))
        return categories

    async def load_catalog(self, force: bool = False, category: Optional[str] = None) -> list[Product]:
        """
        Возвращает товары каталога.

        Args:
            force: игнорировать кэш и загрузить каталог заново
            category: ссылка или путь категории; такие запросы не кэшируются
        """
        if not force and not category:
            snapshot = self.cache.read()
            if snapshot and snapshot.data:
                return list(snapshot.data)

        products = await self.fetch_catalog(category)

        if not category:
            self.cache.write(products)

        return products

    async def search(self, query: str) -> list[Product]:
        products = await self.load_catalog()
        return filter_products(products, query)


def create_catalog_service(settings) -> CatalogService:
    """Собирает сервис каталога из настроек приложения."""
    client = StoreClient(
        settings.STORE_URL,
        timeout=settings.FETCH_TIMEOUT,
        disable_ssl_verify=settings.DISABLE_SSL_VERIFY,
    )
    cache = CatalogCache(settings.CACHE_FILE, settings.CACHE_TTL_MINUTES)
    return CatalogService(client, cache)
