"""Shared fixtures for catalog tests."""

from datetime import datetime, timedelta, timezone
from urllib.parse import urljoin

import pytest

from shopbot.core.exceptions import TransportError
from shopbot.services.catalog_cache import CatalogCache
from shopbot.services.catalog_service import CatalogService

STORE_URL = "https://shop.example.com/"

CATALOG_HTML = """
<html><body>
  <div class="product">
    <div class="product-name"><a href="/p/red-mug">Red Mug</a></div>
    <span class="price">1 234,50 ₽</span>
    <span class="status">В наличии</span>
    <img src="/img/red-mug.jpg">
  </div>
  <div class="product-item">
    <a href="https://shop.example.com/p/blue-cup"><span class="product-title">Blue Cup</span></a>
    <span class="product-price">990 руб.</span>
  </div>
  <div class="product-thumb">
    <a href="/p/mystery">Подробнее</a>
  </div>
</body></html>
"""

HOME_HTML = """
<html><body>
  <nav>
    <a href="/catalog/mugs">Кружки</a>
    <a href="/catalog/cups">Чашки</a>
    <a href="/about">О магазине</a>
    <a href="/collection/new">Новинки</a>
    <a href="/catalog/old-mugs">Кружки</a>
    <a href="/catalog/x">ab</a>
  </nav>
</body></html>
"""


class FakeStoreClient:
    """Store client double: serves canned HTML by URL and counts requests."""

    def __init__(self, pages=None, default=CATALOG_HTML, error=None):
        self.store_url = STORE_URL
        self.pages = pages or {}
        self.default = default
        self.error = error
        self.requests = []

    def resolve(self, path):
        return urljoin(self.store_url, path)

    async def fetch(self, url):
        self.requests.append(url)
        if self.error is not None:
            raise self.error
        return self.pages.get(url, self.default)


class Clock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, minutes):
        self.now = self.now + timedelta(minutes=minutes)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "cache" / "catalog.json"


@pytest.fixture
def cache(cache_file, clock):
    return CatalogCache(cache_file, ttl_minutes=30, now=clock)


@pytest.fixture
def store_client():
    return FakeStoreClient()


@pytest.fixture
def catalog_service(store_client, cache):
    return CatalogService(store_client, cache)


@pytest.fixture
def transport_error():
    return TransportError(STORE_URL + "catalog", "connection refused")
