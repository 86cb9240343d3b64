"""Tests for the cache-first catalog loading state machine."""

import json

import pytest
from conftest import HOME_HTML, STORE_URL, FakeStoreClient

from shopbot.core.exceptions import TransportError
from shopbot.core.models import Product
from shopbot.services.catalog_cache import CatalogCache
from shopbot.services.catalog_service import CatalogService, filter_products

EMPTY_HTML = "<html><body><p>Скоро здесь будут товары</p></body></html>"


@pytest.mark.asyncio
async def test_fresh_process_fetches_once_then_serves_cache(catalog_service, store_client, cache_file):
    first = await catalog_service.load_catalog()
    second = await catalog_service.load_catalog()

    assert store_client.requests == [STORE_URL + "catalog"]
    assert len(first) == 3
    assert second == first
    assert cache_file.exists()


@pytest.mark.asyncio
async def test_force_always_fetches_and_persists(catalog_service, store_client, cache):
    await catalog_service.load_catalog()
    store_client.default = EMPTY_HTML

    products = await catalog_service.load_catalog(force=True)

    assert len(store_client.requests) == 2
    assert products == []
    assert cache.load().snapshot.data == ()


@pytest.mark.asyncio
async def test_empty_cached_catalog_triggers_fetch(catalog_service, store_client, cache):
    cache.write([])

    products = await catalog_service.load_catalog()

    assert len(store_client.requests) == 1
    assert len(products) == 3


@pytest.mark.asyncio
async def test_expired_cache_triggers_fetch(catalog_service, store_client, clock):
    await catalog_service.load_catalog()
    clock.advance(30)

    await catalog_service.load_catalog()

    assert len(store_client.requests) == 2


@pytest.mark.asyncio
async def test_category_fetch_never_touches_snapshot(catalog_service, store_client, cache_file):
    await catalog_service.load_catalog()
    before = cache_file.read_text(encoding="utf-8")
    store_client.pages[STORE_URL + "catalog/mugs"] = EMPTY_HTML

    products = await catalog_service.load_catalog(category="catalog/mugs")

    assert products == []
    assert store_client.requests[-1] == STORE_URL + "catalog/mugs"
    assert cache_file.read_text(encoding="utf-8") == before


@pytest.mark.asyncio
async def test_category_fetch_without_prior_cache_does_not_create_file(catalog_service, cache_file):
    await catalog_service.load_catalog(category="https://shop.example.com/catalog/cups")

    assert not cache_file.exists()


@pytest.mark.asyncio
async def test_absolute_category_link_is_used_as_is(catalog_service, store_client):
    await catalog_service.load_catalog(category="https://shop.example.com/collection/new")

    assert store_client.requests == ["https://shop.example.com/collection/new"]


@pytest.mark.asyncio
async def test_fetch_error_propagates_without_stale_fallback(cache, clock, transport_error):
    cache.write([Product(title="Старый", price=1.0, availability="", link=STORE_URL)])
    clock.advance(45)
    client = FakeStoreClient(error=transport_error)
    service = CatalogService(client, cache)

    with pytest.raises(TransportError):
        await service.load_catalog()

    assert cache.load().snapshot.data[0].title == "Старый"


@pytest.mark.asyncio
async def test_forced_fetch_error_keeps_previous_snapshot(catalog_service, store_client, cache_file, transport_error):
    await catalog_service.load_catalog()
    before = json.loads(cache_file.read_text(encoding="utf-8"))
    store_client.error = transport_error

    with pytest.raises(TransportError):
        await catalog_service.load_catalog(force=True)

    assert json.loads(cache_file.read_text(encoding="utf-8")) == before


@pytest.mark.asyncio
async def test_unwritable_cache_still_returns_products(tmp_path, clock):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    service = CatalogService(FakeStoreClient(), CatalogCache(blocker / "c.json", 30, now=clock))

    products = await service.load_catalog()

    assert len(products) == 3


@pytest.mark.asyncio
async def test_fetch_categories(store_client):
    store_client.pages[STORE_URL] = HOME_HTML
    service = CatalogService(store_client, cache=None)

    categories = await service.fetch_categories()

    assert store_client.requests == [STORE_URL]
    assert [(c.name, c.link) for c in categories] == [
        ("Кружки", "https://shop.example.com/catalog/old-mugs"),
        ("Чашки", "https://shop.example.com/catalog/cups"),
        ("Новинки", "https://shop.example.com/collection/new"),
    ]


@pytest.mark.asyncio
async def test_fetch_categories_propagates_transport_error(transport_error):
    service = CatalogService(FakeStoreClient(error=transport_error), cache=None)

    with pytest.raises(TransportError):
        await service.fetch_categories()


@pytest.mark.asyncio
async def test_search_uses_cached_catalog(catalog_service, store_client):
    await catalog_service.load_catalog()

    results = await catalog_service.search("  MUG ")

    assert [p.title for p in results] == ["Red Mug"]
    assert len(store_client.requests) == 1


def test_filter_products_blank_query():
    products = [Product(title="Кружка", price=None, availability="", link=STORE_URL)]

    assert filter_products(products, "   ") == []
    assert filter_products(products, "кру") == products



@pytest.mark.asyncio
async def test_malformed_product_link_does_not_break_catalog(cache):
    html = """
    <div class="product"><a href="http://[oops/p">Broken</a></div>
    <div class="product"><a href="/p/good">Good</a></div>
    """
    service = CatalogService(FakeStoreClient(default=html), cache)

    products = await service.load_catalog()

    assert [p.link for p in products] == [STORE_URL, "https://shop.example.com/p/good"]


@pytest.mark.asyncio
async def test_fetch_categories_skips_malformed_links():
    html = """
    <a href="http://[oops/catalog/x">Broken</a>
    <a href="/catalog/mugs">Кружки</a>
    """
    service = CatalogService(FakeStoreClient(pages={STORE_URL: html}), cache=None)

    categories = await service.fetch_categories()

    assert [c.name for c in categories] == ["Кружки"]
