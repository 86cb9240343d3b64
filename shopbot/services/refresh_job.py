"""
Плановое обновление кэша каталога.

Фоновая задача раз в N минут принудительно перезагружает каталог по умолчанию.
Ошибки только логируются: следующая попытка будет на следующем тике.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from shopbot.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class CatalogRefreshJob:

    def __init__(self, catalog_service: CatalogService, interval_minutes: float):
        self.catalog_service = catalog_service
        self.interval_minutes = interval_minutes
        self._task: asyncio.Task | None = None
        self._sleep = asyncio.sleep

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> Optional[int]:
        """Возвращает количество товаров или None, если обновление не удалось."""
        logger.info("Плановое обновление каталога...")
        try:
            products = await self.catalog_service.load_catalog(force=True)
        except Exception as e:
            logger.error("Ошибка планового обновления каталога: %s", e)
            return None
        logger.info("Плановое обновление каталога завершено. Товаров: %d", len(products))
        return len(products)

    async def start(self) -> None:
        if self._task:
            return
        self._task = asyncio.create_task(self._run(), name="catalog_refresh_job")

    async def stop(self) -> None:
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        interval = max(1.0, self.interval_minutes * 60)
        while True:
            await self._sleep(interval)
            await self.run_once()
