"""
Скрипт для принудительного обновления кэша каталога без запуска бота.
Удобно запускать из cron или вручную после изменений на сайте.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Добавляем корень проекта в путь
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from shopbot.core.config import load_settings
from shopbot.core.exceptions import ConfigError
from shopbot.core.logging_config import setup_logging
from shopbot.services.catalog_service import create_catalog_service

logger = logging.getLogger(__name__)


async def refresh_cache() -> int:
    """Возвращает код выхода: 0 — кэш обновлён, 1 — ошибка."""
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(str(e))
        return 1

    catalog_service = create_catalog_service(settings)
    try:
        products = await catalog_service.load_catalog(force=True)
    except Exception as e:
        logger.error("Не удалось обновить кэш: %s", e)
        return 1

    logger.info("Кэш успешно обновлён. Получено товаров: %d", len(products))
    return 0


if __name__ == "__main__":
    """
    Использование:
        python scripts/refresh_cache.py
    """
    setup_logging()
    sys.exit(asyncio.run(refresh_cache()))
