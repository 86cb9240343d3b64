"""
Файловый кэш каталога.

Хранит последний успешный снимок каталога в одном JSON файле:
    {"updatedAt": "<ISO-8601>", "data": [<товар>, ...]}

Кэш работает в режиме fail-open: любые ошибки чтения превращаются
в «кэша нет», ошибки записи логируются и не пробрасываются вызывающему.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional

from shopbot.core.exceptions import ParseError
from shopbot.core.models import CatalogSnapshot, Product

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheStatus(str, Enum):
    OK = "ok"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class CacheReadResult:
    status: CacheStatus
    snapshot: Optional[CatalogSnapshot] = None
    reason: str = ""


class CatalogCache:
    """Кэш каталога с TTL в минутах."""

    def __init__(
        self,
        cache_file: str | Path,
        ttl_minutes: float,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.cache_file = Path(cache_file)
        self.ttl_minutes = ttl_minutes
        self._now = now

    def load(self) -> CacheReadResult:
        """Читает файл без проверки срока годности."""
        try:
            raw = self.cache_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return CacheReadResult(CacheStatus.ABSENT)
        except OSError as e:
            return CacheReadResult(CacheStatus.ERROR, reason=str(e))
        except UnicodeDecodeError as e:
            return CacheReadResult(CacheStatus.ERROR, reason=f"файл не в UTF-8: {e}")

        try:
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ParseError(f"некорректный JSON: {e}") from e
            snapshot = CatalogSnapshot.from_dict(payload)
        except ParseError as e:
            return CacheReadResult(CacheStatus.ERROR, reason=str(e))

        return CacheReadResult(CacheStatus.OK, snapshot=snapshot)

    def read(self) -> Optional[CatalogSnapshot]:
        """
        Возвращает актуальный снимок или None.
        None означает и «кэша нет», и «кэш устарел», и «кэш не читается».
        """
        result = self.load()
        if result.status is CacheStatus.ERROR:
            logger.warning("Не удалось прочитать кэш каталога: %s", result.reason)
            return None
        if result.status is CacheStatus.ABSENT:
            return None
        if self.is_expired(result.snapshot.updated_at):
            logger.info("Кэш просрочен, требуется обновление.")
            return None
        return result.snapshot

    def write(self, products: Iterable[Product]) -> bool:
        """Полностью заменяет снимок. Ошибки записи не пробрасываются."""
        snapshot = CatalogSnapshot(updated_at=self._now(), data=tuple(products))
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2)
            # Пишем во временный файл и подменяем целиком, чтобы читатель
            # никогда не увидел наполовину записанный кэш
            fd, tmp_path = tempfile.mkstemp(
                dir=self.cache_file.parent, prefix=f".{self.cache_file.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_path, self.cache_file)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Не удалось записать кэш каталога: %s", e)
            return False
        logger.debug("Кэш каталога записан: %d товаров", len(snapshot.data))
        return True

    def is_expired(self, updated_at: Optional[datetime]) -> bool:
        if updated_at is None:
            return True
        age_minutes = (self._now() - updated_at).total_seconds() / 60
        return age_minutes >= self.ttl_minutes
