"""
Модели данных каталога: товар, категория и снимок каталога.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from shopbot.core.exceptions import ParseError

TITLE_PLACEHOLDER = "Без названия"
AVAILABILITY_PLACEHOLDER = "Уточняйте наличие"


@dataclass(frozen=True)
class Product:
    """Товар витрины. price=None означает, что цена неизвестна."""
    title: str
    price: Optional[float]
    availability: str
    link: str
    image: Optional[str] = None

    @property
    def has_price(self) -> bool:
        return self.price is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Any) -> "Product":
        if not isinstance(raw, dict):
            raise ParseError(f"товар должен быть объектом, получено: {type(raw).__name__}")
        price = raw.get("price")
        if price is not None:
            if isinstance(price, bool) or not isinstance(price, (int, float)):
                raise ParseError(f"некорректная цена товара: {price!r}")
            price = float(price)
        return cls(
            title=str(raw.get("title") or TITLE_PLACEHOLDER),
            price=price,
            availability=str(raw.get("availability") or AVAILABILITY_PLACEHOLDER),
            link=str(raw.get("link") or ""),
            image=raw.get("image") or None,
        )


@dataclass(frozen=True)
class Category:
    name: str
    link: str


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Разбирает ISO-8601 строку. Время без зоны считается UTC."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class CatalogSnapshot:
    """Сохранённое состояние каталога: время обновления и список товаров."""
    updated_at: Optional[datetime]
    data: tuple[Product, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "data": [product.to_dict() for product in self.data],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "CatalogSnapshot":
        if not isinstance(raw, dict):
            raise ParseError("кэш каталога должен быть JSON-объектом")
        items = raw.get("data")
        if not isinstance(items, list):
            raise ParseError("в кэше каталога нет списка data")
        return cls(
            updated_at=parse_timestamp(raw.get("updatedAt")),
            data=tuple(Product.from_dict(item) for item in items),
        )
