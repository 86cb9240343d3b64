"""
Нормализация карточки товара в Product.

Самое хрупкое место — картинка: магазины прячут её в lazy-load атрибуты,
srcset, inline-стили или ссылку на полноразмерное изображение.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlparse

from shopbot.core.models import AVAILABILITY_PLACEHOLDER, TITLE_PLACEHOLDER, Product
from shopbot.parsers.document import HtmlNode
from shopbot.parsers.selectors import (
    AVAILABILITY_SELECTORS,
    IMAGE_ATTRIBUTES,
    IMAGE_EXTENSIONS,
    PRICE_SELECTORS,
    TITLE_SELECTORS,
)

logger = logging.getLogger(__name__)

_PRICE_JUNK_RE = re.compile(r"[^0-9.,]")
_URL_WRAPPER_RE = re.compile(r"^url\((['\"]?)(.*?)\1\)$", re.IGNORECASE)
_STYLE_URL_RE = re.compile(r"url\((['\"]?)(.*?)\1\)", re.IGNORECASE)
_SRCSET_SEPARATOR_RE = re.compile(r",\s+")


def parse_price(text: str | None) -> Optional[float]:
    """
    "1 234,50 ₽" -> 1234.5. Нет цифр или не разбирается -> None (не 0).
    """
    if not text:
        return None
    cleaned = _PRICE_JUNK_RE.sub("", text).replace(",", ".", 1)
    if not any(ch.isdigit() for ch in cleaned):
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def extract_from_srcset(value: str) -> Optional[str]:
    """
    Первый URL из srcset, который не является data: URI.
    Кандидаты разделяются запятой с пробелом: запятая внутри data: URI не разделитель.
    """
    for chunk in _SRCSET_SEPARATOR_RE.split(value or ""):
        parts = chunk.strip().split()
        candidate = parts[0] if parts else ""
        if candidate and not candidate.startswith("data:"):
            return candidate
    return None


def normalize_store_url(value: str | None, base_url: str) -> Optional[str]:
    """Абсолютный URL относительно магазина; пустые значения и data: URI отбрасываются."""
    if not value:
        return None
    cleaned = value.strip()
    wrapped = _URL_WRAPPER_RE.match(cleaned)
    if wrapped:
        cleaned = wrapped.group(2).strip()
    if not cleaned or cleaned.startswith("data:"):
        return None
    try:
        return urljoin(base_url, cleaned)
    except ValueError as e:
        logger.debug("Не удалось нормализовать ссылку %s: %s", cleaned, e)
        return None


def _has_image_extension(href: str) -> bool:
    path = urlparse(href).path.lower()
    return path.endswith(IMAGE_EXTENSIONS)


class ProductNormalizer:
    """Преобразует элемент карточки товара в Product с абсолютными ссылками."""

    def __init__(self, store_url: str):
        self.store_url = store_url

    def normalize(self, element: HtmlNode) -> Product:
        title = element.first_text(TITLE_SELECTORS)
        availability = self._availability(element)
        return Product(
            title=title or TITLE_PLACEHOLDER,
            price=self._price(element),
            availability=availability or AVAILABILITY_PLACEHOLDER,
            link=self._link(element),
            image=self.find_image(element),
        )

    def _price(self, element: HtmlNode) -> Optional[float]:
        node = element.first(PRICE_SELECTORS)
        if node is None:
            return None
        # itemprop="price" часто хранит значение только в content
        return parse_price(node.text() or node.attr("content"))

    def _availability(self, element: HtmlNode) -> str:
        node = element.first(AVAILABILITY_SELECTORS)
        return node.text() if node is not None else ""

    def _link(self, element: HtmlNode) -> str:
        anchor = element.first(["a"])
        href = anchor.attr("href") if anchor is not None else None
        return normalize_store_url(href, self.store_url) or self.store_url

    def find_image(self, element: HtmlNode) -> Optional[str]:
        images = element.select(["img"])

        for img in images:
            for attribute in IMAGE_ATTRIBUTES:
                value = img.attr(attribute)
                if not value:
                    continue
                if "srcset" in attribute:
                    value = extract_from_srcset(value)
                normalized = normalize_store_url(value, self.store_url)
                if normalized:
                    return normalized

        for img in images:
            style = img.attr("style")
            if not style:
                continue
            match = _STYLE_URL_RE.search(style)
            if match:
                normalized = normalize_store_url(match.group(2), self.store_url)
                if normalized:
                    return normalized

        for anchor in element.select(["a[href]"]):
            href = (anchor.attr("href") or "").strip()
            if href and _has_image_extension(href):
                return normalize_store_url(href, self.store_url)

        return None
