"""
Тонкая обёртка над BeautifulSoup.

Экстрактор и нормализатор работают только с HtmlNode и списками селекторов,
поэтому политика извлечения не зависит от конкретного HTML-парсера.
"""

from __future__ import annotations

from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

HTML_PARSER = "lxml"


class HtmlNode:
    """Узел HTML документа (документ целиком или отдельный элемент)."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    @classmethod
    def parse(cls, html: str) -> "HtmlNode":
        return cls(BeautifulSoup(html or "", HTML_PARSER))

    @property
    def name(self) -> str:
        return self._tag.name or ""

    def select(self, selectors: Iterable[str]) -> list["HtmlNode"]:
        """
        Объединение совпадений по всем селекторам в порядке документа.
        Каждый элемент попадает в результат один раз.
        """
        group = ", ".join(selectors)
        if not group:
            return []
        return [HtmlNode(tag) for tag in self._tag.select(group)]

    def select_by_priority(self, selectors: Iterable[str]) -> Iterable["HtmlNode"]:
        """Совпадения селекторов по очереди: сначала все для первого, затем для второго и т.д."""
        for selector in selectors:
            for tag in self._tag.select(selector):
                yield HtmlNode(tag)

    def first(self, selectors: Iterable[str]) -> Optional["HtmlNode"]:
        """Первый элемент по приоритету селекторов."""
        return next(iter(self.select_by_priority(selectors)), None)

    def first_text(self, selectors: Iterable[str]) -> str:
        """Первый непустой текст по приоритету селекторов."""
        for node in self.select_by_priority(selectors):
            text = node.text()
            if text:
                return text
        return ""

    def text(self) -> str:
        return self._tag.get_text().strip()

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            # bs4 отдаёт многозначные атрибуты (class) списком
            value = " ".join(value)
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HtmlNode) and self._tag is other._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<HtmlNode {self.name}>"
