import logging
import re
from urllib.parse import urljoin

from shopbot.core.models import Category
from shopbot.parsers.document import HtmlNode
from shopbot.parsers.selectors import (
    CATEGORY_HREF_PATTERN,
    CATEGORY_MIN_TEXT_LENGTH,
    PRODUCT_CONTAINER_SELECTORS,
)

logger = logging.getLogger(__name__)

_CATEGORY_HREF_RE = re.compile(CATEGORY_HREF_PATTERN, re.IGNORECASE)


def extract_product_elements(html: str, url: str | None = None) -> list[HtmlNode]:
    """
    Находит карточки товаров на странице.

    Пустой список — допустимый результат (каталог пуст), а не ошибка.
    """
    document = HtmlNode.parse(html)
    elements = document.select(PRODUCT_CONTAINER_SELECTORS)
    if not elements:
        logger.warning("Не найдено товаров по селекторам на странице %s", url or "<html>")
    return elements


def extract_category_links(html: str) -> list[tuple[str, str]]:
    """
    Возвращает пары (текст, href) ссылок, похожих на категории каталога.
    Дубликаты по тексту схлопываются: побеждает последняя ссылка.
    """
    document = HtmlNode.parse(html)
    links: dict[str, str] = {}
    for anchor in document.select(["a[href]"]):
        href = (anchor.attr("href") or "").strip()
        text = anchor.text()
        if not href or not text:
            continue
        if _CATEGORY_HREF_RE.search(href) and len(text) >= CATEGORY_MIN_TEXT_LENGTH:
            links[text] = href
    return list(links.items())


def build_categories(links: list[tuple[str, str]], base_url: str) -> list[Category]:
    categories = []
    for name, href in links:
        try:
            link = urljoin(base_url, href)
        except ValueError as e:
            logger.debug("Пропускаю категорию %s с некорректной ссылкой %s: %s", name, href, e)
            continue
        categories.append(Category(name=name, link=link))
    return categories
