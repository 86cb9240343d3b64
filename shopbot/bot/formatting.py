import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from shopbot.core.models import AVAILABILITY_PLACEHOLDER, Product

PRICE_UNKNOWN_TEXT = "Цена уточняется"
NBSP = "\u00a0"

# Символы, которые нужно экранировать в MarkdownV2
_MARKDOWN_SPECIAL_RE = re.compile(r"([_*\[\]()~`>#+\-=|{}.!\\])")
_LINK_SPECIAL_RE = re.compile(r"([)\\])")


def escape_markdown(text: str | None) -> str:
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text or "")


def escape_link_url(url: str) -> str:
    """Внутри (...) ссылки MarkdownV2 экранируются только ')' и '\\'."""
    return _LINK_SPECIAL_RE.sub(r"\\\1", url)


def format_price(price: Optional[float]) -> str:
    """1234.5 -> '1 235 ₽' (целые рубли, неразрывные пробелы)."""
    if price is None:
        return PRICE_UNKNOWN_TEXT
    rounded = int(Decimal(str(price)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return f"{rounded:,}".replace(",", NBSP) + f"{NBSP}₽"


def format_product_card(product: Product, index: int, total: int, context: str | None = None) -> str:
    lines = []

    if context:
        lines.append(escape_markdown(context))

    lines.append(escape_markdown(f"Товар {index + 1} из {total}"))
    lines.append(f"*{escape_markdown(product.title)}*")
    lines.append(escape_markdown(format_price(product.price)))
    lines.append(escape_markdown(product.availability or AVAILABILITY_PLACEHOLDER))

    if product.link:
        lines.append(f"[Перейти на сайт]({escape_link_url(product.link)})")

    return "\n".join(lines)


def format_categories(names: list[str], limit: int) -> str:
    lines = "\n".join(f"{i}. {name}" for i, name in enumerate(names[:limit], start=1))
    hint = f"\n(Показаны первые {limit} категорий)" if len(names) > limit else ""
    return (
        f"Категории:\n{lines}{hint}\n\n"
        "Используйте /category <номер>, чтобы открыть категорию."
    )


def build_navigation_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="◀️ Назад", callback_data="prev"),
                InlineKeyboardButton(text="▶️ Далее", callback_data="next"),
            ]
        ]
    )
