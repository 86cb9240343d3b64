"""
Сессии чатов в памяти процесса.

Сессия хранит текущий список товаров, позицию пагинации, последний список
категорий и подпись контекста («Поиск: ...», «Категория: ...»).
Количество сессий ограничено: при переполнении вытесняется чат,
к которому дольше всего не обращались.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Optional

from shopbot.core.models import Category, Product

DEFAULT_MAX_CHATS = 1000
_UNSET = object()


@dataclass(frozen=True)
class ChatSession:
    products: tuple[Product, ...] = field(default_factory=tuple)
    index: int = 0
    categories: Optional[tuple[Category, ...]] = None
    context: Optional[str] = None

    @property
    def current(self) -> Optional[Product]:
        if not self.products:
            return None
        return self.products[self.index]


class SessionStore:
    """LRU-хранилище сессий по chat_id."""

    def __init__(self, max_chats: int = DEFAULT_MAX_CHATS):
        if max_chats <= 0:
            raise ValueError("max_chats должен быть больше нуля")
        self.max_chats = max_chats
        self._sessions: "OrderedDict[int, ChatSession]" = OrderedDict()

    def get(self, chat_id: int) -> Optional[ChatSession]:
        session = self._sessions.get(chat_id)
        if session is not None:
            self._sessions.move_to_end(chat_id)
        return session

    def update(
        self,
        chat_id: int,
        *,
        products=_UNSET,
        index=_UNSET,
        categories=_UNSET,
        context=_UNSET,
    ) -> ChatSession:
        """Сливает переданные поля с текущей сессией (или создаёт новую)."""
        changes = {}
        if products is not _UNSET:
            changes["products"] = tuple(products)
        if index is not _UNSET:
            changes["index"] = index
        if categories is not _UNSET:
            changes["categories"] = tuple(categories) if categories is not None else None
        if context is not _UNSET:
            changes["context"] = context

        session = replace(self._sessions.get(chat_id) or ChatSession(), **changes)
        self._sessions[chat_id] = session
        self._sessions.move_to_end(chat_id)
        while len(self._sessions) > self.max_chats:
            self._sessions.popitem(last=False)
        return session

    def show(self, chat_id: int, products, index: int = 0) -> ChatSession:
        """
        Запоминает список товаров и нормализует позицию с переходом по кругу.
        Пустой список не сохраняется.
        """
        products = tuple(products)
        if not products:
            raise ValueError("список товаров пуст")
        return self.update(chat_id, products=products, index=index % len(products))

    def discard(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._sessions
