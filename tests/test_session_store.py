"""Tests for per-chat sessions, including the bound on stored chats."""

import pytest

from shopbot.core.models import Category, Product
from shopbot.services.session_store import SessionStore


def products(n):
    return [Product(title=f"Товар {i}", price=None, availability="", link=f"https://s/p/{i}") for i in range(n)]


def test_show_wraps_index_both_directions():
    store = SessionStore()
    items = products(3)

    assert store.show(1, items, 3).index == 0
    assert store.show(1, items, -1).index == 2
    assert store.get(1).current.title == "Товар 2"


def test_show_rejects_empty_list():
    with pytest.raises(ValueError):
        SessionStore().show(1, [], 0)


def test_update_merges_fields():
    store = SessionStore()
    store.update(7, categories=[Category("Кружки", "https://s/c")])
    store.update(7, context="Поиск: кру")
    store.show(7, products(2), 1)

    session = store.get(7)

    assert session.categories[0].name == "Кружки"
    assert session.context == "Поиск: кру"
    assert session.index == 1


def test_context_can_be_cleared():
    store = SessionStore()
    store.update(7, context="Категория: Кружки")

    assert store.update(7, context=None).context is None


def test_sessions_are_isolated_per_chat():
    store = SessionStore()
    store.show(1, products(2), 0)

    assert store.get(2) is None
    assert 1 in store and 2 not in store


def test_store_never_exceeds_max_chats():
    store = SessionStore(max_chats=3)

    for chat_id in range(10):
        store.show(chat_id, products(1))

    assert len(store) == 3
    assert [chat_id in store for chat_id in (6, 7, 8, 9)] == [False, True, True, True]


def test_recently_used_chat_survives_eviction():
    store = SessionStore(max_chats=2)
    store.show(1, products(1))
    store.show(2, products(1))

    store.get(1)
    store.show(3, products(1))

    assert 1 in store
    assert 2 not in store


def test_invalid_capacity():
    with pytest.raises(ValueError):
        SessionStore(max_chats=0)
