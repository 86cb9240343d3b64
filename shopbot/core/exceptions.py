"""
Исключения приложения.

- TransportError — сетевая/HTTP ошибка при загрузке страницы магазина.
- ParseError — повреждённый файл кэша (обрабатывается как отсутствие кэша).
- ConfigError — отсутствует обязательная настройка (фатально при старте).
"""

from __future__ import annotations


class ShopBotError(Exception):
    """Базовое исключение бота."""


class TransportError(ShopBotError):
    """Не удалось получить страницу магазина."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ParseError(ShopBotError):
    """Данные кэша не соответствуют ожидаемому формату."""


class ConfigError(ShopBotError):
    """Ошибка конфигурации приложения."""
