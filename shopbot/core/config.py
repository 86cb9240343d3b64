"""
==============================================================================
STOREFRONT BOT - CONFIGURATION
==============================================================================
Управление конфигурацией через переменные окружения.
Использует Pydantic Settings для валидации и загрузки из .env файла.
==============================================================================
"""

from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shopbot.core.exceptions import ConfigError

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Класс для управления настройками приложения.

    Attributes:
        BOT_TOKEN (str): Токен Telegram бота от @BotFather
        STORE_URL (str): Базовый URL витрины магазина
        STORE_NAME (str): Название магазина для приветствия
        CACHE_FILE (str): Путь к JSON файлу кэша каталога
        CACHE_TTL_MINUTES (int): Время жизни кэша в минутах
        REFRESH_INTERVAL_MINUTES (int | None): Период планового обновления (по умолчанию = TTL)
        LOG_LEVEL (str): Уровень логирования
        FETCH_TIMEOUT (float): Таймаут HTTP-запросов к магазину в секундах
        SESSION_MAX_CHATS (int): Максимум одновременно хранимых сессий чатов
        CATEGORIES_PAGE_LIMIT (int): Сколько категорий показывать в /categories
        ADMIN_CHAT_ID (str): Telegram Chat ID админа для уведомлений об ошибках
        DISABLE_SSL_VERIFY (bool): Отключить проверку SSL (не рекомендуется)
    """
    BOT_TOKEN: str  # Токен Telegram бота
    STORE_URL: str = "https://example.com/"  # Адрес витрины, задаётся в .env
    STORE_NAME: str = "MyCulto"
    CACHE_FILE: str = "data/catalog_cache.json"
    CACHE_TTL_MINUTES: int = 30
    REFRESH_INTERVAL_MINUTES: int | None = None
    LOG_LEVEL: str = "INFO"
    FETCH_TIMEOUT: float = 15.0
    SESSION_MAX_CHATS: int = 1000
    CATEGORIES_PAGE_LIMIT: int = 20
    ADMIN_CHAT_ID: str = ""  # Необязательно
    DISABLE_SSL_VERIFY: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )

    @field_validator("BOT_TOKEN")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("BOT_TOKEN не может быть пустым")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = (value or "INFO").strip().upper()
        if level == "WARN":
            level = "WARNING"
        return level if level in LOG_LEVELS else "INFO"

    @field_validator("CACHE_TTL_MINUTES", "SESSION_MAX_CHATS", "CATEGORIES_PAGE_LIMIT")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("значение должно быть больше нуля")
        return value

    @property
    def refresh_interval_minutes(self) -> int:
        return self.REFRESH_INTERVAL_MINUTES or self.CACHE_TTL_MINUTES


def load_settings(**overrides) -> Settings:
    """
    Загружает настройки из окружения.

    Raises:
        ConfigError: если обязательные переменные отсутствуют или некорректны
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ConfigError(f"Некорректная конфигурация: {fields or e}") from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
