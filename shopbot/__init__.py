"""
Storefront Bot - Source Code Package
====================================
Telegram бот для просмотра каталога интернет-магазина.

Структура:
- bot/      - Telegram бот (handlers, форматирование, обработка ошибок)
- api/      - HTTP клиент витрины магазина
- parsers/  - Извлечение товаров и категорий из HTML
- services/ - Каталог, кэш, сессии чатов, плановое обновление
- core/     - Конфигурация, логирование, исключения, модели
"""

__version__ = "1.0.0"
