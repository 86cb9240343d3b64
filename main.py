"""
==============================================================================
STOREFRONT BOT - MAIN ENTRY POINT
==============================================================================
Главная точка входа приложения.
Инициализирует и запускает Telegram бота для просмотра каталога магазина.
==============================================================================
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand, BotCommandScopeDefault, MenuButtonCommands

from shopbot.bot.error_handler import ErrorHandler
from shopbot.bot.handlers import router
from shopbot.core.config import Settings, load_settings
from shopbot.core.exceptions import ConfigError
from shopbot.core.logging_config import setup_logging
from shopbot.services.catalog_service import create_catalog_service
from shopbot.services.refresh_job import CatalogRefreshJob
from shopbot.services.session_store import SessionStore


async def setup_bot_menu(bot: Bot) -> None:
    """
    Настраивает список команд бота, отображаемых в боковом меню Telegram.
    """
    commands = [
        BotCommand(command="start", description="Главное меню"),
        BotCommand(command="categories", description="Категории каталога"),
        BotCommand(command="category", description="Открыть категорию по номеру"),
        BotCommand(command="search", description="Поиск по товарам"),
        BotCommand(command="refresh", description="Обновить каталог"),
    ]
    await bot.set_my_commands(commands, scope=BotCommandScopeDefault())
    await bot.set_chat_menu_button(menu_button=MenuButtonCommands())


async def main(settings: Settings):
    """
    Основная асинхронная функция для запуска Telegram бота.

    1. Первичная загрузка каталога (ошибка не фатальна)
    2. Запуск планового обновления каталога
    3. Регистрация обработчиков и зависимостей
    4. Long polling
    """
    catalog_service = create_catalog_service(settings)

    try:
        await catalog_service.load_catalog(force=True)
        logging.info("Первичная загрузка каталога завершена.")
    except Exception as e:
        logging.error(f"Не удалось выполнить первичную загрузку каталога: {e}")

    refresh_job = CatalogRefreshJob(catalog_service, settings.refresh_interval_minutes)
    await refresh_job.start()

    bot = Bot(token=settings.BOT_TOKEN)
    dp = Dispatcher(
        catalog_service=catalog_service,
        sessions=SessionStore(settings.SESSION_MAX_CHATS),
        error_handler=ErrorHandler(bot, settings.ADMIN_CHAT_ID or None),
        settings=settings,
    )
    dp.include_router(router)

    try:
        await setup_bot_menu(bot)
        await bot.delete_webhook(drop_pending_updates=True)
        logging.info("Бот запущен и готов к работе.")
        await dp.start_polling(bot)
    finally:
        logging.info("Останавливаю бота...")
        await refresh_job.stop()
        await bot.session.close()


if __name__ == "__main__":
    try:
        app_settings = load_settings()
    except ConfigError as e:
        setup_logging()
        logging.critical(str(e))
        sys.exit(1)

    setup_logging(app_settings.LOG_LEVEL)
    try:
        asyncio.run(main(app_settings))
    except (KeyboardInterrupt, SystemExit):
        logging.info("Работа завершена по прерыванию.")
