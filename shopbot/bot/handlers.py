import logging

from aiogram import F, Router
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import CallbackQuery, Message

from shopbot.bot.error_handler import ErrorHandler
from shopbot.bot.formatting import build_navigation_keyboard, format_categories, format_product_card
from shopbot.core.config import Settings
from shopbot.core.logging_config import log_json
from shopbot.services.catalog_service import CatalogService
from shopbot.services.session_store import SessionStore

logger = logging.getLogger(__name__)

# Зависимости (catalog_service, sessions, error_handler, settings) передаются
# через workflow data диспетчера, см. main.py
router = Router()


def build_welcome_text(settings: Settings) -> str:
    return "\n".join([
        f"Здравствуйте! Я бот магазина {settings.STORE_NAME}.",
        "Доступные команды:",
        "• /start — показать эту подсказку",
        "• /categories — посмотреть категории каталога",
        "• /category <номер> — открыть категорию из списка",
        "• /search <запрос> — поиск по товарам",
        "• /refresh — обновить кэш каталога",
        "",
        f"Каталог автоматически обновляется каждые {settings.refresh_interval_minutes} минут.",
    ])


async def send_product(message: Message, sessions: SessionStore, products, index: int = 0) -> None:
    """Показывает товар с позиции index (по кругу) и запоминает её в сессии чата."""
    if not products:
        await message.answer("Каталог пуст. Попробуйте позже или уточните запрос.")
        return

    session = sessions.show(message.chat.id, products, index)
    product = session.current
    text = format_product_card(product, session.index, len(session.products), session.context)
    keyboard = build_navigation_keyboard()

    if product.image:
        try:
            await message.answer_photo(
                photo=product.image,
                caption=text,
                parse_mode=ParseMode.MARKDOWN_V2,
                reply_markup=keyboard,
            )
            return
        except TelegramAPIError as e:
            logger.warning("Не удалось отправить изображение товара %s: %s", product.link or product.title, e)

    await message.answer(text, parse_mode=ParseMode.MARKDOWN_V2, reply_markup=keyboard)


@router.message(CommandStart())
async def command_start_handler(
    message: Message,
    catalog_service: CatalogService,
    sessions: SessionStore,
    error_handler: ErrorHandler,
    settings: Settings,
) -> None:
    await message.answer(build_welcome_text(settings))

    try:
        products = await catalog_service.load_catalog()
    except Exception as e:
        await error_handler.handle_error(e, message, context="/start", error_type="start_error")
        return

    sessions.update(message.chat.id, context=None)
    await send_product(message, sessions, products, 0)


@router.message(Command("categories"))
async def command_categories_handler(
    message: Message,
    catalog_service: CatalogService,
    sessions: SessionStore,
    error_handler: ErrorHandler,
    settings: Settings,
) -> None:
    try:
        categories = await catalog_service.fetch_categories()
    except Exception as e:
        await error_handler.handle_error(e, message, context="/categories", error_type="categories_error")
        return

    if not categories:
        await message.answer("Не удалось получить список категорий. Попробуйте позже.")
        return

    sessions.update(message.chat.id, categories=categories)
    await message.answer(format_categories([c.name for c in categories], settings.CATEGORIES_PAGE_LIMIT))


@router.message(Command("category"))
async def command_category_handler(
    message: Message,
    command: CommandObject,
    catalog_service: CatalogService,
    sessions: SessionStore,
    error_handler: ErrorHandler,
) -> None:
    session = sessions.get(message.chat.id)
    if not session or not session.categories:
        await message.answer("Сначала запросите список категорий командой /categories.")
        return

    raw = (command.args or "").split()
    try:
        index = int(raw[0]) - 1 if raw else -1
    except ValueError:
        index = -1
    if index < 0 or index >= len(session.categories):
        await message.answer("Укажите корректный номер категории.")
        return

    category = session.categories[index]
    await message.answer(f"Загружаю категорию «{category.name}»...")

    try:
        products = await catalog_service.load_catalog(category=category.link)
    except Exception as e:
        await error_handler.handle_error(e, message, context=category.link, error_type="category_error")
        return

    sessions.update(message.chat.id, context=f"Категория: {category.name}")
    await send_product(message, sessions, products, 0)


@router.message(Command("search"))
async def command_search_handler(
    message: Message,
    command: CommandObject,
    catalog_service: CatalogService,
    sessions: SessionStore,
    error_handler: ErrorHandler,
) -> None:
    query = (command.args or "").strip()
    if not query:
        await message.answer("Укажите поисковый запрос: /search <название товара>")
        return

    try:
        results = await catalog_service.search(query)
    except Exception as e:
        await error_handler.handle_error(e, message, context=f"/search {query}", error_type="search_error")
        return

    log_json(logger, "info", event="search", chat_id=message.chat.id, query=query, results=len(results))
    if not results:
        await message.answer("Ничего не найдено. Попробуйте уточнить запрос.")
        return

    sessions.update(message.chat.id, context=f"Поиск: {query}")
    await send_product(message, sessions, results, 0)


@router.message(Command("refresh"))
async def command_refresh_handler(
    message: Message,
    catalog_service: CatalogService,
    error_handler: ErrorHandler,
) -> None:
    await message.answer("Обновляю кэш каталога...")
    try:
        products = await catalog_service.load_catalog(force=True)
    except Exception as e:
        await error_handler.handle_error(e, message, context="/refresh", error_type="refresh_error")
        return

    await message.answer(f"Кэш обновлён. Доступно товаров: {len(products)}.")


@router.callback_query(F.data.in_({"next", "prev"}))
async def navigation_callback_handler(callback: CallbackQuery, sessions: SessionStore) -> None:
    await callback.answer()
    message = callback.message
    if not isinstance(message, Message):
        return

    session = sessions.get(message.chat.id)
    if not session or not session.products:
        await message.answer("Сначала выберите список товаров.")
        return

    step = 1 if callback.data == "next" else -1
    try:
        await send_product(message, sessions, session.products, session.index + step)
    except TelegramAPIError as e:
        logger.error("Ошибка обработки кнопки %s: %s", callback.data, e)
