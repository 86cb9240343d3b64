"""
Модуль для обработки ошибок в обработчиках команд.
Обеспечивает дружественные сообщения для пользователей и уведомления для админа.
"""

import logging
import traceback
from datetime import datetime
from typing import Optional

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.types import Message

from shopbot.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Класс для централизованной обработки ошибок"""

    # Дружественные сообщения для пользователей
    USER_MESSAGES = {
        'start_error': "Не удалось загрузить каталог. Попробуйте команду /refresh позже.",
        'categories_error': "Произошла ошибка при получении категорий.",
        'category_error': "Не удалось загрузить выбранную категорию.",
        'search_error': "Не удалось выполнить поиск. Попробуйте позже.",
        'refresh_error': "Не удалось обновить кэш.",
        'unknown_error': "Произошла непредвиденная ошибка. Попробуйте позже.",
    }

    def __init__(self, bot: Optional[Bot] = None, admin_chat_id: Optional[str] = None):
        """
        Args:
            bot: Экземпляр aiogram Bot для отправки уведомлений
            admin_chat_id: ID чата администратора для уведомлений об ошибках
        """
        self.bot = bot
        if admin_chat_id:
            try:
                self.admin_chat_id = int(admin_chat_id)
            except (ValueError, TypeError):
                logger.warning(f"Invalid ADMIN_CHAT_ID format: {admin_chat_id}. Expected numeric string or int.")
                self.admin_chat_id = None
        else:
            self.admin_chat_id = None

    async def handle_error(
        self,
        error: Exception,
        user_message: Message,
        context: str = "",
        error_type: str = "unknown_error",
    ) -> None:
        """
        Логирует ошибку, уведомляет админа и отправляет пользователю понятное сообщение.

        Args:
            error: Исключение, которое произошло
            user_message: Сообщение, в ответ на которое нужно написать пользователю
            context: Дополнительный контекст (команда, категория, запрос)
            error_type: Ключ USER_MESSAGES
        """
        logger.error(
            f"{error_type}: {type(error).__name__}: {error}" + (f" | {context}" if context else ""),
            exc_info=not isinstance(error, TransportError),
        )

        await self.notify_admin(error, context, error_type)

        text = self.USER_MESSAGES.get(error_type) or self.USER_MESSAGES['unknown_error']
        try:
            await user_message.answer(text)
        except TelegramAPIError as e:
            logger.warning(f"Не удалось отправить сообщение об ошибке пользователю: {e}")

    async def notify_admin(self, error: Exception, context: str, error_type: str) -> None:
        # Сетевые сбои магазина ожидаемы и не стоят уведомления
        if not self.bot or not self.admin_chat_id or isinstance(error, TransportError):
            return

        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        text = (
            f"⚠️ Ошибка в боте ({error_type})\n"
            f"Время: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n"
            f"Контекст: {context or '—'}\n"
            f"{type(error).__name__}: {error}\n\n"
            f"{tb[-3000:]}"
        )
        try:
            await self.bot.send_message(self.admin_chat_id, text)
        except TelegramAPIError as e:
            logger.warning(f"Не удалось уведомить администратора: {e}")
