import logging
import ssl
from urllib.parse import urljoin

import certifi
import httpx

from shopbot.core.exceptions import TransportError
from shopbot.core.logging_config import log_json

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/118.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 15.0


class StoreClient:
    """
    HTTP клиент витрины магазина.
    Загружает HTML страниц с браузерным User-Agent и фиксированным таймаутом.
    Повторных попыток не делает: одна ошибка запроса = одна ошибка вызова.
    """

    def __init__(
        self,
        store_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        disable_ssl_verify: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.store_url = store_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.disable_ssl_verify = disable_ssl_verify
        # Подменяется в тестах (httpx.MockTransport)
        self._transport = transport

    def resolve(self, path: str) -> str:
        """Преобразует относительный путь в абсолютный URL магазина."""
        return urljoin(self.store_url, path)

    def _verify(self):
        if self.disable_ssl_verify:
            logger.warning("SSL verification is DISABLED. This is not recommended for production!")
            return False
        return ssl.create_default_context(cafile=certifi.where())

    async def fetch(self, url: str) -> str:
        """
        Выполняет GET запрос и возвращает текст страницы.

        Raises:
            TransportError: сетевая ошибка, таймаут или ответ не 2xx
        """
        log_json(logger, "info", event="store_request", url=url)
        try:
            async with httpx.AsyncClient(
                verify=self._verify(),
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            log_json(logger, "error", event="store_request_failed", url=url, reason="timeout", timeout=self.timeout)
            raise TransportError(url, f"Таймаут запроса {url} ({self.timeout} сек)") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log_json(logger, "error", event="store_request_failed", url=url, reason=type(e).__name__, error=str(e))
            raise TransportError(url, f"Ошибка запроса {url}: {e}") from e

        if not response.is_success:
            log_json(logger, "error", event="store_request_failed", url=url, status=response.status_code)
            raise TransportError(
                url,
                f"Магазин ответил статусом {response.status_code} для {url}",
                status_code=response.status_code,
            )

        logger.debug(f"Store response {response.status_code}, {len(response.text)} символов")
        return response.text
