"""
Best-effort chat notifications. send() never raises; a failed notification
must not fail the request that triggered it.
"""

import html
import logging
from typing import Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


class TelegramNotifier:
    def __init__(
        self,
        bot_token: Optional[str] = None,
        chat_id: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None
    ):
        self.bot_token = bot_token if bot_token is not None else settings.telegram_bot_token
        self.chat_id = chat_id if chat_id is not None else settings.telegram_chat_id
        self.timeout = timeout or settings.telegram_timeout_seconds
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def send(self, text: str) -> bool:
        if not self.configured:
            logger.warning("Telegram credentials not found. Skipping notification.")
            return False

        payload = {"chat_id": self.chat_id, "text": text, "parse_mode": "HTML"}
        url = TELEGRAM_API_URL.format(token=self.bot_token)
        try:
            if self._client is not None:
                response = self._client.post(url, json=payload, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.post(url, json=payload)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to send Telegram message: {e}")
            return False

        if not data.get("ok"):
            logger.error(f"Telegram API error: {data.get('description', data)}")
            return False
        return True


def escape(value) -> str:
    """Escape user-supplied text for Telegram HTML parse mode"""
    return html.escape(str(value)) if value is not None else "-"


def get_notifier() -> TelegramNotifier:
    return TelegramNotifier()
