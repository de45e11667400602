"""
Telegram client.

Sends card photos and text through the Telegram Bot API. A photo message
serves as the "media" of a thread: the first text message replies to it
and every further message replies to its predecessor.

API reference: https://core.telegram.org/bots/api
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from dailyscry.models.failure import ChannelError

logger = logging.getLogger(__name__)

CHANNEL = "telegram"
TELEGRAM_API = "https://api.telegram.org"


class TelegramClient:
    """Media store and channel client for one Telegram chat."""

    def __init__(
        self,
        token: str,
        chat_id: str,
        base_url: str = TELEGRAM_API,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the Telegram client.

        Args:
            token: Bot token
            chat_id: Target chat ID or @channelusername
            base_url: Bot API base URL
            timeout: Request timeout in seconds
        """
        self.token = token
        self.chat_id = chat_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def upload(self, data: bytes, description: str) -> str:
        """
        Send a photo with a caption.

        Args:
            data: PNG bytes
            description: Photo caption

        Returns:
            The message ID of the photo
        """
        return await self._call(
            "sendPhoto",
            data={"chat_id": self.chat_id, "caption": description},
            files={"photo": ("card.png", data, "image/png")},
        )

    async def post_root(self, text: str, media_ids: Sequence[str]) -> str:
        """
        Send the first text message, as a reply to the photo if there is one.

        Returns:
            The message ID
        """
        payload: dict[str, Any] = {"chat_id": self.chat_id, "text": text}
        if media_ids:
            payload["reply_to_message_id"] = int(media_ids[0])
        return await self._call("sendMessage", json=payload)

    async def post_reply(self, text: str, parent_id: str) -> str:
        """
        Send a text message replying to another message.

        Returns:
            The message ID
        """
        return await self._call(
            "sendMessage",
            json={
                "chat_id": self.chat_id,
                "text": text,
                "reply_to_message_id": int(parent_id),
            },
        )

    async def _call(self, method: str, **kwargs: Any) -> str:
        url = f"{self.base_url}/bot{self.token}/{method}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, **kwargs)
        except httpx.RequestError as e:
            raise ChannelError(CHANNEL, f"network error calling {method}") from e

        try:
            body: dict[str, Any] = response.json()
        except ValueError:
            body = {}

        if not response.is_success or not body.get("ok"):
            raise ChannelError(
                CHANNEL,
                f"{method} failed: {body.get('description', response.text)}",
                status_code=response.status_code,
            )

        message_id = str(body["result"]["message_id"])
        logger.debug("%s sent message %s", method, message_id)
        return message_id
