"""
Mastodon client.

Uploads card images and publishes statuses through the Mastodon REST API.

API reference: https://docs.joinmastodon.org/methods/statuses/
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from dailyscry.models.failure import ChannelError

logger = logging.getLogger(__name__)

CHANNEL = "mastodon"
USER_AGENT = "DailyScry/1.0"

# Mastodon counts every link as 23 characters, whatever its length
LINK_LENGTH = 23


class MastodonClient:
    """
    Media store and channel client for one Mastodon account.

    Statuses are public, English, and not marked sensitive.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = 30.0,
        poll_interval: float = 1.0,
        max_polls: int = 60,
    ) -> None:
        """
        Initialize the Mastodon client.

        Args:
            base_url: Instance URL (e.g., "https://mastodon.social")
            access_token: Application access token with write scope
            timeout: Request timeout in seconds
            poll_interval: Seconds between checks of a processing upload
            max_polls: Checks before a processing upload is given up on
        """
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_polls = max_polls

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.access_token}",
                "User-Agent": USER_AGENT,
            },
            timeout=self.timeout,
        )

    async def verify_credentials(self) -> dict[str, Any]:
        """
        Check that the access token is valid.

        Returns:
            The authenticated account

        Raises:
            ChannelError: If the token is rejected
        """
        async with self._client() as client:
            response = await self._send(client, "GET", "/api/v1/accounts/verify_credentials")
        account: dict[str, Any] = response.json()
        logger.debug("authenticated as %s", account.get("acct"))
        return account

    async def upload(self, data: bytes, description: str) -> str:
        """
        Upload a PNG image, waiting until Mastodon has processed it.

        Args:
            data: PNG bytes
            description: Alt text of the image

        Returns:
            The media attachment ID

        Raises:
            ChannelError: If the upload fails or never finishes processing
        """
        async with self._client() as client:
            response = await self._send(
                client,
                "POST",
                "/api/v2/media",
                files={"file": ("card.png", data, "image/png")},
                data={"description": description},
            )
            media_id = str(response.json()["id"])

            # 202 means the attachment is still being processed
            if response.status_code == 202:
                await self._wait_until_processed(client, media_id)

        logger.debug("uploaded media %s", media_id)
        return media_id

    async def _wait_until_processed(self, client: httpx.AsyncClient, media_id: str) -> None:
        for _ in range(self.max_polls):
            response = await self._send(client, "GET", f"/api/v1/media/{media_id}")
            if response.status_code != 206:
                return
            await asyncio.sleep(self.poll_interval)
        raise ChannelError(CHANNEL, f"media {media_id} is still processing")

    async def post_root(self, text: str, media_ids: Sequence[str]) -> str:
        """
        Publish a status with attachments.

        Returns:
            The status ID
        """
        return await self._post_status({"status": text, "media_ids": list(media_ids)})

    async def post_reply(self, text: str, parent_id: str) -> str:
        """
        Publish a status replying to another status.

        Returns:
            The status ID
        """
        return await self._post_status({"status": text, "in_reply_to_id": parent_id})

    async def _post_status(self, payload: dict[str, Any]) -> str:
        payload = {
            **payload,
            "visibility": "public",
            "sensitive": False,
            "language": "en",
        }
        async with self._client() as client:
            response = await self._send(client, "POST", "/api/v1/statuses", json=payload)

        status = response.json()
        logger.info("posted: %s", status.get("url"))
        return str(status["id"])

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise ChannelError(CHANNEL, f"network error: {e}") from e

        if not response.is_success:
            raise ChannelError(
                CHANNEL,
                f"{method} {url} failed: {response.text}",
                status_code=response.status_code,
            )
        return response
