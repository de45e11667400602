"""
Scryfall API client.

Fetches random cards from https://api.scryfall.com/cards/random.
"""

import logging

import httpx

from dailyscry.models.card import Card
from dailyscry.models.failure import CardSourceError
from dailyscry.parsers.scryfall import card_from_scryfall

logger = logging.getLogger(__name__)

SCRYFALL_API = "https://api.scryfall.com"
USER_AGENT = "DailyScry/1.0"


class ScryfallClient:
    """
    Card source backed by the Scryfall API.

    Scryfall asks for a User-Agent and an Accept header on every request.
    """

    def __init__(self, base_url: str = SCRYFALL_API, timeout: float = 30.0) -> None:
        """
        Initialize the Scryfall client.

        Args:
            base_url: Scryfall API base URL
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.timeout = timeout

    async def fetch(self) -> Card:
        """
        Fetch one random card.

        Raises:
            CardSourceError: If the request fails
            DataIntegrityError: If the returned card is malformed
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=self.timeout,
            ) as client:
                response = await client.get("/cards/random")
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise CardSourceError("Scryfall request failed", detail=str(e)) from e

        card = card_from_scryfall(data)
        logger.debug("got card %r with oracle id %s", card.name, card.oracle_id)
        return card
