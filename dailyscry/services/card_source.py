"""
Random card selection.

Draws random cards from a CardSource until one passes every filter.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from uuid import UUID

from dailyscry.config import Settings
from dailyscry.models.card import Card
from dailyscry.models.failure import CardSourceError
from dailyscry.publishing.channel import CardSource

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


class CardFilter(ABC):
    """A predicate deciding whether a card may be posted."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def accepts(self, settings: Settings, card: Card) -> bool:
        """Return True if the card may be posted."""


class IgnoredOracleIdFilter(CardFilter):
    """Rejects cards whose oracle ID is in the configured ignore list."""

    def accepts(self, settings: Settings, card: Card) -> bool:
        if card.oracle_id is None:
            logger.warning("card has no oracle_id url: %s", card.scryfall_uri)
            return True
        try:
            oracle_id = UUID(card.oracle_id)
        except ValueError:
            logger.warning("card has a malformed oracle_id %r", card.oracle_id)
            return True
        return oracle_id not in settings.ignored_oracle_id_set


class ContentWarningFilter(CardFilter):
    """Rejects cards Scryfall flags with a content warning."""

    def accepts(self, settings: Settings, card: Card) -> bool:
        return not card.content_warning


DEFAULT_FILTERS: tuple[CardFilter, ...] = (IgnoredOracleIdFilter(), ContentWarningFilter())


async def random_card(
    settings: Settings,
    source: CardSource,
    filters: Sequence[CardFilter] = DEFAULT_FILTERS,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Card:
    """
    Fetch random cards until one passes every filter.

    Args:
        settings: Settings holding the ignore list
        source: Where cards come from
        filters: Filters a card must pass
        max_attempts: How many cards to draw before giving up

    Returns:
        The first accepted card

    Raises:
        CardSourceError: If no card was accepted within max_attempts
    """
    logger.debug("fetching random card...")
    for attempt in range(1, max_attempts + 1):
        card = await source.fetch()

        rejected_by = next(
            (card_filter.name for card_filter in filters if not card_filter.accepts(settings, card)),
            None,
        )
        if rejected_by is None:
            logger.info("got card %r after %d attempt(s)", card.name, attempt)
            return card

        logger.info("'%s' filters '%s' and it will be ignored", rejected_by, card.name)

    raise CardSourceError(
        "No acceptable card found",
        detail=f"all {max_attempts} fetched cards were filtered",
    )
