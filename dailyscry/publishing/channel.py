"""
Collaborator interfaces of the publishing pipeline.

The pipeline only knows these narrow, awaitable operations; the concrete
Scryfall, Mastodon and Telegram clients live in dailyscry.clients.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from dailyscry.models.card import Card


@runtime_checkable
class CardSource(Protocol):
    """Produces one random card per call."""

    async def fetch(self) -> Card: ...


@runtime_checkable
class MediaStore(Protocol):
    """Uploads one attachment and returns its identifier."""

    async def upload(self, data: bytes, description: str) -> str: ...


@runtime_checkable
class ChannelClient(Protocol):
    """Publishes root posts and replies, returning post identifiers."""

    async def post_root(self, text: str, media_ids: Sequence[str]) -> str: ...

    async def post_reply(self, text: str, parent_id: str) -> str: ...


@dataclass(frozen=True, slots=True)
class Attachment:
    """
    One image to attach to a root post.

    Attributes:
        data: Encoded image bytes (PNG)
        description: Text describing the image, e.g. the rendered card text
    """

    data: bytes
    description: str
