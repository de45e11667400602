"""
Channel publishing.

Assembles the per-channel trailers and reservations, paginates the rendered
card and drives the thread publisher. Every text is paginated before the
first network call, so a budget failure never leaves a partial post behind.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from dailyscry.clients.mastodon import LINK_LENGTH
from dailyscry.models.failure import DataIntegrityError, PublishChainError
from dailyscry.publishing.channel import Attachment, ChannelClient, MediaStore
from dailyscry.publishing.pagination import Reservation, paginate
from dailyscry.publishing.thread import PublishThread, publish_thread, upload_attachments
from dailyscry.rendering.card import FACE_SEPARATOR, RenderedCard

logger = logging.getLogger(__name__)

HASHTAGS = "#MagicTheGathering #DailyScry"


class MediaChannel(MediaStore, ChannelClient, Protocol):
    """A channel that both hosts media and publishes posts."""


def mastodon_trailer(artist: str | None, link: str) -> str:
    """Text appended to every Mastodon post of a card."""
    return f"{artist or ''}\n{link}\n{HASHTAGS}"


def mastodon_reservations(artist: str | None, link: str) -> list[Reservation]:
    """
    Characters a Mastodon trailer takes from the limit.

    The link is reserved as Mastodon counts it, not by its actual length.
    """
    return [artist or "", "\n", LINK_LENGTH, f"\n{HASHTAGS}"]


def _check_images(rendered: RenderedCard, images: Sequence[bytes]) -> None:
    if len(images) != len(rendered.texts):
        raise DataIntegrityError(
            "Image count does not match rendered texts",
            detail=f"{len(images)} image(s) for {len(rendered.texts)} text(s)",
        )


async def publish_to_mastodon(
    rendered: RenderedCard,
    images: Sequence[bytes],
    link: str,
    client: MediaChannel,
    character_limit: int,
) -> PublishThread:
    """
    Publish a card as one Mastodon thread.

    All display strings go into a single status text; every image is
    attached to the root status, described by its own display string.

    Args:
        rendered: The rendered card
        images: PNG bytes, one per display string
        link: Scryfall link of the card
        client: Mastodon client
        character_limit: Status character limit of the instance

    Returns:
        The published thread

    Raises:
        BudgetExhaustedError: If the trailer does not fit the limit
        PublishChainError: If a status fails to publish
    """
    _check_images(rendered, images)

    chunks = paginate(
        "\n".join(rendered.texts),
        character_limit,
        mastodon_reservations(rendered.artist, link),
    )
    trailer = mastodon_trailer(rendered.artist, link)

    attachments = [
        Attachment(data=image, description=text) for image, text in zip(images, rendered.texts)
    ]
    media_ids = await upload_attachments(client, attachments)

    thread = await publish_thread(chunks, client, trailer=trailer, media_ids=media_ids)
    logger.info("published %d mastodon post(s)", len(thread.posts))
    return thread


async def publish_to_telegram(
    rendered: RenderedCard,
    images: Sequence[bytes],
    link: str,
    client: MediaChannel,
    character_limit: int,
) -> list[PublishThread]:
    """
    Publish a card to Telegram, one thread per printed image.

    Each image is sent as a photo captioned with the link; its display
    string follows as replies, each ending with the artist credit. Photos
    and threads go out one image at a time.

    Args:
        rendered: The rendered card
        images: PNG bytes, one per display string
        link: Scryfall link of the card, used as photo caption
        client: Telegram client
        character_limit: Message character limit

    Returns:
        One published thread per image

    Raises:
        BudgetExhaustedError: If the artist credit does not fit the limit
        PublishChainError: If a photo or message fails to publish; carries
            every photo and thread sent before the failure
    """
    _check_images(rendered, images)

    artist = rendered.artist or ""
    plans = [paginate(text, character_limit, [artist]) for text in rendered.texts]

    threads: list[PublishThread] = []
    photo_ids: list[str] = []
    for plan, image in zip(plans, images):
        try:
            photo_ids.append(await client.upload(image, link))
        except Exception as e:
            logger.error("sending photo %d of %d failed: %s", len(photo_ids) + 1, len(images), e)
            raise PublishChainError(
                PublishThread(), failed_index=0, cause=e, completed=threads, media_ids=photo_ids
            ) from e

        try:
            threads.append(
                await publish_thread(plan, client, trailer=artist, media_ids=[photo_ids[-1]])
            )
        except PublishChainError as e:
            raise PublishChainError(
                e.thread,
                failed_index=e.failed_index,
                cause=e.__cause__,
                completed=threads,
                media_ids=photo_ids,
            ) from e.__cause__

    logger.info("published %d telegram thread(s)", len(threads))
    return threads


def format_for_stdout(rendered: RenderedCard, link: str | None) -> str:
    """Render a card for printing when no channel is selected."""
    body = FACE_SEPARATOR.join(rendered.texts) + (rendered.artist or "")
    return f"{body}\n\n{link or ''}"
