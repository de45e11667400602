"""
Thread Publisher.

Chains paginated chunks into a root post followed by replies.

INVARIANTS:
- Exactly one root post, then one reply per further chunk
- Each reply is parented to the post published right before it
- A post is only issued once its parent has returned an identifier
- A failure stops the chain; published posts are kept, never deleted
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from dailyscry.models.failure import PublishChainError
from dailyscry.publishing.channel import Attachment, ChannelClient, MediaStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ThreadPost:
    """A published post and the post it replies to."""

    body: str
    parent_id: str | None
    post_id: str


@dataclass
class PublishThread:
    """Posts of one thread, in publishing order."""

    posts: list[ThreadPost] = field(default_factory=list)

    @property
    def post_ids(self) -> list[str]:
        return [post.post_id for post in self.posts]

    @property
    def root_id(self) -> str | None:
        return self.posts[0].post_id if self.posts else None


async def upload_attachments(
    media_store: MediaStore,
    attachments: Sequence[Attachment],
) -> list[str]:
    """
    Upload attachments concurrently.

    Args:
        media_store: Where to upload
        attachments: Images with their descriptions

    Returns:
        Media identifiers in attachment order
    """
    media_ids = await asyncio.gather(
        *(media_store.upload(attachment.data, attachment.description) for attachment in attachments)
    )
    logger.debug("uploaded %d attachment(s)", len(media_ids))
    return list(media_ids)


async def publish_thread(
    chunks: Sequence[str],
    channel: ChannelClient,
    *,
    trailer: str = "",
    media_ids: Sequence[str] = (),
) -> PublishThread:
    """
    Publish chunks as a thread.

    Args:
        chunks: Paginated text, in order
        channel: Client that publishes the posts
        trailer: Text appended verbatim to every chunk
        media_ids: Attachments of the root post

    Returns:
        The published thread

    Raises:
        PublishChainError: If a post fails; carries the posts published so far
    """
    thread = PublishThread()
    if not chunks:
        return thread

    bodies = [f"{chunk}{trailer}" for chunk in chunks]

    try:
        parent_id = await channel.post_root(bodies[0], list(media_ids))
    except Exception as e:
        logger.error("publishing chunk 1 of %d failed: %s", len(bodies), e)
        raise PublishChainError(thread, failed_index=0, cause=e) from e

    thread.posts.append(ThreadPost(body=bodies[0], parent_id=None, post_id=parent_id))
    logger.debug("published chunk 1 of %d as %s", len(bodies), parent_id)

    for index, body in enumerate(bodies[1:], start=1):
        try:
            post_id = await channel.post_reply(body, parent_id)
        except Exception as e:
            logger.error("publishing chunk %d of %d failed: %s", index + 1, len(bodies), e)
            raise PublishChainError(thread, failed_index=index, cause=e) from e

        thread.posts.append(ThreadPost(body=body, parent_id=parent_id, post_id=post_id))
        logger.debug("published chunk %d of %d as %s", index + 1, len(bodies), post_id)
        parent_id = post_id

    return thread
