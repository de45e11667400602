"""
Publishing pipeline.

Budgeted pagination and reply-thread sequencing over abstract channels.
"""

from dailyscry.publishing.channel import Attachment, CardSource, ChannelClient, MediaStore
from dailyscry.publishing.pagination import ELLIPSIS, Reservation, paginate, reserved_length
from dailyscry.publishing.thread import (
    PublishThread,
    ThreadPost,
    publish_thread,
    upload_attachments,
)

__all__ = [
    "Attachment",
    "CardSource",
    "ChannelClient",
    "ELLIPSIS",
    "MediaStore",
    "PublishThread",
    "Reservation",
    "ThreadPost",
    "paginate",
    "publish_thread",
    "reserved_length",
    "upload_attachments",
]
