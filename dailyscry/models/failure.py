"""
Failure taxonomy for the card publishing pipeline.

Every failure the pipeline can report is classified by a FailureKind and
raised as a DailyScryError subclass. The library never exits the process;
the command line is the only place that turns these into an exit status.

Propagation:
- Classification, data integrity and budget failures happen before any
  network call and abort the publish attempt with no external effect.
- Publish chain failures happen after some posts exist. They carry the
  partial thread and are never rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from dailyscry.publishing.thread import PublishThread


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Rendering failures
    CLASSIFICATION = "classification"
    DATA_INTEGRITY = "data_integrity"

    # Pagination failures
    BUDGET_EXHAUSTED = "budget_exhausted"

    # Publishing failures
    PUBLISH_CHAIN = "publish_chain"
    CHANNEL = "channel"

    # Collaborator failures
    CARD_SOURCE = "card_source"
    IMAGE = "image"

    # Setup failures
    CONFIGURATION = "configuration"


class FailureDetail(BaseModel):
    """Structured description of a failure, used for reporting."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="What went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the operator",
    )


class DailyScryError(Exception):
    """
    Base class for all classified pipeline failures.

    Subclass this for errors where the pipeline knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class UnknownLayoutError(DailyScryError):
    """Raised when a card's layout tag maps to no rendering strategy."""

    def __init__(self, layout: str):
        self.layout = layout
        super().__init__(
            kind=FailureKind.CLASSIFICATION,
            message=f"Requested card layout {layout!r} is not known",
            suggestion="Fetch a different card.",
        )


class DataIntegrityError(DailyScryError):
    """Raised when a card record violates the shape its layout demands."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.DATA_INTEGRITY,
            message=message,
            detail=detail,
            suggestion="Fetch a different card.",
        )


class BudgetExhaustedError(DailyScryError):
    """
    Raised when reserved trailer content leaves no room for text.

    This is a configuration problem of the channel and is raised before
    anything is posted.
    """

    def __init__(self, limit: int, reserved: int):
        self.limit = limit
        self.reserved = reserved
        super().__init__(
            kind=FailureKind.BUDGET_EXHAUSTED,
            message="Reserved content leaves no room for card text",
            detail=f"reserved {reserved} of {limit} characters",
            suggestion="Raise the channel character limit.",
        )


class PublishChainError(DailyScryError):
    """
    Raised when a post of a thread fails.

    The remaining chunks are not posted. `thread` holds every post that was
    published before the failure. When a card goes out as several threads,
    `completed` holds the threads finished earlier and `media_ids` the media
    already sent to the channel.
    """

    def __init__(
        self,
        thread: PublishThread,
        failed_index: int,
        cause: BaseException | None,
        completed: Sequence[PublishThread] = (),
        media_ids: Sequence[str] = (),
    ):
        self.thread = thread
        self.failed_index = failed_index
        self.completed = list(completed)
        self.media_ids = list(media_ids)
        super().__init__(
            kind=FailureKind.PUBLISH_CHAIN,
            message=f"Publishing chunk {failed_index} failed",
            detail=(
                f"{type(cause).__name__}: {cause}; "
                f"published {len(self.published_ids)} item(s)"
            ),
        )

    @property
    def published_ids(self) -> list[str]:
        """Every identifier the channel returned before the failure."""
        ids = list(self.media_ids)
        for thread in (*self.completed, self.thread):
            ids.extend(thread.post_ids)
        return ids


class ChannelError(DailyScryError):
    """Raised by a channel client when the remote API rejects a call."""

    def __init__(self, channel: str, message: str, status_code: int | None = None):
        self.channel = channel
        self.status_code = status_code
        super().__init__(
            kind=FailureKind.CHANNEL,
            message=f"{channel}: {message}",
            detail=f"HTTP {status_code}" if status_code is not None else None,
        )


class CardSourceError(DailyScryError):
    """Raised when no acceptable card could be fetched."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.CARD_SOURCE,
            message=message,
            detail=detail,
            suggestion="Retry later.",
        )


class ImageError(DailyScryError):
    """Raised when a card image cannot be found, downloaded or rotated."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.IMAGE,
            message=message,
            detail=detail,
        )


class ConfigurationError(DailyScryError):
    """Raised when a required setting is missing or invalid."""

    def __init__(self, key: str, detail: str | None = None):
        self.key = key
        super().__init__(
            kind=FailureKind.CONFIGURATION,
            message=f"Unable to read configuration variable '{key}'",
            detail=detail,
            suggestion=f"Set {key} in the environment or in .env.",
        )
