from dailyscry.models.card import Card, CardFace, Layout
from dailyscry.models.failure import (
    BudgetExhaustedError,
    CardSourceError,
    ChannelError,
    ConfigurationError,
    DailyScryError,
    DataIntegrityError,
    FailureDetail,
    FailureKind,
    ImageError,
    PublishChainError,
    UnknownLayoutError,
)

__all__ = [
    "BudgetExhaustedError",
    "Card",
    "CardFace",
    "CardSourceError",
    "ChannelError",
    "ConfigurationError",
    "DailyScryError",
    "DataIntegrityError",
    "FailureDetail",
    "FailureKind",
    "ImageError",
    "Layout",
    "PublishChainError",
    "UnknownLayoutError",
]
