"""
DailyScry services.

Card selection and per-channel publishing.
"""

from dailyscry.services.card_source import (
    DEFAULT_FILTERS,
    CardFilter,
    ContentWarningFilter,
    IgnoredOracleIdFilter,
    random_card,
)
from dailyscry.services.publisher import (
    HASHTAGS,
    MediaChannel,
    format_for_stdout,
    mastodon_reservations,
    mastodon_trailer,
    publish_to_mastodon,
    publish_to_telegram,
)

__all__ = [
    "CardFilter",
    "ContentWarningFilter",
    "DEFAULT_FILTERS",
    "HASHTAGS",
    "IgnoredOracleIdFilter",
    "MediaChannel",
    "format_for_stdout",
    "mastodon_reservations",
    "mastodon_trailer",
    "publish_to_mastodon",
    "publish_to_telegram",
    "random_card",
]
