"""
DailyScry clients.

HTTP clients for Scryfall, card images, Mastodon and Telegram.
"""

from dailyscry.clients.images import download_images, faces_to_rotate, image_uris, rotate_image
from dailyscry.clients.mastodon import LINK_LENGTH, MastodonClient
from dailyscry.clients.scryfall import ScryfallClient
from dailyscry.clients.telegram import TelegramClient

__all__ = [
    "LINK_LENGTH",
    "MastodonClient",
    "ScryfallClient",
    "TelegramClient",
    "download_images",
    "faces_to_rotate",
    "image_uris",
    "rotate_image",
]
