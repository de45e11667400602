"""
DailyScry parsers.

Parsers for external card data formats.
"""

from dailyscry.parsers.scryfall import card_from_scryfall, face_from_scryfall, load_cards

__all__ = [
    "card_from_scryfall",
    "face_from_scryfall",
    "load_cards",
]
