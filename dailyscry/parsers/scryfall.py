"""
Scryfall card parser.

Converts Scryfall card objects (JSON) into Card models.

Card objects: https://scryfall.com/docs/api/cards
"""

import json
from pathlib import Path
from typing import Any

from dailyscry.models.card import Card, CardFace, Layout


def _png_uri(data: dict[str, Any]) -> str | None:
    image_uris = data.get("image_uris") or {}
    png = image_uris.get("png")
    return str(png) if png is not None else None


def face_from_scryfall(data: dict[str, Any]) -> CardFace:
    """
    Build a CardFace from a Scryfall card face object.

    Raises:
        DataIntegrityError: If the face has no type line
    """
    return CardFace(
        name=data.get("name", ""),
        # Scryfall sends "" for faces without a cost, but older objects omit it
        mana_cost=data.get("mana_cost", ""),
        type_line=data.get("type_line"),  # type: ignore[arg-type]
        oracle_text=data.get("oracle_text"),
        flavor_text=data.get("flavor_text"),
        power=data.get("power"),
        toughness=data.get("toughness"),
        loyalty=data.get("loyalty"),
        artist=data.get("artist"),
        image_uri=_png_uri(data),
    )


def card_from_scryfall(data: dict[str, Any]) -> Card:
    """
    Build a Card from a Scryfall card object.

    Args:
        data: Decoded JSON of a Scryfall card

    Returns:
        The normalized Card

    Raises:
        DataIntegrityError: If the card or one of its faces is malformed
    """
    faces = tuple(face_from_scryfall(face) for face in data.get("card_faces") or ())

    return Card(
        name=data.get("name"),
        layout=Layout.parse(data.get("layout")),
        mana_cost=data.get("mana_cost"),
        type_line=data.get("type_line"),
        oracle_text=data.get("oracle_text"),
        flavor_text=data.get("flavor_text"),
        power=data.get("power"),
        toughness=data.get("toughness"),
        loyalty=data.get("loyalty"),
        hand_modifier=data.get("hand_modifier"),
        life_modifier=data.get("life_modifier"),
        artist=data.get("artist"),
        card_faces=faces,
        oracle_id=data.get("oracle_id"),
        scryfall_uri=data.get("scryfall_uri"),
        content_warning=bool(data.get("content_warning", False)),
        image_uri=_png_uri(data),
    )


def load_cards(path: Path) -> dict[str, Card]:
    """
    Load a JSON list of Scryfall card objects, keyed by card name.

    Args:
        path: Path to a JSON file holding a list of card objects

    Returns:
        Dict mapping card names to Cards
    """
    with open(path, encoding="utf-8") as f:
        cards = json.load(f)

    return {card["name"]: card_from_scryfall(card) for card in cards}
