"""
Face Renderer.

Renders one card or face record into a block of text. Every section is a
small function returning its own fragment; the composer concatenates the
fragments selected by the record's resolved FaceKind.

Example (Grizzly Bears, https://scryfall.com/card/lea/199/grizzly-bears):

    Grizzly Bears	{1}{G}
    Creature — Bear

    Don't try to outrun one of Dominia's Grizzlies; ...

    2/2

    Illustrated by Jeff A. Menges
"""

from collections.abc import Callable
from enum import Enum

from dailyscry.models.card import Card, CardFace

Record = Card | CardFace


class FaceKind(str, Enum):
    """Which sections a record renders, resolved from its type line."""

    CREATURE = "creature"
    PLANESWALKER = "planeswalker"
    VANGUARD = "vanguard"
    NON_CREATURE = "non_creature"
    TOKEN = "token"
    ART_CARD = "art_card"
    UNMATCHED = "unmatched"


NON_CREATURE_TYPES = (
    "Instant",
    "Sorcery",
    "Artifact",
    "Enchantment",
    "Land",
    "Phenomenon",
    "Plane",
    "Scheme",
    "Emblem",
    "Battle",
)

# Evaluated in order, first match wins
_KIND_RULES: tuple[tuple[FaceKind, Callable[[str], bool]], ...] = (
    (FaceKind.CREATURE, lambda type_line: "Creature" in type_line),
    (FaceKind.PLANESWALKER, lambda type_line: "Planeswalker" in type_line),
    (FaceKind.VANGUARD, lambda type_line: "Vanguard" in type_line),
    (
        FaceKind.NON_CREATURE,
        lambda type_line: any(word in type_line for word in NON_CREATURE_TYPES),
    ),
    (FaceKind.TOKEN, lambda type_line: type_line == "Token"),
    (FaceKind.ART_CARD, lambda type_line: type_line == "Card"),
)


def resolve_face_kind(type_line: str) -> FaceKind:
    """
    Resolve the FaceKind of a type line.

    Args:
        type_line: Full type line (e.g., "Legendary Creature — Human Soldier")

    Returns:
        The first matching kind, or UNMATCHED
    """
    for kind, matches in _KIND_RULES:
        if matches(type_line):
            return kind
    return FaceKind.UNMATCHED


# =============================================================================
# SECTIONS
# =============================================================================


def name_and_mana_cost(record: Record) -> str:
    name = record.name or ""
    mana_cost = record.mana_cost or ""
    if mana_cost:
        return f"{name}\t{mana_cost}"
    return name


def type_line(record: Record) -> str:
    return f"\n{record.type_line or ''}"


def oracle_text(record: Record) -> str:
    if record.oracle_text:
        return f"\n{record.oracle_text}"
    return ""


def flavor_text(record: Record) -> str:
    if record.flavor_text is not None:
        return f"\n\n{record.flavor_text}"
    return ""


def power_and_toughness(record: Record) -> str:
    if record.power is None and record.toughness is None:
        return ""
    return f"\n\n{record.power or ''}/{record.toughness or ''}"


def loyalty(record: Record) -> str:
    if record.loyalty is not None:
        return f"\nLoyalty: {record.loyalty}"
    return ""


def vanguard_stats(record: Record) -> str:
    # There are no multi-faced vanguard cards
    if not isinstance(record, Card):
        return ""
    if record.hand_modifier is None or record.life_modifier is None:
        return ""
    return f"\n\nHand Size: {record.hand_modifier}\nStarting Life: {record.life_modifier}"


def artist_line(record: Record) -> str:
    """Return the "Illustrated by" credit, or an empty string."""
    if record.artist is not None:
        return f"\n\nIllustrated by {record.artist}"
    return ""


_SECTIONS: dict[FaceKind, tuple[Callable[[Record], str], ...]] = {
    FaceKind.CREATURE: (
        name_and_mana_cost,
        type_line,
        oracle_text,
        flavor_text,
        power_and_toughness,
    ),
    FaceKind.PLANESWALKER: (name_and_mana_cost, type_line, oracle_text, loyalty),
    FaceKind.VANGUARD: (
        name_and_mana_cost,
        type_line,
        oracle_text,
        vanguard_stats,
        flavor_text,
    ),
    FaceKind.NON_CREATURE: (name_and_mana_cost, type_line, oracle_text, flavor_text),
    FaceKind.TOKEN: (name_and_mana_cost, type_line),
    FaceKind.ART_CARD: (name_and_mana_cost, type_line),
    FaceKind.UNMATCHED: (name_and_mana_cost, type_line),
}


def render_face(record: Record, *, include_artist: bool = True) -> str:
    """
    Render a card or face into a text block.

    Args:
        record: The card (single-faced) or one face of a multi-faced card
        include_artist: Whether to end the block with the artist credit

    Returns:
        The rendered text block
    """
    kind = resolve_face_kind(record.type_line or "")
    fragments = [section(record) for section in _SECTIONS[kind]]
    if include_artist:
        fragments.append(artist_line(record))
    return "".join(fragments)
