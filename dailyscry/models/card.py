"""
Card Models.

Normalized, immutable representation of a Scryfall card and its faces.

INVARIANTS:
- A card has either no faces or two or more faces, never exactly one
- A face always carries a mana cost and a type line (possibly empty)
- All models are frozen (immutable after construction)
"""

from dataclasses import dataclass
from enum import Enum

from dailyscry.models.failure import DataIntegrityError


class Layout(str, Enum):
    """Print structure of a card, as tagged by Scryfall."""

    NORMAL = "normal"
    SPLIT = "split"
    FLIP = "flip"
    TRANSFORM = "transform"
    MODAL_DFC = "modal_dfc"
    MELD = "meld"
    LEVELER = "leveler"
    CLASS = "class"
    CASE = "case"
    SAGA = "saga"
    ADVENTURE = "adventure"
    MUTATE = "mutate"
    PROTOTYPE = "prototype"
    BATTLE = "battle"
    PLANAR = "planar"
    SCHEME = "scheme"
    VANGUARD = "vanguard"
    TOKEN = "token"
    DOUBLE_FACED_TOKEN = "double_faced_token"
    EMBLEM = "emblem"
    AUGMENT = "augment"
    HOST = "host"
    ART_SERIES = "art_series"
    REVERSIBLE_CARD = "reversible_card"

    # Any tag Scryfall adds later
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "Layout":
        """Parse a Scryfall layout tag, mapping unrecognized tags to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class CardFace:
    """
    One printed face of a multi-faced card.

    Attributes:
        name: Face name (e.g., "Stand")
        mana_cost: Mana cost in braces notation, empty for lands
        type_line: Full type line (e.g., "Instant")
        oracle_text: Rules text
        flavor_text: Flavor text
        power: Creature power
        toughness: Creature toughness
        loyalty: Planeswalker starting loyalty
        artist: Illustrator credit for this face
        image_uri: PNG image URL when the face has its own image
    """

    name: str
    mana_cost: str
    type_line: str
    oracle_text: str | None = None
    flavor_text: str | None = None
    power: str | None = None
    toughness: str | None = None
    loyalty: str | None = None
    artist: str | None = None
    image_uri: str | None = None

    def __post_init__(self) -> None:
        if self.mana_cost is None:
            raise DataIntegrityError(f"Face {self.name!r} has no mana cost")
        if self.type_line is None:
            raise DataIntegrityError(f"Face {self.name!r} has no type line")


@dataclass(frozen=True, slots=True)
class Card:
    """
    A whole card, as fetched from Scryfall.

    Single-faced cards keep their text directly on the card; multi-faced
    cards keep it on `card_faces`.

    Attributes:
        name: Card name (for multi-faced cards, "Front // Back")
        layout: Print structure tag
        mana_cost: Mana cost in braces notation
        type_line: Full type line (e.g., "Creature — Bear")
        oracle_text: Rules text
        flavor_text: Flavor text
        power: Creature power
        toughness: Creature toughness
        loyalty: Planeswalker starting loyalty
        hand_modifier: Vanguard hand size modifier
        life_modifier: Vanguard starting life modifier
        artist: Illustrator credit
        card_faces: Faces of a multi-faced card, empty otherwise
        oracle_id: Scryfall oracle ID (stable across printings)
        scryfall_uri: Link to the card page on Scryfall
        content_warning: True if Scryfall flags the card's content
        image_uri: PNG image URL of the whole card
    """

    name: str | None = None
    layout: Layout = Layout.NORMAL
    mana_cost: str | None = None
    type_line: str | None = None
    oracle_text: str | None = None
    flavor_text: str | None = None
    power: str | None = None
    toughness: str | None = None
    loyalty: str | None = None
    hand_modifier: str | None = None
    life_modifier: str | None = None
    artist: str | None = None
    card_faces: tuple[CardFace, ...] = ()
    oracle_id: str | None = None
    scryfall_uri: str | None = None
    content_warning: bool = False
    image_uri: str | None = None

    def __post_init__(self) -> None:
        if len(self.card_faces) == 1:
            raise DataIntegrityError(
                f"Card {self.name!r} has exactly one face",
                detail="single-faced data belongs on the card itself",
            )

    @property
    def is_multi_faced(self) -> bool:
        """True if the card's text lives on its faces."""
        return len(self.card_faces) >= 2
