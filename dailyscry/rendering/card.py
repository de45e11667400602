"""
Card Renderer.

Turns a Card into the display strings that get published, one per
printed image.

The artist credit is handled asymmetrically:
- SINGLE_FACE and SHARED_IMAGE embed it at the end of their only string
- SEPARATE_IMAGES exposes it on RenderedCard.artist, taken from the first
  face, for the caller to attach after the last printed element
"""

import logging
from dataclasses import dataclass

from dailyscry.models.card import Card, CardFace
from dailyscry.models.failure import DataIntegrityError
from dailyscry.rendering.face import artist_line, render_face
from dailyscry.rendering.layout import RenderStrategy, classify_layout

logger = logging.getLogger(__name__)

FACE_SEPARATOR = "\n\n"


@dataclass(frozen=True, slots=True)
class RenderedCard:
    """
    Display strings of a card.

    Attributes:
        texts: One display string per printed image, never empty
        artist: Separately attached artist credit (SEPARATE_IMAGES only)
    """

    texts: tuple[str, ...]
    artist: str | None = None

    def __post_init__(self) -> None:
        if not self.texts:
            raise DataIntegrityError("Rendered card has no display text")


def render_card(card: Card) -> RenderedCard:
    """
    Render a card according to its layout.

    Args:
        card: The card to render

    Returns:
        RenderedCard with one string per printed image

    Raises:
        UnknownLayoutError: If the layout has no rendering strategy
        DataIntegrityError: If the card lacks data its layout requires
    """
    strategy = classify_layout(card.layout)
    logger.debug("rendering %r with strategy %s", card.name, strategy.value)

    if strategy is RenderStrategy.SINGLE_FACE:
        if card.type_line is None:
            raise DataIntegrityError(f"Card {card.name!r} has no type line")
        return RenderedCard(texts=(render_face(card),))

    faces = _require_faces(card)
    face_texts = tuple(render_face(face, include_artist=False) for face in faces)

    if strategy is RenderStrategy.SHARED_IMAGE:
        combined = FACE_SEPARATOR.join(face_texts) + artist_line(card)
        return RenderedCard(texts=(combined,))

    return RenderedCard(texts=face_texts, artist=artist_line(faces[0]) or None)


def get_artist(card: Card) -> str | None:
    """
    Return the separately attached artist credit of a card.

    Only SEPARATE_IMAGES cards have one; it comes from the first face and
    starts with a blank line ("\\n\\nIllustrated by X").

    Raises:
        UnknownLayoutError: If the layout has no rendering strategy
        DataIntegrityError: If a multi-image card has no faces
    """
    if classify_layout(card.layout) is not RenderStrategy.SEPARATE_IMAGES:
        return None
    return artist_line(_require_faces(card)[0]) or None


def _require_faces(card: Card) -> tuple[CardFace, ...]:
    if not card.card_faces:
        raise DataIntegrityError(
            f"Card {card.name!r} has layout {card.layout.value!r} but no faces",
        )
    return card.card_faces
