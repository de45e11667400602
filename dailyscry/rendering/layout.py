"""
Layout classification.

Maps a card's layout tag to the strategy used to render it and to fetch
its images.
"""

from enum import Enum

from dailyscry.models.card import Layout
from dailyscry.models.failure import UnknownLayoutError


class RenderStrategy(str, Enum):
    """How a card is printed, and therefore how it is rendered."""

    # One visual object, text lives on the card
    SINGLE_FACE = "single_face"

    # Several faces printed on one image
    SHARED_IMAGE = "shared_image"

    # Each face printed as its own image
    SEPARATE_IMAGES = "separate_images"


_STRATEGIES: dict[Layout, RenderStrategy] = {
    Layout.NORMAL: RenderStrategy.SINGLE_FACE,
    Layout.MELD: RenderStrategy.SINGLE_FACE,
    Layout.LEVELER: RenderStrategy.SINGLE_FACE,
    Layout.CLASS: RenderStrategy.SINGLE_FACE,
    Layout.CASE: RenderStrategy.SINGLE_FACE,
    Layout.SAGA: RenderStrategy.SINGLE_FACE,
    Layout.PROTOTYPE: RenderStrategy.SINGLE_FACE,
    Layout.HOST: RenderStrategy.SINGLE_FACE,
    Layout.AUGMENT: RenderStrategy.SINGLE_FACE,
    Layout.TOKEN: RenderStrategy.SINGLE_FACE,
    Layout.EMBLEM: RenderStrategy.SINGLE_FACE,
    Layout.MUTATE: RenderStrategy.SINGLE_FACE,
    Layout.PLANAR: RenderStrategy.SINGLE_FACE,
    Layout.SCHEME: RenderStrategy.SINGLE_FACE,
    Layout.VANGUARD: RenderStrategy.SINGLE_FACE,
    Layout.SPLIT: RenderStrategy.SHARED_IMAGE,
    Layout.FLIP: RenderStrategy.SHARED_IMAGE,
    Layout.ADVENTURE: RenderStrategy.SHARED_IMAGE,
    Layout.TRANSFORM: RenderStrategy.SEPARATE_IMAGES,
    Layout.MODAL_DFC: RenderStrategy.SEPARATE_IMAGES,
    Layout.REVERSIBLE_CARD: RenderStrategy.SEPARATE_IMAGES,
    Layout.DOUBLE_FACED_TOKEN: RenderStrategy.SEPARATE_IMAGES,
    Layout.ART_SERIES: RenderStrategy.SEPARATE_IMAGES,
}


def classify_layout(layout: Layout) -> RenderStrategy:
    """
    Resolve the rendering strategy for a layout tag.

    Args:
        layout: The card's layout tag

    Returns:
        The strategy that prints this layout

    Raises:
        UnknownLayoutError: If the layout has no strategy
    """
    try:
        return _STRATEGIES[layout]
    except KeyError:
        raise UnknownLayoutError(layout.value) from None
