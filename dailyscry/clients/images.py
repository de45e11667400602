"""
Card image fetching.

Downloads the PNG images of a card: one for cards printed on a single
image, one per face for cards printed on several. Landscape prints
(planes, most split cards, sieges) are rotated upright.
"""

import asyncio
import io
import logging
from pathlib import Path

import httpx
from PIL import Image

from dailyscry.models.card import Card, Layout
from dailyscry.models.failure import DataIntegrityError, ImageError
from dailyscry.rendering.layout import RenderStrategy, classify_layout

logger = logging.getLogger(__name__)

USER_AGENT = "DailyScry/1.0"


def image_uris(card: Card) -> list[str]:
    """
    Return the PNG URLs to download, in display order.

    Raises:
        UnknownLayoutError: If the layout has no rendering strategy
        DataIntegrityError: If a multi-image card has no faces
        ImageError: If an image URL is missing
    """
    if classify_layout(card.layout) is RenderStrategy.SEPARATE_IMAGES:
        if not card.card_faces:
            raise DataIntegrityError(f"Card {card.name!r} has no faces to download")
        uris = [face.image_uri for face in card.card_faces]
    else:
        uris = [card.image_uri]

    if any(uri is None for uri in uris):
        raise ImageError("Unable to find image png", detail=card.name)
    return [uri for uri in uris if uri is not None]


def faces_to_rotate(card: Card) -> set[int]:
    """
    Return the indices of downloaded images that must be rotated.

    Planar cards are printed landscape. Split cards are too, except
    Aftermath cards whose second half is printed sideways on a portrait card.
    Battles (sieges) have a landscape front face.
    """
    if card.layout is Layout.PLANAR:
        return {0}

    if card.layout is Layout.SPLIT and len(card.card_faces) >= 2:
        second_oracle_text = card.card_faces[1].oracle_text or ""
        if "Aftermath" not in second_oracle_text:
            return {0}
        return set()

    if classify_layout(card.layout) is RenderStrategy.SEPARATE_IMAGES:
        if "Siege" in (card.type_line or ""):
            return {0}
        if card.card_faces and "Siege" in card.card_faces[0].type_line:
            return {0}

    return set()


def rotate_image(data: bytes) -> bytes:
    """
    Rotate a PNG image 90 degrees clockwise.

    Raises:
        ImageError: If the image cannot be decoded
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            rotated = image.transpose(Image.Transpose.ROTATE_270)
            output = io.BytesIO()
            rotated.save(output, format="PNG")
    except OSError as e:
        raise ImageError("Can't rotate image", detail=str(e)) from e
    return output.getvalue()


async def download_images(
    card: Card,
    image_path: Path | None = None,
    timeout: float = 30.0,
) -> list[bytes]:
    """
    Download, and rotate where needed, the images of a card.

    Args:
        card: The card whose images to fetch
        image_path: Directory to also write the images to (optional)
        timeout: Request timeout in seconds

    Returns:
        PNG bytes, one entry per display string of the rendered card

    Raises:
        ImageError: If an image is missing, fails to download or to rotate
    """
    uris = image_uris(card)

    try:
        async with httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            timeout=timeout,
        ) as client:
            responses = await asyncio.gather(*(client.get(uri) for uri in uris))
            for response in responses:
                response.raise_for_status()
    except httpx.HTTPError as e:
        raise ImageError("Unable to download image", detail=str(e)) from e

    rotate = faces_to_rotate(card)
    images = [
        rotate_image(response.content) if index in rotate else response.content
        for index, response in enumerate(responses)
    ]

    if image_path is not None:
        _write_images(images, image_path)

    logger.debug("downloaded %d image(s) for %r", len(images), card.name)
    return images


def _write_images(images: list[bytes], image_path: Path) -> None:
    image_path.mkdir(parents=True, exist_ok=True)
    if len(images) == 1:
        names = ["card.png"]
    else:
        names = [f"face_{index}.png" for index in range(len(images))]

    for name, data in zip(names, images):
        (image_path / name).write_bytes(data)
