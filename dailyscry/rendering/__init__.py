"""
Card rendering.

Turns structured card records into the plain text that gets published.
"""

from dailyscry.rendering.card import RenderedCard, get_artist, render_card
from dailyscry.rendering.face import FaceKind, render_face, resolve_face_kind
from dailyscry.rendering.layout import RenderStrategy, classify_layout

__all__ = [
    "FaceKind",
    "RenderStrategy",
    "RenderedCard",
    "classify_layout",
    "get_artist",
    "render_card",
    "render_face",
    "resolve_face_kind",
]
