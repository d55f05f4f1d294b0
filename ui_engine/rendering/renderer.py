"""
Offscreen rectangle renderer.
This module paints laid-out boxes into a Pillow image.
"""

import logging
import math
from typing import Callable, Sequence, Tuple, Union

from PIL import Image, ImageColor, ImageDraw

from ..layout.box import Box, EntityId, RectShape
from ..layout.transform import clip_to_pixels

logger = logging.getLogger(__name__)

# A CSS color string or an RGB(A) tuple of floats in [0, 1]
Color = Union[str, Sequence[float]]
RGBA = Tuple[int, int, int, int]
ShapeFn = Callable[[object, EntityId], RectShape]


def resolve_color(color: Color) -> RGBA:
    """
    Convert a color to an 8-bit RGBA tuple.

    Args:
        color: CSS color string (e.g. "#ff8800", "red", "rgb(1, 2, 3)") or
            3 or 4 floats in [0, 1]

    Returns:
        RGBA: 8-bit channels

    Raises:
        ValueError: If the color cannot be understood
    """
    if isinstance(color, str):
        rgb = ImageColor.getrgb(color)
        if len(rgb) == 3:
            return (rgb[0], rgb[1], rgb[2], 255)
        return (rgb[0], rgb[1], rgb[2], rgb[3])

    if not isinstance(color, (list, tuple)) or not all(
            isinstance(c, (int, float)) and not isinstance(c, bool) for c in color):
        raise ValueError(f"Colors must be a string or a sequence of numbers, got {color!r}")

    channels = list(color)
    if len(channels) == 3:
        channels.append(1.0)
    if len(channels) != 4 or not all(0.0 <= c <= 1.0 for c in channels):
        raise ValueError(f"Color tuples need 3 or 4 channels in [0, 1], got {color!r}")
    return tuple(int(math.floor(c * 255 + 0.5)) for c in channels)


def box_rect(scene, eid: EntityId) -> RectShape:
    """Shape callback that reads the shape computed for an entity's Box."""
    box = scene.get_one(Box, eid)
    if box is None:
        raise KeyError(f"Entity {eid} has no Box component")
    return box.shape


class Rect:
    """Displays a colored rectangle whose shape is supplied by a callback."""

    def __init__(self, color: Color, shape_fn: ShapeFn = box_rect):
        """
        Initialize a rect component.

        Args:
            color: Fill color
            shape_fn: Callback returning the rectangle for (scene, entity id)
        """
        self.color = resolve_color(color)
        self.shape_fn = shape_fn

    def draw(self, scene, eid: EntityId, renderer: 'Renderer') -> None:
        renderer.draw_rect(self.shape_fn(scene, eid), self.color)


class Renderer:
    """Paints clip-space rectangles into an RGBA image."""

    def __init__(self, size: Sequence[int], background: Color = "#000000"):
        """
        Initialize the renderer.

        Args:
            size: Image (width, height) in pixels
            background: Color used by clear()
        """
        self.size = (int(size[0]), int(size[1]))
        self.background = resolve_color(background)
        self.image = Image.new("RGBA", self.size, self.background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def clear(self) -> None:
        """Fill the whole image with the background color."""
        self._draw.rectangle([0, 0, self.size[0], self.size[1]], fill=self.background)

    def draw_rect(self, rect: RectShape, color: RGBA) -> None:
        """
        Fill a rectangle given in clip coordinates.

        Pixels are covered when their centers fall inside the rectangle.
        """
        left, top, right, bottom = clip_to_pixels(rect, self.size)
        x0 = int(math.floor(left + 0.5))
        y0 = int(math.floor(top + 0.5))
        x1 = int(math.floor(right + 0.5))
        y1 = int(math.floor(bottom + 0.5))
        if x1 <= x0 or y1 <= y0:
            return
        # Pillow rectangles include their end coordinates
        self._draw.rectangle([x0, y0, x1 - 1, y1 - 1], fill=color)

    def save(self, path: str) -> None:
        self.image.save(path)
        logger.info(f"Rendered image saved to {path}")


class RenderSystem:
    """Draws every Rect component of a scene."""

    def __init__(self, scene, size: Sequence[int], background: Color = "#000000"):
        self.scene = scene
        self.renderer = Renderer(size, background)

    def render(self) -> Image.Image:
        """
        Redraw the scene.

        Returns:
            Image.Image: The rendered image
        """
        self.renderer.clear()
        count = 0
        for entity in self.scene.iter(Rect):
            entity.components[0].draw(self.scene, entity.id, self.renderer)
            count += 1
        logger.debug(f"Rendered {count} rects")
        return self.renderer.image
