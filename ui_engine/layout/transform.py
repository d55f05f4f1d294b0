"""
Conversions between pixel units and normalized clip coordinates.

Clip space spans [-1, 1] on both axes, so one pixel of a viewport that is
``width`` pixels wide measures ``2 / width`` clip units horizontally.
"""

from typing import Sequence, Tuple

from .box import Margins, RectShape

Scale = Tuple[float, float]


def viewport_scale(size: Sequence[int]) -> Scale:
    """
    Compute the pixel-to-clip scale of a viewport.

    Args:
        size: Viewport (width, height) in pixels

    Returns:
        Scale: (sx, sy) clip units per pixel
    """
    if len(size) != 2:
        raise ValueError(f"viewport size must have two components, got {size!r}")
    width, height = size
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"viewport dimensions must be positive integers, got {size!r}")
    return (2.0 / width, 2.0 / height)


def pad_out(rect: RectShape, margins: Margins, scale: Scale) -> RectShape:
    """Grow a rectangle outwards by its margins."""
    sx, sy = scale
    return RectShape(
        x=rect.x - sx * margins.l,
        y=rect.y - sy * margins.b,
        w=rect.w + sx * (margins.l + margins.r),
        h=rect.h + sy * (margins.b + margins.t),
    )


def pad_in(rect: RectShape, margins: Margins, scale: Scale) -> RectShape:
    """Shrink a rectangle inwards by margins, never below zero size."""
    sx, sy = scale
    return RectShape(
        x=rect.x + sx * margins.l,
        y=rect.y + sy * margins.b,
        w=max(0.0, rect.w - sx * (margins.l + margins.r)),
        h=max(0.0, rect.h - sy * (margins.b + margins.t)),
    )


def clip_to_pixels(rect: RectShape, size: Sequence[int]) -> Tuple[float, float, float, float]:
    """
    Map a clip-space rectangle to pixel edges with the origin at the top left.

    Args:
        rect: Rectangle in clip coordinates (y pointing up)
        size: Viewport (width, height) in pixels

    Returns:
        Tuple: (left, top, right, bottom) in pixels
    """
    width, height = size
    left = (rect.x + 1.0) * 0.5 * width
    right = (rect.x + rect.w + 1.0) * 0.5 * width
    top = (1.0 - (rect.y + rect.h)) * 0.5 * height
    bottom = (1.0 - rect.y) * 0.5 * height
    return (left, top, right, bottom)
