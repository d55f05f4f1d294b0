"""
Rendering of laid-out boxes.
This package rasterizes box shapes into images with Pillow.
"""

from .renderer import Rect, RenderSystem, Renderer, box_rect, resolve_color

__all__ = ['Rect', 'RenderSystem', 'Renderer', 'box_rect', 'resolve_color']
