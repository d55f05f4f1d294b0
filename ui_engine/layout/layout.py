"""
Box layout system.

Arranges a tree of nested boxes inside the viewport. A layout call runs in
three stages over the whole tree:

1. Linearize the backward-linked tree into a parents-first list.
2. Walk the list backwards to accumulate minimum sizes and growth totals
   into each parent.
3. Walk the list forwards to hand out the surplus space and place each box
   inside its parent.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..utils.logging import PerformanceLogger
from .box import Box, EntityId, RectShape
from .errors import TreeError
from .linearize import TreeLinearizer, reset_boxes
from .transform import Scale, pad_in, pad_out, viewport_scale

logger = logging.getLogger(__name__)


class LayoutPhase(Enum):
    """Progress of the current layout call."""
    IDLE = "idle"
    LINEARIZED = "linearized"
    MEASURED = "measured"
    DONE = "done"


class LayoutSystem:
    """
    Arranges every Box component of a scene according to its settings.

    Shapes are written in normalized clip coordinates, where the viewport
    interior spans [-1, 1] on both axes.
    """

    def __init__(self, scene, viewport_size: Sequence[int]):
        """
        Initialize the layout system.

        Args:
            scene: Component store holding the Box components
            viewport_size: Viewport (width, height) in the pixel units used
                by margins and minimum sizes
        """
        self.scene = scene
        self.linearizer = TreeLinearizer()
        self.boxes: List[Box] = []
        self.phase = LayoutPhase.IDLE
        self.viewport_size: Tuple[int, int] = (0, 0)
        self.view_scale: Scale = (0.0, 0.0)
        self.perf = PerformanceLogger(logger, "layout")

        self.set_viewport(viewport_size)

    def set_viewport(self, size: Sequence[int]) -> None:
        """
        Change the viewport size used by subsequent layout calls.

        Args:
            size: Viewport (width, height) in pixels
        """
        self.view_scale = viewport_scale(size)
        self.viewport_size = (size[0], size[1])
        logger.debug(f"Viewport set to {size[0]}x{size[1]}")

    def layout(self) -> None:
        """
        Compute the shape of every box in the scene.

        Raises:
            TreeError: If the boxes do not form a single well-formed tree. No
                box shape is modified in that case.
        """
        self.phase = LayoutPhase.IDLE

        self.perf.start("linearize")
        try:
            order = self.linearizer.linearize(
                ((entity.id, entity.components[0]) for entity in self.scene.iter(Box)),
                self._lookup,
            )
        except TreeError as e:
            self.perf.clear()
            self.boxes = []
            logger.error(f"Layout aborted: {e}")
            raise
        self.perf.end("linearize")

        self.boxes = order
        self.phase = LayoutPhase.LINEARIZED
        reset_boxes(order)

        # Child sizes are final before their parents are fitted around them
        self.perf.start("measure")
        self._measure(order)
        self.perf.end("measure")

        # Parent shapes are final before their children are placed inside them
        self.perf.start("distribute")
        self._distribute(order)
        self.perf.end("distribute")

        logger.debug(f"Laid out {len(order)} boxes")

    def _lookup(self, eid: EntityId) -> Optional[Box]:
        return self.scene.get_one(Box, eid)

    def _parent_of(self, box: Box) -> Box:
        return self.scene.get_one(Box, box.parent)

    def _measure(self, order: List[Box]) -> None:
        if self.phase is not LayoutPhase.LINEARIZED or order is not self.boxes:
            raise RuntimeError("Minimum sizes can only be measured on a freshly linearized tree")

        sx, sy = self.view_scale
        for box in reversed(order):
            settings = box.settings

            # All children have been added in by now
            box._content = box.shape.dim(settings.direction.axis)
            if box.parent is None:
                continue

            parent = self._parent_of(box)
            box.shape.w = max(box.shape.w, sx * settings.min_size[0])
            box.shape.h = max(box.shape.h, sy * settings.min_size[1])

            outer = pad_out(box.shape, settings.margins, self.view_scale)
            parent.shape.w += outer.w
            parent.shape.h += outer.h
            parent._grow_total += settings.grow

        self.phase = LayoutPhase.MEASURED

    def _distribute(self, order: List[Box]) -> None:
        if self.phase is not LayoutPhase.MEASURED or order is not self.boxes:
            raise RuntimeError("Space can only be distributed after minimum sizes are measured")

        scale = self.view_scale
        for box in order:
            settings = box.settings
            own_axis = settings.direction.axis

            if box.parent is None:
                shape = pad_in(RectShape(-1.0, -1.0, 2.0, 2.0), settings.margins, scale)
            else:
                parent = self._parent_of(box)
                main_axis = parent.settings.direction.axis
                cross_axis = 1 - main_axis

                shape = pad_in(parent.shape, settings.margins, scale)
                if parent._grow_total > 0:
                    share = settings.grow * parent._extra / parent._grow_total
                else:
                    share = 0.0

                shape.set_dim(main_axis, max(0.0, box.shape.dim(main_axis) + share))
                shape.set_coord(main_axis, shape.coord(main_axis) + parent._offset)
                if not settings.fill_cross:
                    shape.set_dim(cross_axis, box.shape.dim(cross_axis))

                parent._offset += pad_out(shape, settings.margins, scale).dim(main_axis)

            # Surplus handed on to this box's own children
            box._extra = max(0.0, shape.dim(own_axis) - box._content)
            box._offset = 0.0
            box.shape = shape

        self.phase = LayoutPhase.DONE
