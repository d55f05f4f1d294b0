from enum import Enum
from typing import Optional, Tuple

# Entities are referred to by the integer ids handed out by the scene store
EntityId = int


class Direction(Enum):
    """Main axis along which a box arranges its children."""
    ROW = "row"
    COL = "col"

    @property
    def axis(self) -> int:
        """Index of the main axis: 0 for horizontal, 1 for vertical."""
        return 0 if self is Direction.ROW else 1


class Margins:
    """
    Margins around a box in integer pixel units.

    Stored in the order left, bottom, right, top.
    """

    __slots__ = ('l', 'b', 'r', 't')

    def __init__(self, l: int = 0, b: int = 0, r: int = 0, t: int = 0):
        for side, value in (('l', l), ('b', b), ('r', r), ('t', t)):
            if value < 0:
                raise ValueError(f"margin {side} must be non-negative, got {value}")
        self.l = l
        self.b = b
        self.r = r
        self.t = t

    def __eq__(self, other) -> bool:
        if not isinstance(other, Margins):
            return NotImplemented
        return (self.l, self.b, self.r, self.t) == (other.l, other.b, other.r, other.t)

    def __repr__(self) -> str:
        return f"Margins(l={self.l}, b={self.b}, r={self.r}, t={self.t})"


class Settings:
    """
    Layout settings of a box.

    Supplied by the code that builds the box tree and never changed by layout.
    """

    def __init__(self,
                 direction: Direction = Direction.ROW,
                 grow: float = 1,
                 fill_cross: bool = True,
                 margins: Optional[Margins] = None,
                 min_size: Tuple[int, int] = (0, 0)):
        """
        Initialize box settings.

        Args:
            direction: Main axis used to arrange the box's children
            grow: Weight of the box's share of its parent's surplus
            fill_cross: Whether the box stretches across its parent's cross axis
            margins: Pixel margins around the box
            min_size: Minimum (width, height) in pixels
        """
        if grow < 0:
            raise ValueError(f"grow must be non-negative, got {grow}")
        if len(min_size) != 2 or min_size[0] < 0 or min_size[1] < 0:
            raise ValueError(f"min_size must be two non-negative values, got {min_size}")

        self.direction = direction
        self.grow = grow
        self.fill_cross = fill_cross
        self.margins = margins if margins is not None else Margins()
        self.min_size = (min_size[0], min_size[1])

    def __repr__(self) -> str:
        return (f"Settings(direction={self.direction.value}, grow={self.grow}, "
                f"fill_cross={self.fill_cross}, margins={self.margins!r}, "
                f"min_size={self.min_size})")


class RectShape:
    """Axis-aligned rectangle in normalized clip coordinates."""

    __slots__ = ('x', 'y', 'w', 'h')

    def __init__(self, x: float = 0.0, y: float = 0.0, w: float = 0.0, h: float = 0.0):
        self.x = x
        self.y = y
        self.w = w
        self.h = h

    def coord(self, axis: int) -> float:
        """Get the position along an axis (0 = x, 1 = y)."""
        return self.x if axis == 0 else self.y

    def set_coord(self, axis: int, value: float) -> None:
        if axis == 0:
            self.x = value
        else:
            self.y = value

    def dim(self, axis: int) -> float:
        """Get the length along an axis (0 = w, 1 = h)."""
        return self.w if axis == 0 else self.h

    def set_dim(self, axis: int, value: float) -> None:
        if axis == 0:
            self.w = value
        else:
            self.h = value

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RectShape):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self) -> str:
        return f"RectShape(x={self.x}, y={self.y}, w={self.w}, h={self.h})"


class Box:
    """
    A node in a tree of nested boxes laid out by the LayoutSystem.

    The tree is stored backwards: each box knows only its parent and its
    previous sibling. The first child of a parent has no sibling and the root
    has no parent.
    """

    def __init__(self, parent: Optional[EntityId] = None,
                 sibling: Optional[EntityId] = None,
                 settings: Optional[Settings] = None):
        """
        Initialize a box.

        Args:
            parent: Entity id of the parent box
            sibling: Entity id of the previous sibling box
            settings: Layout settings
        """
        self.parent = parent
        self.sibling = sibling
        self.settings = settings if settings is not None else Settings()

        # Output of layout
        self.shape = RectShape()

        # Scratch state owned by a running layout call
        self._visited: int = 0        # Run stamp of the linearization run that reached this box
        self._extra: float = 0.0      # Surplus along the main axis
        self._grow_total: float = 0.0  # Sum of the children's grow factors
        self._offset: float = 0.0     # Cursor for placing the next child
        self._content: float = 0.0    # Children's outer length along this box's main axis

    def __repr__(self) -> str:
        return f"Box(parent={self.parent}, sibling={self.sibling}, shape={self.shape!r})"
