"""
Box layout implementation.
This package arranges trees of nested boxes inside a viewport.
"""

from .box import Box, Direction, EntityId, Margins, RectShape, Settings
from .errors import InconsistentSibling, MissingRoot, MultipleRoots, TreeError, UnknownBox
from .layout import LayoutPhase, LayoutSystem
from .linearize import TreeLinearizer

__all__ = [
    'Box', 'Direction', 'EntityId', 'Margins', 'RectShape', 'Settings',
    'TreeError', 'MultipleRoots', 'MissingRoot', 'InconsistentSibling', 'UnknownBox',
    'LayoutPhase', 'LayoutSystem', 'TreeLinearizer',
]
