"""
Scene storage and loading.
"""

from .loader import LoadedScene, Name, SceneError, SceneLoader, parse_box_style
from .store import Entity, Scene

__all__ = ['Entity', 'Scene', 'LoadedScene', 'Name', 'SceneError', 'SceneLoader', 'parse_box_style']
