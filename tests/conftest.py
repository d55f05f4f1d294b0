"""
Shared fixtures for the UI engine tests.
"""

from typing import Dict, List, Optional, Tuple

import pytest

from ui_engine.layout import Box, LayoutSystem, Settings
from ui_engine.scene import Scene

# Logical trees are written as (node, parent) pairs listed in sibling order
TreeLinks = List[Tuple[str, Optional[str]]]


def link_boxes(links: TreeLinks, ids: Dict[str, int]) -> Dict[str, Box]:
    """Create boxes for a logical tree, linking each to its previous sibling."""
    boxes = {}
    last_child: Dict[Optional[str], str] = {}
    for node, parent in links:
        sibling = last_child.get(parent) if parent is not None else None
        boxes[node] = Box(
            parent=ids[parent] if parent is not None else None,
            sibling=ids[sibling] if sibling is not None else None,
        )
        if parent is not None:
            last_child[parent] = node
    return boxes


def add_box(scene: Scene, parent: Optional[int] = None, sibling: Optional[int] = None,
            **settings) -> int:
    """Create an entity holding a Box with the given settings."""
    return scene.create(Box(parent, sibling, Settings(**settings)))


def add_children(scene: Scene, parent: int, specs: List[dict]) -> List[int]:
    """Create children of a box in order, one per settings dict."""
    ids = []
    previous = None
    for spec in specs:
        previous = add_box(scene, parent, previous, **spec)
        ids.append(previous)
    return ids


@pytest.fixture
def scene() -> Scene:
    return Scene()


@pytest.fixture
def system(scene: Scene) -> LayoutSystem:
    return LayoutSystem(scene, (800, 600))
