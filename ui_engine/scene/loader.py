"""
Scene description loader.

Builds a scene of boxes from a JSON document of nested nodes::

    {
        "viewport": [800, 600],
        "root": {
            "name": "root",
            "style": "flex-direction: row; margin: 4px",
            "color": "#202020",
            "children": [
                {"name": "left", "style": "flex-grow: 1", "color": "red"},
                {"name": "right", "style": "flex-grow: 2; min-width: 40px"}
            ]
        }
    }

Layout settings are written as CSS declarations and parsed with cssutils.
"""

import json
import logging
import re
from collections import deque
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

import cssutils

from ..layout.box import Box, Direction, EntityId, Margins, Settings
from ..rendering.renderer import Rect
from .store import Scene

# cssutils reports every non-CSS2 property such as flex-grow; keep it quiet
cssutils.log.setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)

_LENGTH_RE = re.compile(r'^([0-9]+(?:\.[0-9]*)?)(px)?$')

DIRECTIONS = {
    'row': Direction.ROW,
    'column': Direction.COL,
    'col': Direction.COL,
}

MARGIN_SIDES = {
    'margin-left': 'l',
    'margin-bottom': 'b',
    'margin-right': 'r',
    'margin-top': 't',
}


class SceneError(ValueError):
    """Raised when a scene description is invalid."""


class Name:
    """Human readable name of an entity."""

    def __init__(self, value: str):
        self.value = value

    def __repr__(self) -> str:
        return f"Name({self.value!r})"


class LoadedScene(NamedTuple):
    """Result of loading a scene description."""
    scene: Scene
    root: EntityId
    names: Dict[str, EntityId]
    viewport: Optional[Tuple[int, int]]


def parse_length(value: str) -> int:
    """
    Parse a pixel length such as "12px" or "12".

    Fractional pixels are rounded down, since margins and minimum sizes are
    whole pixels.

    Raises:
        SceneError: If the value is not a non-negative pixel length
    """
    match = _LENGTH_RE.match(value.strip().lower())
    if not match:
        raise SceneError(f"Invalid pixel length: {value!r}")
    return int(float(match.group(1)))


def parse_margin_shorthand(value: str) -> Dict[str, int]:
    """
    Expand a margin shorthand into its four sides.

    Values follow CSS order: top, right, bottom, left, with missing values
    mirrored from the opposite side.
    """
    parts = [parse_length(part) for part in value.split()]
    if not 1 <= len(parts) <= 4:
        raise SceneError(f"margin takes 1 to 4 values, got {value!r}")

    top = parts[0]
    right = parts[1] if len(parts) > 1 else top
    bottom = parts[2] if len(parts) > 2 else top
    left = parts[3] if len(parts) > 3 else right
    return {'t': top, 'r': right, 'b': bottom, 'l': left}


def parse_box_style(css_text: str) -> Settings:
    """
    Parse CSS declarations into box layout settings.

    Args:
        css_text: Declarations such as "flex-direction: column; margin: 2px"

    Returns:
        Settings: Layout settings, defaults for unspecified properties

    Raises:
        SceneError: If a recognized property has an invalid value
    """
    style = cssutils.parseStyle(css_text)

    direction = Direction.ROW
    grow = 1.0
    fill_cross = True
    margins = {'l': 0, 'b': 0, 'r': 0, 't': 0}
    min_size = [0, 0]

    for prop in style.getProperties():
        name = prop.name
        value = prop.value.strip()

        if name == 'flex-direction':
            if value.lower() not in DIRECTIONS:
                raise SceneError(f"Unknown flex-direction: {value!r}")
            direction = DIRECTIONS[value.lower()]
        elif name == 'flex-grow':
            try:
                grow = float(value)
            except ValueError:
                raise SceneError(f"Invalid flex-grow: {value!r}") from None
            if grow < 0:
                raise SceneError(f"flex-grow must be non-negative, got {value!r}")
        elif name == 'align-self':
            fill_cross = value.lower() == 'stretch'
        elif name == 'margin':
            margins.update(parse_margin_shorthand(value))
        elif name in MARGIN_SIDES:
            margins[MARGIN_SIDES[name]] = parse_length(value)
        elif name == 'min-width':
            min_size[0] = parse_length(value)
        elif name == 'min-height':
            min_size[1] = parse_length(value)
        else:
            logger.warning(f"Ignoring unsupported layout property: {name}")

    return Settings(
        direction=direction,
        grow=grow,
        fill_cross=fill_cross,
        margins=Margins(**margins),
        min_size=(min_size[0], min_size[1]),
    )


class SceneLoader:
    """Builds box scenes from JSON scene descriptions."""

    def __init__(self, scene: Optional[Scene] = None):
        """
        Initialize the loader.

        Args:
            scene: Scene to add entities to (a new one if omitted)
        """
        self.scene = scene if scene is not None else Scene()

    def load_file(self, path: str) -> LoadedScene:
        """
        Load a scene description from a JSON file.

        Raises:
            SceneError: If the file cannot be read or is invalid
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except OSError as e:
            raise SceneError(f"Cannot read scene file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SceneError(f"Scene file {path} is not valid JSON: {e}") from e

        logger.debug(f"Loading scene from {path}")
        return self.load_dict(document)

    def load_dict(self, document: Dict[str, Any]) -> LoadedScene:
        """
        Build boxes from a parsed scene description.

        Every node becomes an entity with a Box, plus a Name and a Rect when
        the node has a name or a color.
        """
        if not isinstance(document, dict) or not isinstance(document.get('root'), dict):
            raise SceneError("Scene description needs a 'root' node object")

        viewport = self._parse_viewport(document.get('viewport'))
        names: Dict[str, EntityId] = {}

        root_id = self._create_node(document['root'], None, None, names)
        pending = deque([(document['root'], root_id)])
        created = 1

        # Breadth-first so every sibling exists before the next one links to it
        while pending:
            node, node_id = pending.popleft()
            previous: Optional[EntityId] = None
            for child in self._children_of(node):
                child_id = self._create_node(child, node_id, previous, names)
                pending.append((child, child_id))
                previous = child_id
                created += 1

        logger.info(f"Loaded scene with {created} boxes")
        return LoadedScene(self.scene, root_id, names, viewport)

    def _create_node(self, node: Any, parent: Optional[EntityId],
                     sibling: Optional[EntityId], names: Dict[str, EntityId]) -> EntityId:
        if not isinstance(node, dict):
            raise SceneError(f"Scene nodes must be objects, got {node!r}")

        settings = parse_box_style(node.get('style', ''))
        eid = self.scene.create(Box(parent, sibling, settings))

        name = node.get('name')
        if name is not None:
            if name in names:
                raise SceneError(f"Duplicate node name: {name!r}")
            names[name] = eid
            self.scene.add(eid, Name(name))

        color = node.get('color')
        if color is not None:
            try:
                self.scene.add(eid, Rect(color))
            except ValueError as e:
                raise SceneError(f"Invalid color {color!r}: {e}") from e

        return eid

    @staticmethod
    def _children_of(node: Dict[str, Any]) -> List[Any]:
        children = node.get('children', [])
        if not isinstance(children, list):
            raise SceneError("'children' must be a list")
        return children

    @staticmethod
    def _parse_viewport(value: Any) -> Optional[Tuple[int, int]]:
        if value is None:
            return None
        if (not isinstance(value, list) or len(value) != 2
                or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in value)):
            raise SceneError(f"viewport must be [width, height] in positive pixels, got {value!r}")
        return (value[0], value[1])
