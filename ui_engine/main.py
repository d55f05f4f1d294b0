#!/usr/bin/env python3
"""
UI Engine - Command line entry point

Lays out a scene description and writes the result as an image and/or JSON.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from ui_engine import __version__
from ui_engine.layout import LayoutSystem, TreeError
from ui_engine.layout.box import Box
from ui_engine.rendering import RenderSystem
from ui_engine.scene import SceneError, SceneLoader
from ui_engine.utils.config import Config
from ui_engine.utils.logging import add_file_handler, log_exception, set_console_level, setup_logging

EXIT_OK = 0
EXIT_SCENE_ERROR = 1
EXIT_TREE_ERROR = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="UI Engine - lay out a tree of nested boxes")

    parser.add_argument("scene", help="Scene description (JSON)")
    parser.add_argument("--width", type=int, default=None, help="Viewport width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Viewport height in pixels")
    parser.add_argument("--output", "-o", default=None, help="Write the rendered layout to this PNG file")
    parser.add_argument("--dump", action="store_true", help="Print the shape of every named box as JSON")
    parser.add_argument("--config", default=None, help="Path to configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def dump_shapes(scene, names: Dict[str, int]) -> Dict[str, Dict[str, float]]:
    """Collect the shapes of all named boxes."""
    shapes = {}
    for name, eid in sorted(names.items()):
        shape = scene.get_one(Box, eid).shape
        shapes[name] = {"x": shape.x, "y": shape.y, "w": shape.w, "h": shape.h}
    return shapes


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = parse_args(argv)
    config = Config(args.config)

    logger = setup_logging()
    console_level = "DEBUG" if args.debug else config.get("logging.console_level", "INFO")
    set_console_level(logger, console_level)
    log_file = config.get("logging.file")
    if log_file:
        add_file_handler(logger, log_file)
    logger = logging.getLogger("ui_engine.main")

    try:
        loaded = SceneLoader().load_file(args.scene)
    except SceneError as e:
        logger.error(f"Invalid scene: {e}")
        return EXIT_SCENE_ERROR

    width, height = loaded.viewport or config.viewport_size()
    if args.width is not None:
        width = args.width
    if args.height is not None:
        height = args.height

    try:
        system = LayoutSystem(loaded.scene, (width, height))
    except ValueError as e:
        logger.error(f"Invalid viewport: {e}")
        return EXIT_SCENE_ERROR

    try:
        system.layout()
    except TreeError as e:
        log_exception(logger, e, "Layout failed")
        return EXIT_TREE_ERROR

    output = args.output
    if output is None and not args.dump:
        output = config.get("render.output", "layout.png")

    if output:
        renderer = RenderSystem(loaded.scene, (width, height), config.get("render.background", "#000000"))
        renderer.render()
        renderer.renderer.save(output)

    if args.dump:
        json.dump(dump_shapes(loaded.scene, loaded.names), sys.stdout, indent=2)
        sys.stdout.write("\n")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
