"""
UI Engine - Box layout for trees of nested rectangles.
"""

from ui_engine.utils.logging import setup_logging

# Console logging only; the command line adds a log file when configured
logger = setup_logging(console_level="WARNING")

# Package information
__version__ = "0.1.0"
__author__ = "UI Engine Team"
__description__ = "Box layout engine for trees of nested rectangles"

logger.debug(f"UI Engine v{__version__} initialized")
