"""
Utility modules for the UI engine.
"""

from ui_engine.utils.config import Config
from ui_engine.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
