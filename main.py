#!/usr/bin/env python3
"""
UI Engine - lay out a scene description from the command line.
"""

import os
import sys

# Allow running from a source checkout
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from ui_engine.main import main

if __name__ == "__main__":
    sys.exit(main())
