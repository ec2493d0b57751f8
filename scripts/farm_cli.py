#!/usr/bin/env python3
"""
farmhand CLI (source checkout)
==============================

Runs the farmhand command line without installing the package.

Usage:
    python scripts/farm_cli.py devices --query pixel --android
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from farmhand.cli import run

if __name__ == "__main__":
    run()
