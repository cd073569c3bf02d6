"""
vizharness - browser harness for algorithm visualizer fixtures.

Entry point for the smoke runner:

    python main.py smoke path/to/html --allow "favicon"
"""

import asyncio
import sys

from vizharness.ui.cli import main

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
