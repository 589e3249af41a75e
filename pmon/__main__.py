"""
Entry point for running pmon as a module.

Usage:
    python -m pmon [path] [options]
"""

import sys

from pmon.cli import main

if __name__ == "__main__":
    sys.exit(main())
