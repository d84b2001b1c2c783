"""
Entry point for running nohardcoded as a module.

Usage:
    python -m nohardcoded scan ./src
    python -m nohardcoded --help
"""

import sys
from nohardcoded.cli import main

if __name__ == "__main__":
    sys.exit(main())
