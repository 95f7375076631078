"""Entry point for running taskparse as a module.

Usage:
    python -m taskparse "remind me to pay rent on the 1st"
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
