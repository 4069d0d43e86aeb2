"""CLI entry point, when used as a module: ``python -m kubedepscan``."""

import sys

from kubedepscan.cli import main

if __name__ == "__main__":
    sys.exit(main())
