"""Entry point for ``python -m verman``."""

import sys

from verman.cli import main

if __name__ == "__main__":
    sys.exit(main())
