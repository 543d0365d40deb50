"""CLI entry point - wrapper for running from a source checkout

This file imports and runs the main CLI from the modular cli package.
"""

import sys

from cli.main import main

if __name__ == "__main__":
    sys.exit(main())
