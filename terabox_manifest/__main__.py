"""
Main entry point for the terabox_manifest package.

Allows running the CLI as: python -m terabox_manifest
"""

import sys

from terabox_manifest.cli import main

if __name__ == "__main__":
    sys.exit(main())
