"""
Module execution entry point.

Allows running with: python -m trieproof_cli
"""

import sys
from trieproof_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
