"""
Module execution entry point.

Allows running with: python -m vestmig_cli
"""

import sys
from vestmig_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
