"""Main entry point for the web3-quarters wallet CLI."""

import sys

from web3_quarters.cli import main

if __name__ == "__main__":
    sys.exit(main())
