"""CLI entry point for Jade Lizard / Reverse Jade Lizard payoff charts."""

import sys

from jade_lizard.cli import main

if __name__ == "__main__":
    sys.exit(main())
