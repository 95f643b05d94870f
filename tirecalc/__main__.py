"""
Entry point for running tirecalc as a module.

Usage:
    python -m tirecalc compare 265/70R17 285/75R17 --axle-ratio 3.73
    python -m tirecalc parse 35x12.50R17
    python -m tirecalc make-example
"""

import sys

from tirecalc.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
