"""Main entry point for running polysolver_pkg as a module.

This allows running Polysolver with:
    python -m polysolver_pkg
    python -m polysolver_pkg --health-check
    python -m polysolver_pkg -e "equation(x^2-5x+6=0)"
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
