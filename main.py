"""Convenience entry point to run the encdoc command line.

Allows running ``python main.py seal doc.json`` from the project root without installing.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src/ directory is on sys.path so `import encdoc` works
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from encdoc.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
