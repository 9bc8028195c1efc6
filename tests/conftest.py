"""Pytest configuration helpers.

Ensure the project's `src/` directory is on `sys.path` so imports like
`from qs_timeline...` work during test collection without an install.
"""
from pathlib import Path
import sys


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
