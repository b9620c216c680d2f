"""Root conftest: makes `grant_triage.X` importable without an install."""
import sys
from pathlib import Path

_here = Path(__file__).resolve().parent
_parent = _here.parent

if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))
