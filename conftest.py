# Project root (for pokeworld and scripts) and tests/ (for helpers) on sys.path
import sys, pathlib
root = pathlib.Path(__file__).resolve().parent
for p in (root, root / "tests"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))
