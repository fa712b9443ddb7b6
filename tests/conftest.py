import sys
from pathlib import Path

# Make the dungeon_walker package importable from a source checkout
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
