from pathlib import Path
import sys

# Make the `src` layout importable when tests run from a plain checkout
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
