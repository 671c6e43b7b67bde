"""File and directory path constants."""

import os
from pathlib import Path

# Directory names
DATA_DIR = Path("data")
EXPORTS_DIR = DATA_DIR / "exports"

# File paths
DB_PATH = Path(os.environ.get("RICKMORTY_DB_PATH", DATA_DIR / "viewed_characters.db"))
EXPORT_PATH = EXPORTS_DIR / "viewed_characters.json"
