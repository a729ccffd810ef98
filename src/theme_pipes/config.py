import os
from pathlib import Path

# We store files relative to the XDG Base Directory specification
XDG_DATA = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

# The root is the data directory, which contains the output database and
# subdirectories for the input texts and the tokenized dumps.
DATA_ROOT = XDG_DATA / "theme-pipes"
DATA_ROOT.mkdir(parents=True, exist_ok=True)

SOURCES_DIR = DATA_ROOT / "sources"
SOURCES_DIR.mkdir(parents=True, exist_ok=True)

TOKENS_DIR = DATA_ROOT / "tokens"
TOKENS_DIR.mkdir(parents=True, exist_ok=True)

DB_PATH = DATA_ROOT / "analytics.db"

# Default input files, dropped into SOURCES_DIR by the user
BOOK_PATH = SOURCES_DIR / "war_and_peace.txt"
WAR_TERMS_PATH = SOURCES_DIR / "war_terms.txt"
PEACE_TERMS_PATH = SOURCES_DIR / "peace_terms.txt"
