"""Runtime settings, read once from the environment."""

import os
from pathlib import Path


DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"

# Explicit dictionary location (term-bank directory or .zip)
DICT_PATH_ENV = "WORDLOOKUP_DICT_PATH"

DICT_SEARCH_PATHS = [
    DATA_DIR / "jmdict_english",
    DATA_DIR / "jmdict_english.zip",
    Path.home() / ".wordlookup" / "jmdict_english",
    Path.home() / ".wordlookup" / "jmdict_english.zip",
    Path("/app/data/jmdict_english"),
    Path("/app/data/jmdict_english.zip"),
]

# SudachiPy system dictionary: "small", "core" or "full"
SUDACHI_DICT = os.environ.get("WORDLOOKUP_SUDACHI_DICT", "full")

DEFAULT_MAX_SUBSTRING_LENGTH = 20

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def find_dictionary_path() -> Path | None:
    """Find the dictionary in the configured or common locations."""
    explicit = os.environ.get(DICT_PATH_ENV)
    if explicit:
        return Path(explicit)

    for path in DICT_SEARCH_PATHS:
        if path.exists():
            return path
    return None
