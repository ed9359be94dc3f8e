"""Configuration for SpendWise.

Values come from environment variables (a local ``.env`` file is loaded
first) with defaults relative to the project root.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("SPENDWISE_DATA_DIR", _PROJECT_ROOT / "data"))
SEED_PATH = Path(os.getenv("SPENDWISE_SEED_PATH", DATA_DIR / "seed.json"))
STORE_PATH = Path(os.getenv("SPENDWISE_STORE_PATH", DATA_DIR / "store.json"))
SETTINGS_PATH = Path(os.getenv("SPENDWISE_SETTINGS_PATH", DATA_DIR / "settings.json"))

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
MODEL = os.getenv("SPENDWISE_MODEL", "gemini-2.0-flash")

RECENT_EXPENSES_LIMIT = int(os.getenv("SPENDWISE_RECENT_LIMIT", "5"))


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
