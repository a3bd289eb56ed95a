"""
Stockroom - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("STOCKROOM_DB", f"sqlite:///{BASE_DIR / 'stockroom.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("STOCKROOM_HOST", "0.0.0.0")
PORT   = int(os.environ.get("STOCKROOM_PORT", "5000"))
DEBUG  = os.environ.get("STOCKROOM_DEBUG", "0") == "1"
SECRET = os.environ.get("STOCKROOM_SECRET", "stockroom-dev-key-change-in-prod")
MAX_UPLOAD_BYTES = int(os.environ.get("STOCKROOM_MAX_UPLOAD_BYTES", str(16 * 1024 * 1024)))

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("STOCKROOM_LOG_LEVEL", "INFO").upper()

# ── Catalog ────────────────────────────────────────────────────────────
# Group used when a request or CLI call does not name one
DEFAULT_GROUP = os.environ.get("STOCKROOM_DEFAULT_GROUP", "default")

# Hand out sequential asset IDs to items imported without one
AUTO_INCREMENT_ASSET_ID = os.environ.get("STOCKROOM_AUTO_INCREMENT_ASSET_ID", "1") == "1"
