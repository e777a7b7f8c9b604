"""
Application Paths - Centralized path definitions cho linecount-indexer

Module nay dinh nghia tat ca cac duong dan su dung trong ung dung.
Tap trung o mot noi de tranh hardcode rai rac.

App data duoc luu tai: ~/.linecount-indexer/
- logs/         : Log files
- settings.json : Counting config + indexer settings
"""

import os
from pathlib import Path


# =============================================================================
# Ten ung dung - Single source of truth cho naming
# =============================================================================
APP_NAME = "linecount-indexer"

# =============================================================================
# Thu muc goc cua ung dung
# =============================================================================
APP_DIR = Path.home() / f".{APP_NAME}"

# =============================================================================
# Cac thu muc con va file cau hinh
# =============================================================================
LOG_DIR = APP_DIR / "logs"
SETTINGS_FILE = APP_DIR / "settings.json"

# =============================================================================
# Environment Variables - Ten bien moi truong cho debug mode
# =============================================================================
DEBUG_ENV_VAR = "LINECOUNT_DEBUG"

# Kiem tra debug mode tu environment variable
DEBUG_MODE = os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes")

