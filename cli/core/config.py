# cli/core/config.py
from pathlib import Path
import os

# URL do backend (API server)
BASE_URL = os.environ.get("PORTFOLIUM_URL", "http://localhost:3000")

# Default timeout for every HTTP call, in seconds
REQUEST_TIMEOUT = float(os.environ.get("PORTFOLIUM_TIMEOUT", "10"))

# Folder where the CLI keeps local data (tokens, cached user)
APP_DIR = Path(os.environ.get("PORTFOLIUM_HOME", str(Path.home() / ".portfolium")))

# Session file (access token, refresh token, user)
SESSION_FILE = APP_DIR / "session.json"

# Worker threads used for in-flight tracker updates
TRACKER_WORKERS = 4
