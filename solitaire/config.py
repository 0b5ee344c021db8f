import os
from pathlib import Path

# Paths & Config
HISTORY_PATH = Path(os.environ.get("SOLITAIRE_HISTORY_FILE", "history.solitaire"))
HOST = os.environ.get("SOLITAIRE_HOST", "127.0.0.1")
PORT = int(os.environ.get("SOLITAIRE_PORT", "8080"))
DEBUG = os.environ.get("SOLITAIRE_DEBUG", "").lower() in ("1", "true", "yes")
