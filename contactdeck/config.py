"""
Shared configuration constants for contactdeck.

Import from here to avoid duplication across server.py, services and adapters.
"""

import os
from pathlib import Path

# Base paths
CONTACTDECK_ROOT = Path(os.environ.get("CONTACTDECK_ROOT", "/data"))
CONFIG_DIR = CONTACTDECK_ROOT / "config"

# Contacts config
ACCOUNTS_FILE = CONFIG_DIR / "contacts_accounts.json"
GCONTACTS_TOKEN = CONFIG_DIR / "gcontacts_token.json"
GOOGLE_CREDENTIALS = CONFIG_DIR / "google_credentials.json"

# Server
SERVER_HOST = os.environ.get("CONTACTDECK_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("CONTACTDECK_PORT", "8002"))
SERVER_PATH = "/contacts"
LOG_LEVEL = os.environ.get("CONTACTDECK_LOG_LEVEL", "INFO")
