import os
from dotenv import load_dotenv

load_dotenv()

# PocketBase serve address
BASE_URL = os.environ.get("PB_BASE_URL", "http://127.0.0.1:8090")
IDENTITY = os.environ.get("PB_IDENTITY", "")
PASSWORD = os.environ.get("PB_PASSWORD", "")
REQUEST_TIMEOUT = float(os.environ.get("PB_TIMEOUT", "10"))

# bootstrap only
ADMIN_EMAIL = os.environ.get("PB_ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.environ.get("PB_ADMIN_PASSWORD", "")

WINDOW_GEOMETRY = os.environ.get("DAYBLOCKS_GEOMETRY", "1200x760")
TOPMOST = os.environ.get("DAYBLOCKS_TOPMOST", "0") == "1"
LOG_LEVEL = os.environ.get("DAYBLOCKS_LOG_LEVEL", "INFO")
