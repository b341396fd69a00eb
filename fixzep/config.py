import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Production API host used when FIXZEP_API_URL is unset or blank
DEFAULT_API_URL = "https://admin.fixzep.com/api"


def normalize_base_url(value):
    """Trim whitespace and a trailing slash, falling back to the production host"""
    if not value:
        return DEFAULT_API_URL
    trimmed = value.strip().rstrip("/")
    return trimmed or DEFAULT_API_URL


API_BASE_URL = normalize_base_url(os.getenv("FIXZEP_API_URL"))

# Seconds; no retry is ever attempted on timeout
HTTP_TIMEOUT = float(os.getenv("FIXZEP_HTTP_TIMEOUT", "30"))

# Storage backend: "file" (default), "redis" or "memory"
STORAGE_BACKEND = os.getenv("FIXZEP_STORAGE_BACKEND", "file").strip().lower()
STORAGE_PATH = os.getenv("FIXZEP_STORAGE_PATH", str(Path.home() / ".fixzep" / "storage.json"))
STORAGE_PREFIX = os.getenv("FIXZEP_STORAGE_PREFIX", "")
REDIS_URL = os.getenv("REDIS_URL")

# Namespace keys for persisted client state
CART_STORAGE_KEY = "fixzep-cart"
AUTH_STORAGE_KEY = "fixzep-client-auth"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
