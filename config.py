import os
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

ENV = os.getenv("ENV", "TEST").upper()

DEFAULTS = {
    "TEST": {
        "STORE_API_URL": "http://localhost:8000",
        "TRACKING_API_URL": "http://localhost:8000",
    },
    "LIVE": {
        "STORE_API_URL": "https://api.entsuki.com",
        "TRACKING_API_URL": "https://api.entsuki.com",
    }
}

cfg = DEFAULTS["LIVE"] if ENV == "LIVE" else DEFAULTS["TEST"]

STORE_API_URL    = os.getenv("STORE_API_URL", cfg["STORE_API_URL"]).rstrip("/")
TRACKING_API_URL = os.getenv("TRACKING_API_URL", cfg["TRACKING_API_URL"]).rstrip("/")

# Unset means requests waits until the server gives up.
_timeout = os.getenv("HTTP_TIMEOUT", "").strip()
HTTP_TIMEOUT = float(_timeout) if _timeout else None

# Timestamps on the tracking page
DISPLAY_TZ = os.getenv("DISPLAY_TZ", "UTC")

# Hosts the storefront embeds media from
MEDIA_HOSTS = [h.strip() for h in os.getenv(
    "MEDIA_HOSTS",
    "https://picsum.photos, https://images.unsplash.com, https://loremflickr.com, "
    "https://d1csarkz8obe9u.cloudfront.net, http://localhost, "
    "http://storage.entsuki.com, https://storage.entsuki.com"
).split(",") if h.strip()]

SUPPORT_EMAIL = os.getenv("SUPPORT_EMAIL", "support@bajgo.com")

# Waitress bind address for storefront-serve
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5050"))

# ---------------- Paths (stable, absolute) ----------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Logging
LOG_DIR = os.getenv("LOG_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FILE = os.getenv("LOG_FILE", "storefront.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# -------------- HTTP Session --------------
# Every failure is surfaced to the shopper as-is; nothing is retried.
SESSION = requests.Session()
no_retries = Retry(total=0, raise_on_status=False)
SESSION.mount("http://", HTTPAdapter(max_retries=no_retries))
SESSION.mount("https://", HTTPAdapter(max_retries=no_retries))
SESSION.headers.update({"Accept": "application/json"})