import os
from pathlib import Path

from dotenv import load_dotenv

from config.paths import LOG_PATH

"""
Runtime settings read from the environment (and a local .env file when present).
"""

load_dotenv()


def _csv(name: str):
    return [v.strip() for v in os.getenv(name, "").split(",") if v.strip()]


# auth
API_KEY = os.getenv("API_KEY")

# http
ENABLE_CORS = os.getenv("ENABLE_CORS") == "true"
CORS_ALLOW_ORIGINS = _csv("CORS_ALLOW_ORIGINS")
ALLOWED_HOSTS = _csv("ALLOWED_HOSTS") or ["*"]
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "0"))  # 0 = no limit

# logging
LOG_LEVEL = os.getenv("PLANNER_LOG_LEVEL", "INFO").upper()
LOG_FILE = Path(os.getenv("PLANNER_LOG_FILE", str(LOG_PATH)))
