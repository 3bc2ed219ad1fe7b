"""
Runtime settings, read from environment variables.

TASKBOARD_API_BASE_URL      backend base URL (default http://localhost:8080)
TASKBOARD_REQUEST_TIMEOUT   per-request timeout in seconds (default 15)
TASKBOARD_IMPERSONATE       curl_cffi browser fingerprint, empty to disable (default chrome)
TASKBOARD_DATABASE_URL      local store (default sqlite:///./data/db/taskboard.db)
TASKBOARD_LOG_LEVEL         root log level (default INFO)
TASKBOARD_LOG_FILE          optional log file
"""
import os
import logging
from typing import Any, Dict, Mapping, Optional

from .database import DEFAULT_DATABASE_URL
from .core.gateway import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def _float(value: Optional[str], default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid TASKBOARD_REQUEST_TIMEOUT={value!r}, using {default}")
        return default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build the container config dict from the environment"""
    env = os.environ if environ is None else environ
    return {
        "api": {
            "base_url": env.get("TASKBOARD_API_BASE_URL") or DEFAULT_BASE_URL,
            "timeout": _float(env.get("TASKBOARD_REQUEST_TIMEOUT"), DEFAULT_TIMEOUT),
            "impersonate": env.get("TASKBOARD_IMPERSONATE", "chrome") or None,
        },
        "database": {
            "url": env.get("TASKBOARD_DATABASE_URL") or DEFAULT_DATABASE_URL,
        },
        "logging": {
            "level": (env.get("TASKBOARD_LOG_LEVEL") or "INFO").upper(),
            "file": env.get("TASKBOARD_LOG_FILE") or None,
        },
    }
