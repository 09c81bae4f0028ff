"""
Configuration management for the FoodieFrame client.

This module centralizes environment variable loading from the .env file at the
project root. It is imported by the API client and by the Streamlit frontend so
that .env is loaded before any other code reads environment variables.

In deployed environments .env will usually not exist; load_dotenv() then no-ops
and the platform environment is used instead.

Environment Variables:
- FOODIEFRAME_API_URL: Optional, REST backend base URL (default http://localhost:8081/api)
- FOODIEFRAME_UPLOAD_URL: Optional, base URL for multipart uploads (defaults to FOODIEFRAME_API_URL)
- FOODIEFRAME_TIMEOUT: Optional, request timeout in seconds (default 10)
- FOODIEFRAME_SESSION_FILE: Optional, where the persisted session lives
  (default ~/.foodieframe/session.json)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8081/api"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_SESSION_FILE = Path.home() / ".foodieframe" / "session.json"


def load_env_file() -> None:
    """
    Load environment variables from the .env file at project root.

    The project root is found by going up from this file's location
    (foodieframe/config.py -> foodieframe/ -> project root). Safe to call
    multiple times; existing environment variables take precedence.
    """
    this_file = Path(__file__).resolve()
    project_root = this_file.parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


class BackendConfig:
    """Configuration for talking to the FoodieFrame REST backend."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get the REST API base URL.

        Returns:
            Base URL with trailing slash removed.
        """
        return os.getenv("FOODIEFRAME_API_URL", DEFAULT_API_URL).rstrip("/")

    @staticmethod
    def get_upload_url_override() -> Optional[str]:
        """Get FOODIEFRAME_UPLOAD_URL, or None when it is unset or empty."""
        url = os.getenv("FOODIEFRAME_UPLOAD_URL")
        if not url:
            return None
        return url.rstrip("/")

    @staticmethod
    def get_upload_url() -> str:
        """
        Get the base URL used for multipart uploads.

        Upload endpoints lived on a different port in some deployments, so they
        can be pointed elsewhere. Falls back to the API base URL.
        """
        return BackendConfig.get_upload_url_override() or BackendConfig.get_base_url()

    @staticmethod
    def get_timeout() -> float:
        """
        Get the request timeout in seconds.

        Invalid or non-positive values fall back to the default.
        """
        raw = os.getenv("FOODIEFRAME_TIMEOUT")
        if raw is None or raw == "":
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning("Invalid FOODIEFRAME_TIMEOUT %r, using %.1fs", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        if timeout <= 0:
            logger.warning("Non-positive FOODIEFRAME_TIMEOUT %r, using %.1fs", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return timeout

    @staticmethod
    def get_session_file() -> Path:
        """Get the path of the file-backed session storage."""
        raw = os.getenv("FOODIEFRAME_SESSION_FILE")
        if raw:
            return Path(raw).expanduser()
        return DEFAULT_SESSION_FILE


def get_config_summary() -> Dict[str, Any]:
    """
    Get the effective configuration, for display on a status page.

    Returns:
        Dictionary with keys api_url, upload_url, timeout_seconds, session_file.
    """
    return {
        "api_url": BackendConfig.get_base_url(),
        "upload_url": BackendConfig.get_upload_url(),
        "timeout_seconds": BackendConfig.get_timeout(),
        "session_file": str(BackendConfig.get_session_file()),
    }
