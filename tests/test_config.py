"""
Tests for environment-driven configuration.
"""

import os
from pathlib import Path
from unittest.mock import patch

from foodieframe.config import (
    DEFAULT_API_URL,
    DEFAULT_SESSION_FILE,
    DEFAULT_TIMEOUT_SECONDS,
    BackendConfig,
    get_config_summary,
)

CONFIG_VARS = (
    "FOODIEFRAME_API_URL",
    "FOODIEFRAME_UPLOAD_URL",
    "FOODIEFRAME_TIMEOUT",
    "FOODIEFRAME_SESSION_FILE",
)


def _without_config_vars():
    return {key: value for key, value in os.environ.items() if key not in CONFIG_VARS}


class TestBackendConfig:
    """Tests for BackendConfig getters."""

    def test_defaults(self):
        """Test defaults are used when nothing is configured."""
        with patch.dict(os.environ, _without_config_vars(), clear=True):
            assert BackendConfig.get_base_url() == DEFAULT_API_URL
            assert BackendConfig.get_upload_url() == DEFAULT_API_URL
            assert BackendConfig.get_timeout() == DEFAULT_TIMEOUT_SECONDS
            assert BackendConfig.get_session_file() == DEFAULT_SESSION_FILE

    @patch.dict(os.environ, {"FOODIEFRAME_API_URL": "https://foodie.example/api/"})
    def test_base_url_trailing_slash_removed(self):
        """Test the base URL loses its trailing slash."""
        assert BackendConfig.get_base_url() == "https://foodie.example/api"

    @patch.dict(os.environ, {"FOODIEFRAME_API_URL": "https://foodie.example/api", "FOODIEFRAME_UPLOAD_URL": ""})
    def test_upload_url_falls_back_to_base_url(self):
        """Test an empty upload URL falls back to the API URL."""
        assert BackendConfig.get_upload_url() == "https://foodie.example/api"

    @patch.dict(os.environ, {"FOODIEFRAME_UPLOAD_URL": "http://localhost:8082/api/"})
    def test_upload_url_override(self):
        """Test uploads can be pointed at a different host."""
        assert BackendConfig.get_upload_url() == "http://localhost:8082/api"

    @patch.dict(os.environ, {"FOODIEFRAME_UPLOAD_URL": ""})
    def test_upload_override_empty_is_none(self):
        """Test an empty upload URL counts as no override."""
        assert BackendConfig.get_upload_url_override() is None

    @patch.dict(os.environ, {"FOODIEFRAME_TIMEOUT": "2.5"})
    def test_timeout_parsed(self):
        """Test a numeric timeout is parsed as float."""
        assert BackendConfig.get_timeout() == 2.5

    @patch.dict(os.environ, {"FOODIEFRAME_TIMEOUT": "soon"})
    def test_invalid_timeout_uses_default(self):
        """Test garbage in FOODIEFRAME_TIMEOUT falls back to the default."""
        assert BackendConfig.get_timeout() == DEFAULT_TIMEOUT_SECONDS

    @patch.dict(os.environ, {"FOODIEFRAME_TIMEOUT": "-1"})
    def test_non_positive_timeout_uses_default(self):
        """Test a negative timeout falls back to the default."""
        assert BackendConfig.get_timeout() == DEFAULT_TIMEOUT_SECONDS

    @patch.dict(os.environ, {"FOODIEFRAME_SESSION_FILE": "~/ff/session.json"})
    def test_session_file_expands_user(self):
        """Test ~ in the session file path is expanded."""
        assert BackendConfig.get_session_file() == Path("~/ff/session.json").expanduser()


class TestConfigSummary:
    """Tests for get_config_summary."""

    @patch.dict(os.environ, {"FOODIEFRAME_API_URL": "https://foodie.example/api", "FOODIEFRAME_TIMEOUT": "3"})
    def test_summary_reflects_environment(self):
        """Test the summary reports effective values."""
        summary = get_config_summary()
        assert summary["api_url"] == "https://foodie.example/api"
        assert summary["timeout_seconds"] == 3.0
        assert set(summary) == {"api_url", "upload_url", "timeout_seconds", "session_file"}
