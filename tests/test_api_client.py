"""
Tests for ApiClient: headers, URL building, and failure handling.

Covers:
- Bearer header present exactly when a session is stored
- 401 from any endpoint clears the session and fires on_unauthorized
- Duplicate-key failures surface the friendly messages
- Transport failures become TransportError
- Multipart requests use the upload URL and no JSON content type
"""

import os
from unittest.mock import Mock, patch

import pytest
import requests

from foodieframe.api_client import ApiClient
from foodieframe.client import FoodieFrameClient
from foodieframe.errors import (
    EMAIL_CONSTRAINT,
    USERNAME_CONSTRAINT,
    ApiError,
    AuthenticationError,
    DuplicateEmailError,
    DuplicateUsernameError,
    TransportError,
)

from conftest import BASE_URL, UPLOAD_URL, build_response


def sent_headers(http):
    return http.call_args[1]["headers"]


class TestBearerHeader:
    """Tests for the Authorization header."""

    def test_no_header_without_session(self, client, http):
        """Test anonymous requests carry no Authorization header."""
        client.recipes.get_all_recipes()
        assert "Authorization" not in sent_headers(http)

    def test_header_with_session(self, logged_in_client, http, session):
        """Test a stored session adds the bearer token."""
        logged_in_client.recipes.get_all_recipes()
        assert sent_headers(http)["Authorization"] == f"Bearer {session.token}"

    def test_header_gone_after_logout(self, logged_in_client, http):
        """Test the very next request after logout is anonymous."""
        logged_in_client.session.logout()
        logged_in_client.recipes.get_all_recipes()
        assert "Authorization" not in sent_headers(http)

    def test_header_follows_login(self, client, http):
        """Test a login takes effect for the next request."""
        http.return_value = build_response(200, {"token": "fresh", "user": {"id": 3}})
        client.session.login({"email": "a@b.c", "password": "pw"})
        http.return_value = build_response(200, [])
        client.recipes.get_all_recipes()
        assert sent_headers(http)["Authorization"] == "Bearer fresh"


class TestRequestBuilding:
    """Tests for URL and body handling."""

    def test_url_joins_base_and_path(self, client, http):
        """Test paths are joined to the base URL with one slash."""
        client.recipes.get_recipe(12)
        method, url = http.call_args[0]
        assert method == "GET"
        assert url == f"{BASE_URL}/posts/12"
        assert http.call_args[1]["timeout"] == 5

    def test_path_segments_are_quoted(self, client, http):
        """Test user-supplied path segments cannot add path components."""
        client.categories.get_category_by_name("soups/stews")
        assert http.call_args[0][1] == f"{BASE_URL}/categories/name/soups%2Fstews"

    def test_multipart_uses_upload_url(self, client, http):
        """Test uploads go to the upload base URL with form fields and files."""
        client.recipes.upload_recipe(
            {"title": "Dal", "description": "Red lentil dal", "category": "Indian", "steps": "1. Cook", "userID": 7},
            image_file=("dal.jpg", b"jpeg-bytes", "image/jpeg"),
        )
        method, url = http.call_args[0]
        kwargs = http.call_args[1]
        assert (method, url) == ("POST", f"{UPLOAD_URL}/posts/upload")
        assert kwargs["files"]["userID"] == (None, "7")
        assert "imageFile" in kwargs["files"]
        assert "videoFile" not in kwargs["files"]
        assert kwargs["json"] is None
        assert kwargs["data"] is None

    def test_multipart_session_has_no_json_content_type(self, client):
        """Test the upload session leaves Content-Type to requests."""
        assert client.api._multipart_http.headers.get("Content-Type") is None
        assert client.api._json_http.headers["Content-Type"] == "application/json"

    def test_upload_url_defaults_to_base_url(self, store):
        """Test an explicit base URL is also used for uploads when nothing else is configured."""
        with patch.dict(os.environ, {"FOODIEFRAME_UPLOAD_URL": ""}):
            api = ApiClient(store, base_url="http://only.test/api/", timeout=1)
        assert api.base_url == "http://only.test/api"
        assert api.upload_url == "http://only.test/api"

    def test_upload_env_applies_with_explicit_base_url(self, store):
        """Test FOODIEFRAME_UPLOAD_URL still routes uploads when base_url is passed."""
        with patch.dict(os.environ, {"FOODIEFRAME_UPLOAD_URL": "http://localhost:8082/api/"}):
            api = ApiClient(store, base_url="http://only.test/api", timeout=1)
        assert api.upload_url == "http://localhost:8082/api"

    def test_upload_argument_beats_env(self, store):
        """Test an explicit upload_url wins over the environment."""
        with patch.dict(os.environ, {"FOODIEFRAME_UPLOAD_URL": "http://localhost:8082/api"}):
            api = ApiClient(store, base_url="http://only.test/api", upload_url="http://up.test/api", timeout=1)
        assert api.upload_url == "http://up.test/api"


class TestUnauthorized:
    """Tests for 401 handling."""

    def test_401_clears_session(self, logged_in_client, http):
        """Test a 401 from any endpoint clears the stored session."""
        http.return_value = build_response(401, {"error": "Invalid token"})
        with pytest.raises(AuthenticationError):
            logged_in_client.events.get_all_events()
        assert logged_in_client.session.get_current_user() is None

    def test_later_requests_are_anonymous(self, logged_in_client, http):
        """Test requests after a 401 carry no token."""
        http.return_value = build_response(401)
        with pytest.raises(AuthenticationError):
            logged_in_client.friends.get_friends(7)
        http.return_value = build_response(200, [])
        logged_in_client.recipes.get_all_recipes()
        assert "Authorization" not in sent_headers(http)

    def test_on_unauthorized_called(self, store, session, http):
        """Test the redirect hook fires after the session is cleared."""
        seen = []
        hook = Mock(side_effect=lambda: seen.append(store.get_current_user()))
        client = FoodieFrameClient(store, base_url=BASE_URL, on_unauthorized=hook)
        store.set_session(session)
        http.return_value = build_response(401)

        with pytest.raises(AuthenticationError):
            client.recipes.get_all_recipes()

        hook.assert_called_once_with()
        assert seen == [None]

    def test_other_errors_keep_session(self, logged_in_client, http):
        """Test a 403 or 500 leaves the session alone."""
        http.return_value = build_response(403, {"error": "Forbidden"})
        with pytest.raises(ApiError):
            logged_in_client.recipes.delete_recipe(1)
        assert logged_in_client.session.is_authenticated()

    def test_pinned_thread_defers_clearing(self, logged_in_client, http, session):
        """Test a 401 on a pinned thread raises but leaves clearing to the pinning thread."""
        hook = Mock()
        logged_in_client.api.on_unauthorized = hook
        http.return_value = build_response(401)

        with logged_in_client.session.pinned(session):
            with pytest.raises(AuthenticationError):
                logged_in_client.recipes.get_all_recipes()

        assert logged_in_client.session.is_authenticated()
        hook.assert_not_called()

        logged_in_client.api.expire_session()
        assert logged_in_client.session.get_current_user() is None
        hook.assert_called_once_with()


class TestDuplicateKeyFailures:
    """Tests for duplicate email/username responses."""

    def test_duplicate_email_on_register(self, client, http):
        """Test the email constraint in a 500 body gives the email message."""
        http.return_value = build_response(500, text=f"Duplicate entry for key '{EMAIL_CONSTRAINT}'")
        with pytest.raises(DuplicateEmailError) as exc_info:
            client.session.register({"email": "a@b.c", "username": "ana", "password": "pw", "name": "Ana"})
        assert str(exc_info.value) == "Email address already exists. Please use a different email."

    def test_duplicate_username_on_register(self, client, http):
        """Test the username constraint in a JSON 500 body gives the username message."""
        http.return_value = build_response(500, {"message": f"could not execute statement [{USERNAME_CONSTRAINT}]"})
        with pytest.raises(DuplicateUsernameError) as exc_info:
            client.session.register({"email": "a@b.c", "username": "ana", "password": "pw", "name": "Ana"})
        assert str(exc_info.value) == "Username already exists. Please choose a different username."


class TestTransportFailures:
    """Tests for network-level failures."""

    @pytest.mark.parametrize("exc", [
        requests.exceptions.ConnectTimeout("slow"),
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.TooManyRedirects("loop"),
    ])
    def test_transport_error_raised(self, client, http, exc):
        """Test requests exceptions are wrapped in TransportError."""
        http.side_effect = exc
        with pytest.raises(TransportError, match="Network Error"):
            client.recipes.get_all_recipes()

    def test_transport_error_keeps_session(self, logged_in_client, http):
        """Test an unreachable backend does not log the user out."""
        http.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError):
            logged_in_client.recipes.get_all_recipes()
        assert logged_in_client.session.is_authenticated()
