"""
Tests for mapping backend failures onto client errors.

Covers:
- 401 handling
- Duplicate email/username detection (structured codes and leaked constraint names)
- Message extraction from error bodies
- Transport classification and user-facing messages
"""

import pytest

from foodieframe.errors import (
    EMAIL_CONSTRAINT,
    USERNAME_CONSTRAINT,
    ApiError,
    AuthenticationError,
    DuplicateEmailError,
    DuplicateUsernameError,
    TransportError,
    ValidationError,
    is_transport_error,
    translate_error,
    user_message,
)


class TestTranslateError:
    """Tests for translate_error."""

    def test_401_is_authentication_error(self):
        """Test 401 maps to AuthenticationError whatever the body says."""
        error = translate_error(401, {"error": "Invalid token"})
        assert isinstance(error, AuthenticationError)
        assert error.status_code == 401

    def test_email_constraint_in_500_text(self):
        """Test the email unique-key name in a 500 body means duplicate email."""
        body = f"could not execute statement; constraint [{EMAIL_CONSTRAINT.lower()}]"
        error = translate_error(500, body)
        assert isinstance(error, DuplicateEmailError)
        assert str(error) == "Email address already exists. Please use a different email."

    def test_username_constraint_in_json_body(self):
        """Test the username unique-key name inside a JSON body means duplicate username."""
        body = {"message": f"Duplicate entry 'ana' for key '{USERNAME_CONSTRAINT}'"}
        error = translate_error(500, body)
        assert isinstance(error, DuplicateUsernameError)
        assert str(error) == "Username already exists. Please choose a different username."

    def test_structured_code_wins(self):
        """Test a structured code is used even without a constraint name."""
        error = translate_error(409, {"code": "DUPLICATE_EMAIL", "message": "taken"})
        assert isinstance(error, DuplicateEmailError)

    def test_constraint_ignored_for_other_statuses(self):
        """Test constraint sniffing only applies to 409/500."""
        error = translate_error(400, {"error": f"bad {EMAIL_CONSTRAINT}"})
        assert not isinstance(error, DuplicateEmailError)
        assert type(error) is ApiError

    def test_error_field_used_as_message(self):
        """Test the body's error field becomes the message."""
        error = translate_error(404, {"error": "Recipe not found"})
        assert str(error) == "Recipe not found"
        assert error.status_code == 404

    def test_message_field_used_as_message(self):
        """Test the body's message field is the fallback."""
        error = translate_error(400, {"message": "Title is required"})
        assert str(error) == "Title is required"

    def test_generic_message_without_body(self):
        """Test an empty body yields a generic status message."""
        error = translate_error(503, None)
        assert str(error) == "Request failed with status 503"
        assert error.payload is None


class TestTransportClassification:
    """Tests for is_transport_error and user_message."""

    def test_transport_error_instance(self):
        """Test TransportError is always a transport failure."""
        assert is_transport_error(TransportError("timed out"))

    @pytest.mark.parametrize("text", ["Network Error", "blocked by CORS policy"])
    def test_marker_text(self, text):
        """Test marker substrings in any exception are recognized."""
        assert is_transport_error(RuntimeError(text))

    def test_api_error_is_not_transport(self):
        """Test an ordinary API failure is not a transport failure."""
        assert not is_transport_error(ApiError("Recipe not found", status_code=404))

    def test_user_message_for_transport(self):
        """Test transport failures get the connectivity message."""
        assert user_message(TransportError("Network Error: boom")).startswith("Could not reach the server")

    def test_user_message_for_library_error(self):
        """Test library errors show their own message."""
        assert user_message(DuplicateUsernameError()) == "Username already exists. Please choose a different username."

    def test_user_message_hides_unexpected_errors(self):
        """Test unexpected exceptions are reported generically."""
        assert user_message(KeyError("token")) == "Something went wrong. Please try again later."


class TestValidationError:
    """Tests for ValidationError."""

    def test_message_lists_fields(self):
        """Test the message names each failing field."""
        error = ValidationError({"title": "Title is required", "steps": "Steps are required"})
        assert str(error) == "title: Title is required; steps: Steps are required"
        assert error.errors["title"] == "Title is required"
