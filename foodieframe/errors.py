"""
Error taxonomy for the FoodieFrame client.

Every failure the client raises is a FoodieFrameError. HTTP failures are mapped
onto ApiError subclasses by translate_error(), which is also the only place that
knows about the backend's database constraint names.
"""

import json
from typing import Any, Dict, Optional

# Unique-key constraint names the backend's database leaks into 500 responses
EMAIL_CONSTRAINT = "UK_6DOTKOTT2KJSP8VW4D0M25FB7"
USERNAME_CONSTRAINT = "UK_R43AF9AP4EDM43MMTQ01ODDJ6"

# Structured codes take precedence over constraint sniffing when present
EMAIL_ERROR_CODE = "DUPLICATE_EMAIL"
USERNAME_ERROR_CODE = "DUPLICATE_USERNAME"

TRANSPORT_MARKERS = ("CORS", "Network Error")


class FoodieFrameError(Exception):
    """Base class for all client errors."""
    pass


class ApiError(FoodieFrameError):
    """
    A request to the backend failed.

    Attributes:
        status_code: HTTP status, or None when no response was received
        message: User-readable message
        payload: Raw response body (parsed JSON when possible, else text)
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class TransportError(ApiError):
    """The backend could not be reached (connection, timeout, CORS)."""
    pass


class AuthenticationError(ApiError):
    """The backend rejected the bearer credential (HTTP 401)."""

    def __init__(self, message: str = "Authentication failed. Please log in again.",
                 status_code: Optional[int] = 401, payload: Any = None) -> None:
        super().__init__(message, status_code=status_code, payload=payload)


class DuplicateEmailError(ApiError):
    """Registration or profile update used an email that is already taken."""

    def __init__(self, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(
            "Email address already exists. Please use a different email.",
            status_code=status_code,
            payload=payload,
        )


class DuplicateUsernameError(ApiError):
    """Registration or profile update used a username that is already taken."""

    def __init__(self, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(
            "Username already exists. Please choose a different username.",
            status_code=status_code,
            payload=payload,
        )


class ValidationError(FoodieFrameError):
    """
    Client-side form validation failed; no request was sent.

    Attributes:
        errors: Mapping of field name to message
    """

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(summary or "Invalid input")


def _payload_text(payload: Any) -> str:
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    try:
        return json.dumps(payload)
    except (TypeError, ValueError):
        return str(payload)


def _payload_field(payload: Any, *names: str) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    for name in names:
        value = payload.get(name)
        if isinstance(value, str) and value.strip():
            return value
    return None


def translate_error(status_code: Optional[int], payload: Any = None) -> ApiError:
    """
    Map an HTTP failure onto the client error taxonomy.

    Args:
        status_code: HTTP status code of the failed response
        payload: Response body (dict/list when JSON, else text)

    Returns:
        The ApiError subclass instance matching the failure. The caller raises it.
    """
    if status_code == 401:
        return AuthenticationError(payload=payload)

    code = _payload_field(payload, "code")
    if code == EMAIL_ERROR_CODE:
        return DuplicateEmailError(status_code=status_code, payload=payload)
    if code == USERNAME_ERROR_CODE:
        return DuplicateUsernameError(status_code=status_code, payload=payload)

    if status_code in (409, 500):
        text = _payload_text(payload).upper()
        if EMAIL_CONSTRAINT in text:
            return DuplicateEmailError(status_code=status_code, payload=payload)
        if USERNAME_CONSTRAINT in text:
            return DuplicateUsernameError(status_code=status_code, payload=payload)

    message = _payload_field(payload, "error", "message")
    if message is None:
        message = f"Request failed with status {status_code}"
    return ApiError(message, status_code=status_code, payload=payload)


def is_transport_error(exc: BaseException) -> bool:
    """Check whether an exception means the backend was unreachable."""
    if isinstance(exc, TransportError):
        return True
    text = str(exc)
    return any(marker in text for marker in TRANSPORT_MARKERS)


def user_message(exc: BaseException) -> str:
    """
    Get the text to show a user for any exception.

    Library errors already carry readable messages. Anything else is reported
    generically so internals are not leaked into the UI.
    """
    if is_transport_error(exc):
        return "Could not reach the server. Please check your connection and try again."
    if isinstance(exc, FoodieFrameError):
        return str(exc)
    return "Something went wrong. Please try again later."
