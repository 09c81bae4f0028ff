"""
Pre-submission form validation.

These checks run before any request is built. A failing form raises
ValidationError with one message per field and nothing is sent; everything
beyond these checks is left to the backend.
"""

from typing import Any, Dict, Mapping, Optional

from foodieframe.errors import ValidationError

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10


def _text(data: Mapping[str, Any], *names: str) -> str:
    for name in names:
        value = data.get(name)
        if value is not None:
            return str(value)
    return ""


def _require(errors: Dict[str, str], data: Mapping[str, Any], field: str, label: str) -> Optional[str]:
    value = _text(data, field)
    if not value.strip():
        errors[field] = f"{label} is required"
        return None
    return value


def validate_recipe(data: Mapping[str, Any]) -> None:
    """
    Validate a recipe form.

    Rules: title required (at least 3 characters), description required (at
    least 10 characters), category and steps required, and the author's user id
    must be set.

    Raises:
        ValidationError: If any rule fails.
    """
    errors: Dict[str, str] = {}

    title = _require(errors, data, "title", "Title")
    if title is not None and len(title) < MIN_TITLE_LENGTH:
        errors["title"] = f"Title must be at least {MIN_TITLE_LENGTH} characters long"

    description = _require(errors, data, "description", "Description")
    if description is not None and len(description) < MIN_DESCRIPTION_LENGTH:
        errors["description"] = f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long"

    _require(errors, data, "category", "Category")

    if not _text(data, "steps").strip():
        errors["steps"] = "Steps are required"

    if data.get("userID") is None and data.get("userId") is None and data.get("user_id") is None:
        errors["userID"] = "User ID is required"

    if errors:
        raise ValidationError(errors)


def validate_event(data: Mapping[str, Any]) -> None:
    """Validate an event form: title, description, date and location are required."""
    errors: Dict[str, str] = {}
    for field, label in (
        ("title", "Title"),
        ("description", "Description"),
        ("date", "Date"),
        ("location", "Location"),
    ):
        _require(errors, data, field, label)
    if errors:
        raise ValidationError(errors)


def validate_registration(data: Mapping[str, Any]) -> None:
    """Validate a registration form. All fields are required."""
    errors: Dict[str, str] = {}
    for field, label in (
        ("username", "Username"),
        ("email", "Email"),
        ("password", "Password"),
        ("name", "Name"),
    ):
        _require(errors, data, field, label)
    if errors:
        raise ValidationError({"form": "Please fill in all required fields", **errors})


def validate_comment(content: Optional[str]) -> str:
    """
    Validate comment text.

    Returns:
        The comment with surrounding whitespace removed.
    """
    text = (content or "").strip()
    if not text:
        raise ValidationError({"content": "Comment cannot be empty"})
    return text
