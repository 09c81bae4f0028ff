"""Authentication endpoints: /login and /register."""

from typing import Any, Dict

import requests

from .base import BaseResource


class AuthResource(BaseResource):
    prefix = ""

    def login(self, credentials: Dict[str, Any]) -> requests.Response:
        """POST /login with {"email", "password"}. Body: {"token", "user"}."""
        return self._post("login", json=credentials)

    def register(self, user_data: Dict[str, Any]) -> requests.Response:
        """POST /register. Duplicate email/username surface as specific ApiErrors."""
        return self._post("register", json=user_data)
