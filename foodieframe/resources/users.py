"""User endpoints under /users."""

from typing import Any, Dict

import requests

from .base import BaseResource


class UserResource(BaseResource):
    prefix = "/users"

    def create_user(self, user: Dict[str, Any]) -> requests.Response:
        return self._post(json=user)

    def get_user(self, user_id: int) -> requests.Response:
        return self._get(user_id)

    def update_user(self, user_id: int, user: Dict[str, Any]) -> requests.Response:
        return self._put(user_id, json=user)

    def delete_user(self, user_id: int) -> requests.Response:
        return self._delete(user_id)
