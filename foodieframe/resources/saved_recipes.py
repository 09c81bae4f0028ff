"""
Saved-recipe endpoints under /saved-recipes.

Saved recipes are the client's one favourite mechanism (see DESIGN.md); the
FAVORITE interaction endpoints remain available on InteractionResource for
reading older data but InteractionState does not use them.
"""

import logging
from typing import Optional

import requests

from foodieframe.errors import ApiError

from .base import BaseResource

logger = logging.getLogger(__name__)


class SavedRecipeResource(BaseResource):
    prefix = "/saved-recipes"

    def save_recipe(self, user_id: int, recipe_id: int, note: Optional[str] = None) -> requests.Response:
        body = {"note": note} if note is not None else None
        return self._post("users", user_id, "recipes", recipe_id, json=body)

    def get_user_saved_recipes(self, user_id: int) -> requests.Response:
        return self._get("users", user_id)

    def get_saved_recipe(self, user_id: int, recipe_id: int) -> requests.Response:
        return self._get("users", user_id, "recipes", recipe_id)

    def update_note(self, user_id: int, recipe_id: int, note: str) -> requests.Response:
        return self._put("users", user_id, "recipes", recipe_id, json={"note": note})

    def remove_saved_recipe(self, user_id: int, recipe_id: int) -> requests.Response:
        return self._delete("users", user_id, "recipes", recipe_id)

    def is_recipe_saved(self, user_id: Optional[int], recipe_id: Optional[int]) -> bool:
        """
        Check whether a user saved a recipe.

        Never raises: with no session, a missing id, or any API failure the
        answer is False.
        """
        if user_id is None or recipe_id is None:
            return False
        if not self.client.session_store.is_authenticated():
            return False
        try:
            data = self._get("users", user_id, "recipes", recipe_id, "check").json()
        except (ApiError, ValueError) as e:
            logger.warning("Could not check saved state for recipe %s: %s", recipe_id, e)
            return False
        if isinstance(data, dict):
            return bool(data.get("saved", False))
        return bool(data)

    def get_save_count(self, recipe_id: int) -> int:
        """How many users saved a recipe. Body: {"count": n}."""
        data = self._get("recipes", recipe_id, "count").json()
        if isinstance(data, dict):
            return int(data.get("count", 0))
        return int(data or 0)
