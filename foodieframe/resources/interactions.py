"""
Interaction endpoints under /interactions.

An interaction is a typed user action against a recipe: LIKE, FAVORITE or
COMMENT. LIKE and FAVORITE are one row per (user, recipe, type); comments can
repeat and are the only type that supports update.
"""

from typing import Optional, Union

import requests

from foodieframe.models import InteractionType

from .base import BaseResource

TypeInput = Union[InteractionType, str]


def _type_name(interaction_type: TypeInput) -> str:
    return InteractionType(interaction_type).value


class InteractionResource(BaseResource):
    prefix = "/interactions"

    def create_interaction(
        self,
        user_id: int,
        recipe_id: int,
        interaction_type: TypeInput,
        content: Optional[str] = None,
    ) -> requests.Response:
        """
        POST /interactions/users/:u/recipes/:r?type=...

        The backend reads the body as a raw string, so comment content is sent
        as text/plain rather than JSON.
        """
        params = {"type": _type_name(interaction_type)}
        if content is None:
            return self._post("users", user_id, "recipes", recipe_id, params=params)
        return self.client.request(
            "POST",
            self._path("users", user_id, "recipes", recipe_id),
            params=params,
            data=content.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    def create_like(self, user_id: int, recipe_id: int) -> requests.Response:
        return self.create_interaction(user_id, recipe_id, InteractionType.LIKE)

    def create_favorite(self, user_id: int, recipe_id: int) -> requests.Response:
        return self.create_interaction(user_id, recipe_id, InteractionType.FAVORITE)

    def create_comment(self, user_id: int, recipe_id: int, content: str) -> requests.Response:
        return self.create_interaction(user_id, recipe_id, InteractionType.COMMENT, content)

    def get_recipe_interactions(self, recipe_id: int) -> requests.Response:
        return self._get("recipes", recipe_id)

    def get_recipe_interactions_by_type(self, recipe_id: int, interaction_type: TypeInput) -> requests.Response:
        return self._get("recipes", recipe_id, "type", _type_name(interaction_type))

    def get_recipe_comments(self, recipe_id: int) -> requests.Response:
        return self.get_recipe_interactions_by_type(recipe_id, InteractionType.COMMENT)

    def get_user_interactions_by_type(self, user_id: int, interaction_type: TypeInput) -> requests.Response:
        return self._get("users", user_id, "type", _type_name(interaction_type))

    def get_user_favorites(self, user_id: int) -> requests.Response:
        return self.get_user_interactions_by_type(user_id, InteractionType.FAVORITE)

    def get_interaction_count(self, recipe_id: int, interaction_type: TypeInput) -> requests.Response:
        """GET .../type/:t/count. Body is a bare integer."""
        return self._get("recipes", recipe_id, "type", _type_name(interaction_type), "count")

    def check_user_interaction(self, user_id: int, recipe_id: int, interaction_type: TypeInput) -> requests.Response:
        """GET .../type/:t/check. Body is a bare boolean."""
        return self._get("users", user_id, "recipes", recipe_id, "type", _type_name(interaction_type), "check")

    def update_comment(self, interaction_id: int, content: str) -> requests.Response:
        return self.client.request(
            "PUT",
            self._path(interaction_id),
            data=content.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    def delete_interaction(self, interaction_id: int) -> requests.Response:
        return self._delete(interaction_id)

    def delete_user_interaction(self, user_id: int, recipe_id: int, interaction_type: TypeInput) -> requests.Response:
        """Remove the user's own LIKE/FAVORITE on a recipe."""
        return self._delete("users", user_id, "recipes", recipe_id, "type", _type_name(interaction_type))

    def delete_type_interactions(self, recipe_id: int, interaction_type: TypeInput) -> requests.Response:
        """Remove every interaction of one type on a recipe (all users)."""
        return self._delete("recipes", recipe_id, "type", _type_name(interaction_type))
