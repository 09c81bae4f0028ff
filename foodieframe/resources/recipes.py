"""
Recipe endpoints. The backend calls recipes "posts".

Create/update send JSON. upload_recipe() sends the same fields plus image and
video files as multipart/form-data through the upload session.
"""

from typing import Any, Dict, Optional, Union

import requests

from foodieframe.models import Recipe

from .base import BaseResource, as_payload

# Form field names expected by POST /posts/upload
UPLOAD_FIELDS = ("title", "description", "category", "steps", "tags", "userID")

RecipeInput = Union[Recipe, Dict[str, Any]]


class RecipeResource(BaseResource):
    prefix = "/posts"

    def get_all_recipes(self) -> requests.Response:
        return self._get()

    def get_recipe(self, recipe_id: int) -> requests.Response:
        return self._get(recipe_id)

    def create_recipe(self, recipe: RecipeInput) -> requests.Response:
        return self._post(json=as_payload(recipe))

    def update_recipe(self, recipe_id: int, recipe: RecipeInput) -> requests.Response:
        return self._put(recipe_id, json=as_payload(recipe))

    def delete_recipe(self, recipe_id: int) -> requests.Response:
        return self._delete(recipe_id)

    def get_user_recipes(self, user_id: int) -> requests.Response:
        return self._get("user", user_id)

    def upload_recipe(
        self,
        recipe: RecipeInput,
        image_file: Optional[Any] = None,
        video_file: Optional[Any] = None,
    ) -> requests.Response:
        """
        Create a recipe with media via POST /posts/upload.

        Args:
            recipe: Recipe fields (title, description, category, steps, tags, userID)
            image_file: Optional file in any form requests accepts
                        (file object or (filename, fileobj, content_type) tuple)
            video_file: Optional video file, same forms as image_file

        Returns:
            Raw response; body is the created recipe.
        """
        payload = as_payload(recipe)
        fields = {name: str(payload[name]) for name in UPLOAD_FIELDS if payload.get(name) is not None}
        files: Dict[str, Any] = {}
        if image_file is not None:
            files["imageFile"] = image_file
        if video_file is not None:
            files["videoFile"] = video_file
        return self._upload("upload", fields=fields, files=files)
