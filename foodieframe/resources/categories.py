"""Category endpoints under /categories."""

from typing import Any, Dict, Union

import requests

from foodieframe.models import Category

from .base import BaseResource, as_payload

CategoryInput = Union[Category, Dict[str, Any]]


class CategoryResource(BaseResource):
    prefix = "/categories"

    def create_category(self, category: CategoryInput) -> requests.Response:
        return self._post(json=as_payload(category))

    def get_all_categories(self) -> requests.Response:
        return self._get()

    def get_category(self, category_id: int) -> requests.Response:
        return self._get(category_id)

    def get_category_by_name(self, name: str) -> requests.Response:
        return self._get("name", name)

    def search_categories(self, name: str) -> requests.Response:
        return self._get("search", params={"name": name})

    def update_category(self, category_id: int, category: CategoryInput) -> requests.Response:
        return self._put(category_id, json=as_payload(category))

    def delete_category(self, category_id: int) -> requests.Response:
        return self._delete(category_id)
