"""Recipe group endpoints under /recipe-groups, including membership."""

from typing import Any, Dict, Union

import requests

from foodieframe.models import MemberRole, MembershipStatus, RecipeGroup

from .base import BaseResource, as_payload

GroupInput = Union[RecipeGroup, Dict[str, Any]]


def _unwrap_bool(data: Any, *keys: str) -> bool:
    if isinstance(data, dict):
        for key in keys:
            if key in data:
                return bool(data[key])
        return False
    return bool(data)


class RecipeGroupResource(BaseResource):
    prefix = "/recipe-groups"

    def create_group(self, group: GroupInput) -> requests.Response:
        return self._post(json=as_payload(group))

    def get_all_groups(self) -> requests.Response:
        return self._get()

    def get_group(self, group_id: int) -> requests.Response:
        return self._get(group_id)

    def get_groups_by_creator(self, creator_id: int) -> requests.Response:
        return self._get("creator", creator_id)

    def search_groups(self, name: str) -> requests.Response:
        return self._get("search", params={"name": name})

    def get_public_groups(self) -> requests.Response:
        return self._get("public")

    def update_group(self, group_id: int, group: GroupInput) -> requests.Response:
        return self._put(group_id, json=as_payload(group))

    def delete_group(self, group_id: int) -> requests.Response:
        return self._delete(group_id)

    def add_member(
        self,
        group_id: int,
        user_id: int,
        role: Union[MemberRole, str] = MemberRole.MEMBER,
    ) -> requests.Response:
        return self._post(group_id, "members", json={"userId": user_id, "role": MemberRole(role).value})

    def get_members(self, group_id: int) -> requests.Response:
        return self._get(group_id, "members")

    def get_active_members(self, group_id: int) -> requests.Response:
        return self._get(group_id, "members", "active")

    def get_admins(self, group_id: int) -> requests.Response:
        return self._get(group_id, "admins")

    def update_member_role(self, group_id: int, user_id: int, role: Union[MemberRole, str]) -> requests.Response:
        return self._put(group_id, "members", user_id, "role", json={"role": MemberRole(role).value})

    def update_member_status(
        self,
        group_id: int,
        user_id: int,
        status: Union[MembershipStatus, str],
    ) -> requests.Response:
        return self._put(group_id, "members", user_id, "status", json={"status": MembershipStatus(status).value})

    def remove_member(self, group_id: int, user_id: int) -> requests.Response:
        return self._delete(group_id, "members", user_id)

    def get_user_memberships(self, user_id: int) -> requests.Response:
        return self._get("user", user_id, "memberships")

    def is_member(self, group_id: int, user_id: int) -> bool:
        data = self._get(group_id, "members", user_id, "check").json()
        return _unwrap_bool(data, "isMember", "member")

    def is_admin(self, group_id: int, user_id: int) -> bool:
        data = self._get(group_id, "admins", user_id, "check").json()
        return _unwrap_bool(data, "isAdmin", "admin")

    def count_members(self, group_id: int) -> int:
        data = self._get(group_id, "members", "count").json()
        if isinstance(data, dict):
            return int(data.get("count", 0))
        return int(data or 0)
