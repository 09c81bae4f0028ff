"""
Friend endpoints under /friends.

A friendship is a directional request record (userId asked friendId). The
backend derives the views: friends (accepted either way), pending (incoming)
and sent (outgoing).
"""

import requests

from .base import BaseResource


class FriendResource(BaseResource):
    prefix = "/friends"

    def send_request(self, user_id: int, friend_id: int) -> requests.Response:
        return self._post("request", json={"userId": user_id, "friendId": friend_id})

    def accept_request(self, friendship_id: int) -> requests.Response:
        return self._put("accept", friendship_id)

    def accept_from(self, user_id: int, friend_id: int) -> requests.Response:
        """Accept the request friend_id sent to user_id."""
        return self._put("users", user_id, "accept", friend_id)

    def reject_request(self, friendship_id: int) -> requests.Response:
        return self._delete(friendship_id)

    def reject_from(self, user_id: int, friend_id: int) -> requests.Response:
        return self._delete("users", user_id, "reject", friend_id)

    def remove_friend(self, user_id: int, friend_id: int) -> requests.Response:
        return self._delete("users", user_id, "remove", friend_id)

    def block_user(self, user_id: int, blocked_user_id: int) -> requests.Response:
        return self._post("users", user_id, "block", blocked_user_id)

    def unblock_user(self, user_id: int, blocked_user_id: int) -> requests.Response:
        return self._delete("users", user_id, "unblock", blocked_user_id)

    def get_friends(self, user_id: int) -> requests.Response:
        return self._get("users", user_id)

    def get_pending(self, user_id: int) -> requests.Response:
        """Incoming requests waiting for user_id to answer."""
        return self._get("users", user_id, "pending")

    def get_sent(self, user_id: int) -> requests.Response:
        """Outgoing requests user_id is waiting on."""
        return self._get("users", user_id, "sent")

    def get_blocked(self, user_id: int) -> requests.Response:
        return self._get("users", user_id, "blocked")

    def are_friends(self, user_id: int, other_user_id: int) -> bool:
        data = self._get("users", user_id, "is-friend", other_user_id).json()
        if isinstance(data, dict):
            return bool(data.get("areFriends", False))
        return bool(data)
