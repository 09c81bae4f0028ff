"""Event endpoints under /events, including multipart image upload."""

from typing import Any, Dict, Optional, Union

import requests

from foodieframe.models import Event

from .base import BaseResource, as_payload

UPLOAD_FIELDS = ("title", "description", "date", "time", "location", "userId")

EventInput = Union[Event, Dict[str, Any]]


class EventResource(BaseResource):
    prefix = "/events"

    def get_all_events(self) -> requests.Response:
        return self._get()

    def get_event(self, event_id: int) -> requests.Response:
        return self._get(event_id)

    def create_event(self, event: EventInput) -> requests.Response:
        return self._post(json=as_payload(event))

    def update_event(self, event_id: int, event: EventInput) -> requests.Response:
        return self._put(event_id, json=as_payload(event))

    def delete_event(self, event_id: int) -> requests.Response:
        return self._delete(event_id)

    def get_user_events(self, user_id: int) -> requests.Response:
        return self._get("user", user_id)

    def search_events(self, term: str) -> requests.Response:
        return self._get("search", params={"term": term})

    def upload_event(self, event: EventInput, image_file: Optional[Any] = None) -> requests.Response:
        """Create an event with an image via POST /events/upload (multipart)."""
        payload = as_payload(event)
        fields = {name: str(payload[name]) for name in UPLOAD_FIELDS if payload.get(name) is not None}
        files = {"imageFile": image_file} if image_file is not None else {}
        return self._upload("upload", fields=fields, files=files)
