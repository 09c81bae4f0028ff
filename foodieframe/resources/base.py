"""
Base class for REST resource groups.

Every resource group (recipes, events, interactions, ...) wraps one path prefix
of the backend and exposes one method per operation. Methods take plain values
(ids, payloads), build the path, and return the raw requests.Response from
ApiClient.request(). A handful of "check"/"count" helpers unwrap their answer
because the raw value is all a caller ever wants.

All resource groups must:
- Set the `prefix` attribute (e.g. "/posts")
- Route every call through self.client so auth and error handling stay central
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from foodieframe.api_client import ApiClient


class BaseResource:
    """
    Base for a group of endpoints sharing one path prefix.

    Attributes:
        prefix: Path prefix for the group, relative to the API base URL
    """
    prefix: str = ""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def _path(self, *parts: Any) -> str:
        """Join the prefix and path parts into one path."""
        segments = [self.prefix.strip("/")] + [quote(str(part), safe="") for part in parts]
        return "/" + "/".join(segment for segment in segments if segment)

    def _get(self, *parts: Any, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.client.request("GET", self._path(*parts), params=params)

    def _post(self, *parts: Any, json: Any = None, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.client.request("POST", self._path(*parts), json=json, params=params)

    def _put(self, *parts: Any, json: Any = None) -> requests.Response:
        return self.client.request("PUT", self._path(*parts), json=json)

    def _delete(self, *parts: Any) -> requests.Response:
        return self.client.request("DELETE", self._path(*parts))

    def _upload(self, *parts: Any, fields: Dict[str, str], files: Dict[str, Any]) -> requests.Response:
        """
        POST a multipart/form-data body through the upload session.

        Plain fields are sent as nameless file parts, so the body is multipart
        even when no file is attached (requests falls back to urlencoded
        otherwise).
        """
        body: Dict[str, Any] = {name: (None, value) for name, value in fields.items()}
        body.update(files)
        return self.client.request("POST", self._path(*parts), files=body, multipart=True)


def as_payload(value: Any) -> Any:
    """Turn a model into its wire dict; pass plain dicts through unchanged."""
    to_payload = getattr(value, "to_payload", None)
    if callable(to_payload):
        return to_payload()
    return value
