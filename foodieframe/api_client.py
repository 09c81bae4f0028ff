"""
HTTP layer for the FoodieFrame REST backend.

ApiClient is the single place that talks to the network. All resource modules
call ApiClient.request() and get back the raw requests.Response; callers read
.json() themselves.

Key behaviour:
- Two requests.Session instances: one with JSON default headers and one for
  multipart uploads. A multipart body needs requests to generate its own
  Content-Type (with boundary), so the two cannot share defaults.
- The bearer token is read from the SessionStore on every request, so logging
  out takes effect for the very next call.
- Transport failures become TransportError; HTTP failures go through
  errors.translate_error().
- A 401 from any endpoint clears the session and calls on_unauthorized (the
  frontend uses it to send the user back to the login page). On a thread that
  runs with a pinned session (SessionStore.pinned) the error is only raised;
  the thread that pinned it calls expire_session().
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests

from foodieframe.config import BackendConfig
from foodieframe.errors import AuthenticationError, TransportError, translate_error
from foodieframe.session import SessionStore

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _response_payload(response: requests.Response) -> Any:
    """Decode a response body as JSON when possible, else return the text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """
    Low-level client for the FoodieFrame REST API.

    Args:
        session_store: Where the bearer token is read from and cleared on 401
        base_url: API base URL (default: BackendConfig.get_base_url())
        upload_url: Base URL for multipart uploads. Precedence: this argument,
                    then FOODIEFRAME_UPLOAD_URL, then the effective base_url
        timeout: Request timeout in seconds (default: BackendConfig.get_timeout())
        on_unauthorized: Called with no arguments after a 401 cleared the session
    """

    def __init__(
        self,
        session_store: SessionStore,
        base_url: Optional[str] = None,
        upload_url: Optional[str] = None,
        timeout: Optional[float] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ) -> None:
        self.session_store = session_store
        self.base_url = (base_url or BackendConfig.get_base_url()).rstrip("/")
        self.upload_url = (upload_url or BackendConfig.get_upload_url_override() or self.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else BackendConfig.get_timeout()
        self.on_unauthorized = on_unauthorized

        self._json_http = requests.Session()
        self._json_http.headers.update(JSON_HEADERS)

        self._multipart_http = requests.Session()
        self._multipart_http.headers.update({"Accept": "application/json"})

    def auth_headers(self) -> Dict[str, str]:
        """Get the Authorization header for the current session, if any."""
        token = self.session_store.get_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        multipart: bool = False,
    ) -> requests.Response:
        """
        Send a request to the backend.

        Args:
            method: HTTP method ("GET", "POST", ...)
            path: Path relative to the base URL (e.g. "/posts/3")
            params: Query string parameters
            json: JSON body
            data: Form fields or raw body
            files: Multipart files (only with multipart=True)
            headers: Extra headers for this request
            multipart: Use the multipart session and the upload base URL

        Returns:
            The raw requests.Response for a 2xx/3xx answer.

        Raises:
            TransportError: The backend could not be reached.
            AuthenticationError: The backend answered 401. The session is cleared first.
            ApiError: Any other 4xx/5xx answer (possibly a more specific subclass).
        """
        http = self._multipart_http if multipart else self._json_http
        base_url = self.upload_url if multipart else self.base_url
        url = f"{base_url}/{path.lstrip('/')}"

        request_headers = self.auth_headers()
        if headers:
            request_headers.update(headers)

        logger.debug("%s %s params=%r", method, url, params)
        try:
            response = http.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=request_headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("%s %s timed out after %.1fs", method, url, self.timeout)
            raise TransportError("Network Error: the request timed out.") from e
        except requests.exceptions.ConnectionError as e:
            logger.warning("%s %s could not connect: %s", method, url, e)
            raise TransportError("Network Error: could not connect to the server.") from e
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise TransportError(f"Network Error: {e}") from e

        if response.status_code >= 400:
            self._raise_for_failure(method, url, response)
        return response

    def _raise_for_failure(self, method: str, url: str, response: requests.Response) -> None:
        payload = _response_payload(response)
        error = translate_error(response.status_code, payload)

        if isinstance(error, AuthenticationError):
            if self.session_store.is_pinned():
                # Worker thread; the thread that pinned the session expires it
                logger.warning("%s %s returned 401 on a pinned session", method, url)
            else:
                logger.warning("%s %s returned 401; clearing session", method, url)
                self.expire_session()
        elif response.status_code >= 500:
            logger.error("%s %s returned %d: %s", method, url, response.status_code, str(payload)[:200])
        else:
            logger.warning("%s %s returned %d: %s", method, url, response.status_code, str(payload)[:200])

        raise error

    def expire_session(self) -> None:
        """Clear the stored session and notify on_unauthorized."""
        self.session_store.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    def close(self) -> None:
        """Close both underlying HTTP sessions."""
        self._json_http.close()
        self._multipart_http.close()
