"""
Session store for the FoodieFrame client.

The session is the one piece of shared state in the client: the authenticated
user and their bearer token. It is held by an explicit SessionStore object that
is handed to the API client at construction time, so two clients (or two test
cases) never share credentials by accident.

The store persists exactly one serialized session through a SessionStorage
backend. Backends differ only in where the JSON document lives:
- MemorySessionStorage: process memory, one per store (tests, scripts)
- FileSessionStorage: a JSON file, survives restarts
- StreamlitSessionStorage (streamlit_app.utils.session): st.session_state

Malformed persisted data is treated as "no session" and cleared.
"""

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from foodieframe.models import Session, User

if TYPE_CHECKING:
    from foodieframe.resources.auth import AuthResource
    from foodieframe.resources.users import UserResource

logger = logging.getLogger(__name__)

# The single key every backend stores the session under
STORAGE_KEY = "user"


class SessionStorage(ABC):
    """
    Abstract persistence for one serialized session.

    Implementations store an opaque JSON string; they never parse it.
    """

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the stored JSON document, or None when nothing is stored."""
        pass

    @abstractmethod
    def save(self, raw: str) -> None:
        """Replace the stored document."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored document. Must not fail when nothing is stored."""
        pass


class MemorySessionStorage(SessionStorage):
    """Keeps the session in a per-instance dict."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def load(self) -> Optional[str]:
        return self._data.get(STORAGE_KEY)

    def save(self, raw: str) -> None:
        self._data[STORAGE_KEY] = raw

    def clear(self) -> None:
        self._data.pop(STORAGE_KEY, None)


class FileSessionStorage(SessionStorage):
    """
    Keeps the session in a JSON file so it survives restarts.

    Args:
        path: File to store the session in. Parent directories are created on save.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read session file %s: %s", self.path, e)
            return None

    def save(self, raw: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(raw, encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class SessionStore:
    """
    Holds the authenticated user's identity and token.

    login/register/update_profile need the API; the FoodieFrameClient binds its
    auth and user resources to the store when it is constructed. Reads
    (get_current_user, get_token) work unbound.
    """

    def __init__(self, storage: Optional[SessionStorage] = None) -> None:
        self.storage = storage if storage is not None else MemorySessionStorage()
        self._auth: Optional["AuthResource"] = None
        self._users: Optional["UserResource"] = None
        self._local = threading.local()

    def bind(self, auth: "AuthResource", users: "UserResource") -> None:
        """Attach the API resources used by login, register and update_profile."""
        self._auth = auth
        self._users = users

    def _require_bound(self) -> None:
        if self._auth is None or self._users is None:
            raise RuntimeError("SessionStore is not bound to an API client. Create a FoodieFrameClient with it first.")

    # -- persistence ---------------------------------------------------------

    @contextmanager
    def pinned(self, session: Optional[Session]) -> Iterator[None]:
        """
        Serve `session` to the current thread without reading storage.

        Storage backends such as st.session_state are only readable on the
        thread that owns them. Worker threads run their requests inside
        pinned() with the session the caller read. Writes still go to storage.
        """
        previous = getattr(self._local, "pin", None)
        self._local.pin = (session,)
        try:
            yield
        finally:
            self._local.pin = previous

    def is_pinned(self) -> bool:
        return getattr(self._local, "pin", None) is not None

    def get_current_user(self) -> Optional[Session]:
        """
        Read the persisted session.

        Returns:
            The Session, or None when nothing (or something unreadable) is stored.
        """
        pin = getattr(self._local, "pin", None)
        if pin is not None:
            return pin[0]
        raw = self.storage.load()
        if not raw:
            return None
        try:
            return Session.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Discarding malformed persisted session: %s", e)
            self.storage.clear()
            return None

    def get_token(self) -> Optional[str]:
        session = self.get_current_user()
        return session.token if session else None

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None

    def set_session(self, session: Session) -> None:
        """Persist a session, replacing any previous one."""
        self.storage.save(session.model_dump_json())

    def clear(self) -> None:
        self.storage.clear()

    # -- auth flows ----------------------------------------------------------

    def login(self, credentials: Dict[str, Any]) -> Session:
        """
        Log in and persist the resulting session.

        Args:
            credentials: {"email": ..., "password": ...}

        Returns:
            The new Session.

        Raises:
            ApiError: If the backend rejects the request.
            ValueError: If the response does not contain a usable session.
        """
        self._require_bound()
        response = self._auth.login(credentials)
        session = Session.from_login_response(response.json())
        self.set_session(session)
        logger.info("Logged in as user %s", session.user_id)
        return session

    def register(self, user_data: Dict[str, Any]) -> Union[Session, Dict[str, Any]]:
        """
        Register a new account.

        When the backend answers with a token the user is logged in straight
        away and the Session is returned. Otherwise the created user payload is
        returned and the caller has to log in.
        """
        self._require_bound()
        response = self._auth.register(user_data)
        data = response.json()
        if isinstance(data, dict) and data.get("token"):
            session = Session.from_login_response(data)
            self.set_session(session)
            logger.info("Registered and logged in as user %s", session.user_id)
            return session
        logger.info("Registered new account; login required")
        return data

    def logout(self) -> None:
        """Forget the session. Later requests carry no bearer token."""
        self.clear()
        logger.info("Logged out")

    def update_profile(self, user_id: int, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a user and, for the current user, refresh the persisted copy.

        The token is kept; only user fields are merged.
        """
        self._require_bound()
        response = self._users.update_user(user_id, user_data)
        updated = response.json()
        current = self.get_current_user()
        if current is not None and current.user_id == user_id and isinstance(updated, dict):
            merged = {**current.user.model_dump(), **updated}
            self.set_session(Session(user=User(**merged), token=current.token))
        return updated
