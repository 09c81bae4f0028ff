"""
FoodieFrameClient: one object wiring the session store, the HTTP layer and
every resource group together.

    store = SessionStore(FileSessionStorage(BackendConfig.get_session_file()))
    client = FoodieFrameClient(store)
    client.session.login({"email": "ana@example.com", "password": "secret"})
    recipes = client.recipes.get_all_recipes().json()
"""

from typing import Any, Optional

from foodieframe.api_client import ApiClient
from foodieframe.models import Session
from foodieframe.resources import (
    AuthResource,
    CategoryResource,
    EventResource,
    FriendResource,
    InteractionResource,
    RecipeGroupResource,
    RecipeResource,
    SavedRecipeResource,
    UserResource,
)
from foodieframe.session import SessionStore


class FoodieFrameClient:
    """
    Facade over the FoodieFrame REST API.

    Args:
        session_store: Session store to use (default: a fresh in-memory store)
        **client_kwargs: Passed to ApiClient (base_url, upload_url, timeout, on_unauthorized)
    """

    def __init__(self, session_store: Optional[SessionStore] = None, **client_kwargs: Any) -> None:
        self.session = session_store if session_store is not None else SessionStore()
        self.api = ApiClient(self.session, **client_kwargs)

        self.auth = AuthResource(self.api)
        self.users = UserResource(self.api)
        self.recipes = RecipeResource(self.api)
        self.events = EventResource(self.api)
        self.interactions = InteractionResource(self.api)
        self.saved_recipes = SavedRecipeResource(self.api)
        self.friends = FriendResource(self.api)
        self.groups = RecipeGroupResource(self.api)
        self.categories = CategoryResource(self.api)

        self.session.bind(self.auth, self.users)

    @property
    def current_user(self) -> Optional[Session]:
        return self.session.get_current_user()

    def close(self) -> None:
        self.api.close()
