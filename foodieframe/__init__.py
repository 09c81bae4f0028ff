"""
FoodieFrame client library.

Talks to the FoodieFrame recipe-sharing backend over REST:
- session: who is logged in, persisted between runs
- api_client / resources: every endpoint group (recipes, events, interactions,
  saved recipes, friends, recipe groups, categories, users)
- interaction_state: like/save/comment state of a recipe for the current user
- listing: the recipe list with bounded retry
"""

from foodieframe.client import FoodieFrameClient
from foodieframe.errors import (
    ApiError,
    AuthenticationError,
    DuplicateEmailError,
    DuplicateUsernameError,
    FoodieFrameError,
    TransportError,
    ValidationError,
    user_message,
)
from foodieframe.interaction_state import CommentThread, InteractionState
from foodieframe.session import FileSessionStorage, MemorySessionStorage, SessionStore

__all__ = [
    "FoodieFrameClient",
    "SessionStore",
    "MemorySessionStorage",
    "FileSessionStorage",
    "InteractionState",
    "CommentThread",
    "FoodieFrameError",
    "ApiError",
    "TransportError",
    "AuthenticationError",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "ValidationError",
    "user_message",
]
