"""
REST resource groups of the FoodieFrame backend.

One module per backend resource; each exposes a BaseResource subclass with one
method per (resource, operation) pair.
"""

from .auth import AuthResource
from .categories import CategoryResource
from .events import EventResource
from .friends import FriendResource
from .groups import RecipeGroupResource
from .interactions import InteractionResource
from .recipes import RecipeResource
from .saved_recipes import SavedRecipeResource
from .users import UserResource

__all__ = [
    "AuthResource",
    "CategoryResource",
    "EventResource",
    "FriendResource",
    "RecipeGroupResource",
    "InteractionResource",
    "RecipeResource",
    "SavedRecipeResource",
    "UserResource",
]
