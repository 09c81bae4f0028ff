"""
Client-side models for FoodieFrame entities.

This module is the mapping layer between the backend's JSON and the rest of the
client. The backend is inconsistent about field casing (userId vs userID,
image vs Image, steps vs Steps), so every model accepts all observed spellings
on input and serializes back to the backend's canonical spelling. Nothing
outside this module should read fallback chains off raw dicts.

# NOTE: Authoritative shapes live server-side. Models only ignore unknown fields
    (User keeps them) and never enforce server-side invariants.
"""

import logging
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Steps are stored as one text blob with "1.", "2." ... markers
STEP_MARKER = re.compile(r"\d+\.")


class InteractionType(str, Enum):
    LIKE = "LIKE"
    FAVORITE = "FAVORITE"
    COMMENT = "COMMENT"


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class FriendshipStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    BLOCKED = "BLOCKED"


class GroupPrivacy(str, Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class MemberRole(str, Enum):
    MEMBER = "MEMBER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class MembershipStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    BANNED = "BANNED"


class ApiModel(BaseModel):
    """Base for models read from the backend."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the backend's wire shape, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class User(BaseModel):
    """The authenticated user. Unknown backend fields are kept."""
    id: int
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    bio: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class Session(BaseModel):
    """The client-held record of the authenticated user and their bearer token."""
    user: User
    token: str

    @classmethod
    def from_login_response(cls, data: Dict[str, Any]) -> "Session":
        """
        Build a Session from a /login or /register response body.

        Accepts both {"token": ..., "user": {...}} and a flat body where the
        user fields sit next to the token.

        Raises:
            ValueError: If the body has no token or no user id.
        """
        if not isinstance(data, dict) or not data.get("token"):
            raise ValueError("Login response did not include a token")
        user_data = data.get("user")
        if not isinstance(user_data, dict):
            user_data = {key: value for key, value in data.items() if key != "token"}
        try:
            return cls(user=User(**user_data), token=data["token"])
        except PydanticValidationError as e:
            raise ValueError(f"Login response has an invalid user: {e}") from e

    @property
    def user_id(self) -> int:
        return self.user.id


class Recipe(ApiModel):
    """
    A recipe, stored by the backend as a "post".

    steps is one text blob with numbered markers; tags is comma-separated text.
    Use step_list() / tag_list() to read them as lists.
    """
    id: Optional[int] = None
    title: str = Field("", validation_alias=AliasChoices("title", "Title"))
    description: str = Field("", validation_alias=AliasChoices("description", "Description"))
    category: str = Field("", validation_alias=AliasChoices("category", "Category"))
    steps: str = Field("", validation_alias=AliasChoices("steps", "Steps"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("image", "Image"))
    video: Optional[str] = Field(None, validation_alias=AliasChoices("video", "Video"))
    tags: Optional[str] = Field(None, validation_alias=AliasChoices("tags", "Tags"))
    user_id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("userID", "userId", "user_id"),
        serialization_alias="userID",
    )
    difficulty: Optional[Difficulty] = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _unknown_difficulty_is_none(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        if isinstance(value, Difficulty):
            return value
        value = str(value).upper()
        if value not in Difficulty.__members__:
            return None
        return value

    @field_validator("title", "description", "category", "steps", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def step_list(self) -> List[str]:
        """Split the steps text on its numbered markers."""
        if not self.steps:
            return []
        return [step.strip() for step in STEP_MARKER.split(self.steps) if step.strip()]

    def tag_list(self) -> List[str]:
        """Split the comma-separated tags text."""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def is_owned_by(self, session: Optional[Session]) -> bool:
        """Check whether the session's user created this recipe."""
        if session is None or self.user_id is None:
            return False
        return self.user_id == session.user_id


class Interaction(ApiModel):
    id: Optional[int] = None
    user_id: int = Field(validation_alias=AliasChoices("userId", "userID", "user_id"), serialization_alias="userId")
    recipe_id: int = Field(validation_alias=AliasChoices("recipeId", "recipe_id"), serialization_alias="recipeId")
    type: InteractionType = Field(
        validation_alias=AliasChoices("interactionType", "type"),
        serialization_alias="interactionType",
    )
    content: Optional[str] = None
    created_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt"
    )
    updated_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt"
    )


class SavedRecipe(ApiModel):
    id: Optional[int] = None
    user_id: int = Field(validation_alias=AliasChoices("userId", "userID", "user_id"), serialization_alias="userId")
    post_id: int = Field(
        validation_alias=AliasChoices("postId", "recipeId", "post_id"), serialization_alias="postId"
    )
    note: Optional[str] = None
    saved_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("savedDate", "saved_date"), serialization_alias="savedDate"
    )


class Event(ApiModel):
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    date: str = ""
    time: str = ""
    location: str = ""
    image: Optional[str] = Field(None, validation_alias=AliasChoices("image", "Image"))
    user_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("userId", "userID", "user_id"), serialization_alias="userId"
    )

    def is_owned_by(self, session: Optional[Session]) -> bool:
        if session is None or self.user_id is None:
            return False
        return self.user_id == session.user_id


class Friendship(ApiModel):
    """A directional friend request record: user_id asked friend_id."""
    id: Optional[int] = None
    user_id: int = Field(validation_alias=AliasChoices("userId", "user_id"), serialization_alias="userId")
    friend_id: int = Field(validation_alias=AliasChoices("friendId", "friend_id"), serialization_alias="friendId")
    status: FriendshipStatus = FriendshipStatus.PENDING
    created_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("createdDate", "created_date"), serialization_alias="createdDate"
    )
    updated_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("updatedDate", "updated_date"), serialization_alias="updatedDate"
    )

    def other_party(self, user_id: int) -> int:
        """Get the id of the user on the other side of this record."""
        return self.friend_id if self.user_id == user_id else self.user_id


class Category(ApiModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("imageUrl", "image_url"), serialization_alias="imageUrl"
    )


class RecipeGroup(ApiModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    creator_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("creatorId", "creator_id"), serialization_alias="creatorId"
    )
    image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("imageUrl", "image_url"), serialization_alias="imageUrl"
    )
    privacy: GroupPrivacy = GroupPrivacy.PUBLIC


class RecipeGroupMember(ApiModel):
    id: Optional[int] = None
    group_id: int = Field(validation_alias=AliasChoices("groupId", "group_id"), serialization_alias="groupId")
    user_id: int = Field(validation_alias=AliasChoices("userId", "user_id"), serialization_alias="userId")
    role: MemberRole = MemberRole.MEMBER
    status: MembershipStatus = MembershipStatus.ACTIVE
    joined_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("joinedDate", "joined_date"), serialization_alias="joinedDate"
    )


def parse_many(model: Type[ModelT], items: Optional[Iterable[Any]]) -> List[ModelT]:
    """
    Map a JSON list onto models.

    Items that fail validation are logged and skipped so that one bad row from
    the backend does not blank a whole page.

    Args:
        model: Model class to build
        items: Decoded JSON list (None is treated as empty)

    Returns:
        List of model instances, in input order.
    """
    if not items:
        return []
    if isinstance(items, dict):
        logger.warning("Expected a list of %s, got an object; ignoring", model.__name__)
        return []
    parsed: List[ModelT] = []
    for item in items:
        try:
            parsed.append(model.model_validate(item))
        except PydanticValidationError as e:
            logger.warning("Skipping invalid %s: %s. Item: %s", model.__name__, e, str(item)[:200])
    return parsed
