"""
Per-recipe interaction state: like count, liked, saved, and the comment thread.

InteractionState keeps the three values a recipe card shows in step with the
backend for the current user:

- load(): the like count is always fetched. With a session, "is liked" and
  "is saved" are fetched concurrently with it (fan-out on a thread pool,
  fan-in before anything is applied). Workers use the session the caller
  read, pinned with SessionStore.pinned().
- toggle_like() / toggle_save(): optimistic update with rollback. The local
  state changes immediately, the request is sent, and on failure the exact
  previous state is restored before the error is re-raised. No retry.
- close(): the owner is going away. Fetch results that arrive afterwards are
  discarded instead of being applied, and toggles become no-ops.

Saving uses the dedicated saved-recipes resource; see DESIGN.md for why the
FAVORITE interaction is not used.

# NOTE: There is no request de-duplication. Two quick toggles send two
    requests and the backend's order of arrival decides the final row.
"""

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from foodieframe.errors import AuthenticationError, FoodieFrameError, user_message
from foodieframe.models import Interaction, InteractionType, Session, parse_many
from foodieframe.validation import validate_comment

logger = logging.getLogger(__name__)

LOAD_WORKERS = 3


class InteractionState:
    """
    Like/saved state of one recipe for the current user.

    Args:
        client: FoodieFrameClient to talk through
        recipe_id: Recipe the state belongs to
        executor: Executor for the concurrent fetches (default: a short-lived
                  thread pool per load)

    Attributes:
        like_count: Number of likes, never negative
        is_liked: Whether the current user liked the recipe
        is_saved: Whether the current user saved the recipe
        loaded: Whether load() has completed at least once
        error: Message of the last failed fetch, or None
    """

    def __init__(self, client: Any, recipe_id: int, executor: Optional[Executor] = None) -> None:
        self.client = client
        self.recipe_id = recipe_id
        self.like_count = 0
        self.is_liked = False
        self.is_saved = False
        self.loaded = False
        self.error: Optional[str] = None
        self._executor = executor
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Stop applying results. In-flight fetches finish but are ignored."""
        self._closed.set()

    def _require_session(self, action: str) -> Session:
        session = self.client.session.get_current_user()
        if session is None:
            raise AuthenticationError(f"You must be logged in to {action}.", status_code=None)
        return session

    # -- fetching ------------------------------------------------------------

    def _fetch_like_count(self) -> int:
        response = self.client.interactions.get_interaction_count(self.recipe_id, InteractionType.LIKE)
        return max(int(response.json() or 0), 0)

    def _fetch_is_liked(self, user_id: int) -> bool:
        response = self.client.interactions.check_user_interaction(user_id, self.recipe_id, InteractionType.LIKE)
        return bool(response.json())

    def _fetch_is_saved(self, user_id: int) -> bool:
        return self.client.saved_recipes.is_recipe_saved(user_id, self.recipe_id)

    def _run_pinned(self, session: Optional[Session], fetch: Callable[[], Any]) -> Any:
        with self.client.session.pinned(session):
            return fetch()

    def load(self) -> None:
        """
        Fetch the like count and, with a session, the liked and saved flags.

        The session is read once on the calling thread and pinned in each
        worker, so the fetches never read session storage themselves. A failed
        fetch is logged and leaves its field unchanged; the first failure's
        message is kept in `error`. Nothing is raised. A 401 expires the
        session once, from the calling thread.
        """
        session = self.client.session.get_current_user()
        fetches: Dict[str, Callable[[], Any]] = {"like_count": self._fetch_like_count}
        if session is not None:
            fetches["is_liked"] = lambda: self._fetch_is_liked(session.user_id)
            fetches["is_saved"] = lambda: self._fetch_is_saved(session.user_id)

        executor = self._executor
        owns_executor = executor is None
        if owns_executor:
            executor = ThreadPoolExecutor(max_workers=LOAD_WORKERS, thread_name_prefix="interaction-load")

        results: Dict[str, Any] = {}
        errors: List[str] = []
        unauthorized = False
        try:
            futures = {
                name: executor.submit(self._run_pinned, session, fetch)
                for name, fetch in fetches.items()
            }
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except (FoodieFrameError, ValueError, TypeError) as e:
                    logger.warning("Failed to fetch %s for recipe %s: %s", name, self.recipe_id, e)
                    errors.append(user_message(e))
                    if isinstance(e, AuthenticationError) and e.status_code == 401:
                        unauthorized = True
        finally:
            if owns_executor:
                executor.shutdown(wait=False)

        if unauthorized:
            self.client.api.expire_session()

        if self.closed:
            logger.debug("Recipe %s state closed during load; discarding results", self.recipe_id)
            return

        for name, value in results.items():
            setattr(self, name, value)
        if session is None:
            self.is_liked = False
            self.is_saved = False
        self.error = errors[0] if errors else None
        self.loaded = True

    # -- toggles -------------------------------------------------------------

    def toggle_like(self) -> bool:
        """
        Like or unlike the recipe.

        Returns:
            The new is_liked value.

        Raises:
            AuthenticationError: No session; nothing is sent.
            ApiError: The request failed; state has been rolled back.
        """
        session = self._require_session("like recipes")
        if self.closed:
            return self.is_liked

        previous = (self.is_liked, self.like_count)
        interactions = self.client.interactions
        if self.is_liked:
            self.is_liked = False
            self.like_count = max(self.like_count - 1, 0)
            send = lambda: interactions.delete_user_interaction(session.user_id, self.recipe_id, InteractionType.LIKE)
        else:
            self.is_liked = True
            self.like_count = max(self.like_count, 0) + 1
            send = lambda: interactions.create_like(session.user_id, self.recipe_id)

        try:
            send()
        except Exception:
            self.is_liked, self.like_count = previous
            logger.warning("Like toggle failed for recipe %s; rolled back", self.recipe_id)
            raise
        return self.is_liked

    def toggle_save(self) -> bool:
        """
        Save or unsave the recipe.

        Without a session this is a no-op returning the current value.

        Raises:
            ApiError: The request failed; state has been rolled back.
        """
        session = self.client.session.get_current_user()
        if session is None or self.closed:
            return self.is_saved

        previous = self.is_saved
        saved_recipes = self.client.saved_recipes
        if self.is_saved:
            self.is_saved = False
            send = lambda: saved_recipes.remove_saved_recipe(session.user_id, self.recipe_id)
        else:
            self.is_saved = True
            send = lambda: saved_recipes.save_recipe(session.user_id, self.recipe_id)

        try:
            send()
        except Exception:
            self.is_saved = previous
            logger.warning("Save toggle failed for recipe %s; rolled back", self.recipe_id)
            raise
        return self.is_saved


class CommentThread:
    """
    The comments on one recipe.

    Comments are COMMENT interactions. Only their author may edit or delete
    them; can_modify() is the client-side check the UI uses to offer those
    actions.
    """

    def __init__(self, client: Any, recipe_id: int) -> None:
        self.client = client
        self.recipe_id = recipe_id
        self.comments: List[Interaction] = []

    def load(self) -> List[Interaction]:
        response = self.client.interactions.get_recipe_comments(self.recipe_id)
        self.comments = parse_many(Interaction, response.json())
        return self.comments

    def can_modify(self, comment: Interaction) -> bool:
        session = self.client.session.get_current_user()
        return session is not None and comment.user_id == session.user_id

    def add(self, content: str) -> Interaction:
        """
        Post a comment.

        Raises:
            ValidationError: Blank content; nothing is sent.
            AuthenticationError: No session; nothing is sent.
        """
        text = validate_comment(content)
        session = self.client.session.get_current_user()
        if session is None:
            raise AuthenticationError("You must be logged in to comment.", status_code=None)
        response = self.client.interactions.create_comment(session.user_id, self.recipe_id, text)
        comment = Interaction.model_validate(response.json())
        self.comments.append(comment)
        return comment

    def edit(self, interaction_id: int, content: str) -> Interaction:
        text = validate_comment(content)
        response = self.client.interactions.update_comment(interaction_id, text)
        updated = Interaction.model_validate(response.json())
        self.comments = [updated if comment.id == interaction_id else comment for comment in self.comments]
        return updated

    def delete(self, interaction_id: int) -> None:
        self.client.interactions.delete_interaction(interaction_id)
        self.comments = [comment for comment in self.comments if comment.id != interaction_id]
