"""
Recipe listing with bounded retry.

The recipes page is the one read that retries on its own. Failed attempts back
off exponentially (1s, 2s, ...) and after max_attempts the error is handed to
the caller; the page then offers a manual "Try Again" that starts a fresh
budget. Other reads fail once and report.

The saved-recipes page reads through fetch_saved_recipes(), which joins each
saved entry with its recipe.
"""

import logging
import time
from typing import Any, Callable, List, Optional, Tuple

from foodieframe.errors import ApiError, AuthenticationError, FoodieFrameError, user_message
from foodieframe.models import Difficulty, Recipe, SavedRecipe, parse_many

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


def fetch_recipes_with_retry(
    client: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> List[Recipe]:
    """
    Fetch all recipes, retrying failed attempts with exponential backoff.

    Args:
        client: FoodieFrameClient to fetch through
        max_attempts: Total attempts, including the first
        base_delay: Seconds to wait after the first failure; doubles each time
        sleep: Sleep function (injectable for tests)

    Returns:
        List of recipes.

    Raises:
        FoodieFrameError: The error of the last attempt once the budget is spent.
        AuthenticationError: Immediately, without retrying.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(max_attempts):
        try:
            response = client.recipes.get_all_recipes()
            return parse_many(Recipe, response.json())
        except AuthenticationError:
            raise
        except (FoodieFrameError, ValueError) as e:
            if attempt == max_attempts - 1:
                logger.error("Fetching recipes failed after %d attempts: %s", max_attempts, e)
                raise
            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Fetching recipes failed (attempt %d/%d): %s. Retrying in %.1fs",
                attempt + 1, max_attempts, e, delay,
            )
            sleep(delay)
    # unreachable: the loop either returns or raises
    raise AssertionError("retry loop exited without a result")


def filter_recipes(
    recipes: List[Recipe],
    search_term: str = "",
    difficulty: Optional[Difficulty] = None,
) -> List[Recipe]:
    """
    Filter recipes by a search term and difficulty.

    The term matches case-insensitively anywhere in the title or description.
    A None difficulty matches every recipe.
    """
    term = (search_term or "").strip().lower()
    filtered = []
    for recipe in recipes:
        if term and term not in recipe.title.lower() and term not in recipe.description.lower():
            continue
        if difficulty is not None and recipe.difficulty != difficulty:
            continue
        filtered.append(recipe)
    return filtered


class RecipeListing:
    """
    State of the recipes page.

    refresh() never raises for API failures; it leaves the message in `error`,
    the exception in `failure`, and keeps the previously loaded recipes.
    """

    def __init__(
        self,
        client: Any,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.sleep = sleep
        self.recipes: List[Recipe] = []
        self.error: Optional[str] = None
        self.failure: Optional[Exception] = None
        self.attempts = 0

    def _counting_sleep(self, delay: float) -> None:
        self.attempts += 1
        self.sleep(delay)

    def refresh(self) -> List[Recipe]:
        self.attempts = 0
        try:
            self.recipes = fetch_recipes_with_retry(
                self.client,
                max_attempts=self.max_attempts,
                base_delay=self.base_delay,
                sleep=self._counting_sleep,
            )
            self.error = None
            self.failure = None
        except AuthenticationError:
            raise
        except (FoodieFrameError, ValueError) as e:
            self.error = user_message(e)
            self.failure = e
        finally:
            # Every sleep follows a failed attempt; the last attempt has none after it
            self.attempts += 1
        return self.recipes

    def retry(self) -> List[Recipe]:
        """Start over with a full attempt budget (the "Try Again" action)."""
        logger.info("Retrying recipe listing")
        return self.refresh()


def fetch_saved_recipes(client: Any, user_id: int) -> List[Tuple[SavedRecipe, Recipe]]:
    """
    Fetch a user's saved recipes together with the recipes they point at.

    Saved entries whose recipe is gone (404) are skipped. Other failures are
    raised; there is no retry here.

    Returns:
        (saved entry, recipe) pairs in the order the backend returned them.
    """
    saved = parse_many(SavedRecipe, client.saved_recipes.get_user_saved_recipes(user_id).json())
    entries: List[Tuple[SavedRecipe, Recipe]] = []
    for item in saved:
        try:
            response = client.recipes.get_recipe(item.post_id)
        except ApiError as e:
            if e.status_code != 404:
                raise
            logger.warning("Saved recipe %s no longer exists; skipping", item.post_id)
            continue
        entries.append((item, Recipe.model_validate(response.json())))
    return entries


def filter_saved_recipes(
    entries: List[Tuple[SavedRecipe, Recipe]],
    search_term: str = "",
) -> List[Tuple[SavedRecipe, Recipe]]:
    """Filter saved recipes by a term matched against title, description and note."""
    term = (search_term or "").strip().lower()
    if not term:
        return list(entries)
    return [
        (saved, recipe) for saved, recipe in entries
        if term in recipe.title.lower()
        or term in recipe.description.lower()
        or term in (saved.note or "").lower()
    ]
