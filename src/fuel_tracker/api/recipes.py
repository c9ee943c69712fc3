"""Per-user recipe endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from fuel_tracker.api.schemas import (
    LogRecipeIn,
    RecipeIn,
    meal_payload,
    recipe_payload,
)
from fuel_tracker.api.users import require_token
from fuel_tracker.domain.recipes import RecipeCategory  # noqa: TC001

if TYPE_CHECKING:
    from fuel_tracker.services.recipes import RecipeService

router = APIRouter(
    prefix="/users/{user_id}/recipes",
    tags=["recipes"],
    dependencies=[Depends(require_token)],
)


def _service(request: Request) -> RecipeService:
    return request.app.state.container.recipe_service


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    user_id: UUID, payload: RecipeIn, request: Request
) -> dict[str, object]:
    """Save a recipe."""
    recipe = _service(request).add_recipe(user_id, payload.to_domain(user_id))
    return recipe_payload(recipe)


@router.get("")
async def list_recipes(
    user_id: UUID,
    request: Request,
    q: str | None = None,
    category: RecipeCategory | None = None,
    favorites: bool = False,
) -> dict[str, object]:
    """Return recipes, optionally filtered by search term, category or favorites."""
    recipes = _service(request).list_recipes(
        user_id, query=q, category=category, favorites_only=favorites
    )
    return {"recipes": [recipe_payload(recipe) for recipe in recipes]}


@router.get("/{recipe_id}")
async def get_recipe(
    user_id: UUID, recipe_id: UUID, request: Request
) -> dict[str, object]:
    recipe = _service(request).get_recipe(user_id, recipe_id)
    if recipe is None:
        raise _not_found()
    return recipe_payload(recipe)


@router.put("/{recipe_id}")
async def update_recipe(
    user_id: UUID, recipe_id: UUID, payload: RecipeIn, request: Request
) -> dict[str, object]:
    """Replace a recipe's contents."""
    recipe = _service(request).update_recipe(
        user_id, recipe_id, payload.to_domain(user_id)
    )
    if recipe is None:
        raise _not_found()
    return recipe_payload(recipe)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(user_id: UUID, recipe_id: UUID, request: Request) -> None:
    if not _service(request).delete_recipe(user_id, recipe_id):
        raise _not_found()


@router.post("/{recipe_id}/favorite")
async def toggle_favorite(
    user_id: UUID, recipe_id: UUID, request: Request
) -> dict[str, object]:
    """Flip a recipe's favorite flag."""
    recipe = _service(request).toggle_favorite(user_id, recipe_id)
    if recipe is None:
        raise _not_found()
    return recipe_payload(recipe)


@router.post("/{recipe_id}/log", status_code=status.HTTP_201_CREATED)
async def log_recipe(
    user_id: UUID,
    recipe_id: UUID,
    request: Request,
    payload: LogRecipeIn | None = None,
) -> dict[str, object]:
    """Log servings of a recipe as a meal."""
    payload = payload or LogRecipeIn()
    container = request.app.state.container
    meal = container.recipe_service.log_recipe(
        user_id,
        recipe_id,
        servings=payload.servings,
        meal_type=payload.meal_type,
        logged_at=payload.logged_at,
        timezone_name=container.profile_service.get_timezone(user_id),
    )
    if meal is None:
        raise _not_found()
    return meal_payload(meal)
