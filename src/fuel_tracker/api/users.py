"""Per-user endpoints guarded by an API token."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from fuel_tracker.api.schemas import (
    MealIn,
    ProfileIn,
    RepeatMealIn,
    TargetsIn,
    WeightIn,
    achievement_payload,
    day_payload,
    frequent_meal_payload,
    meal_payload,
    profile_payload,
    progress_payload,
    streak_payload,
    week_payload,
    weight_payload,
)
from fuel_tracker.services.weight import bmi, bmi_category

if TYPE_CHECKING:
    from fuel_tracker.containers import AppContainer
    from fuel_tracker.domain.profile import UserProfile


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(
    prefix="/users/{user_id}",
    tags=["users"],
    dependencies=[Depends(require_token)],
)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_profile(container: AppContainer, user_id: UUID) -> UserProfile:
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return profile


def _today(timezone_name: str) -> date:
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


@router.get("/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's profile and targets."""
    return profile_payload(_require_profile(_container(request), user_id))


@router.put("/profile")
async def update_profile(
    user_id: UUID, payload: ProfileIn, request: Request
) -> dict[str, object]:
    """Store biometrics and recompute targets."""
    if payload.timezone is not None:
        _validate_timezone(payload.timezone)
    profile = _container(request).profile_service.update_biometrics(
        user_id,
        payload.to_domain(),
        target_weight_kg=payload.target_weight_kg,
        timezone=payload.timezone,
    )
    return profile_payload(profile)


@router.put("/targets")
async def set_targets(
    user_id: UUID, payload: TargetsIn, request: Request
) -> dict[str, object]:
    """Override targets by hand."""
    profile = _container(request).profile_service.set_targets(
        user_id,
        calorie_goal=payload.calorie_goal,
        protein_g=payload.protein_g,
        carbs_g=payload.carbs_g,
        fat_g=payload.fat_g,
    )
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return profile_payload(profile)


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    user_id: UUID, payload: MealIn, request: Request
) -> dict[str, object]:
    """Log a meal."""
    container = _container(request)
    meal = container.meal_service.log_meal(
        user_id,
        [item.to_domain() for item in payload.items],
        meal_type=payload.meal_type,
        logged_at=payload.logged_at,
        timezone_name=container.profile_service.get_timezone(user_id),
    )
    return meal_payload(meal)


@router.get("/meals")
async def list_meals(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return a day's meals, today by default."""
    container = _container(request)
    timezone_name = container.profile_service.get_timezone(user_id)
    resolved_day = day or _today(timezone_name)
    meals = container.meal_service.get_meals(user_id, resolved_day, timezone_name)
    return {
        "day": resolved_day.isoformat(),
        "meals": [meal_payload(meal) for meal in meals],
    }


@router.get("/meals/recent")
async def recent_meals(user_id: UUID, request: Request) -> dict[str, object]:
    """Return recently logged meals."""
    meals = _container(request).meal_service.get_recent_meals(user_id)
    return {"meals": [meal_payload(meal) for meal in meals]}


@router.get("/meals/frequent")
async def frequent_meals(user_id: UUID, request: Request) -> dict[str, object]:
    """Return meals the user logs repeatedly."""
    meals = _container(request).meal_service.get_frequent_meals(user_id)
    return {"meals": [frequent_meal_payload(entry) for entry in meals]}


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(user_id: UUID, meal_id: UUID, request: Request) -> None:
    """Soft-delete a meal."""
    if not _container(request).meal_service.delete_meal(user_id, meal_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found"
        )


@router.post("/meals/{meal_id}/repeat", status_code=status.HTTP_201_CREATED)
async def repeat_meal(
    user_id: UUID,
    meal_id: UUID,
    request: Request,
    payload: RepeatMealIn | None = None,
) -> dict[str, object]:
    """Log an earlier meal again."""
    payload = payload or RepeatMealIn()
    container = _container(request)
    meal = container.meal_service.log_meal_again(
        user_id,
        meal_id,
        meal_type=payload.meal_type,
        logged_at=payload.logged_at,
        timezone_name=container.profile_service.get_timezone(user_id),
    )
    if meal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found"
        )
    return meal_payload(meal)


@router.get("/days/{day}")
async def day_summary(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return totals, macro split and health score for a day."""
    container = _container(request)
    profile = _require_profile(container, user_id)
    summary = container.stats_service.get_day_summary(
        user_id, day, profile.targets, profile.timezone
    )
    return day_payload(summary)


@router.get("/week")
async def week_summary(user_id: UUID, request: Request) -> dict[str, object]:
    """Return totals and averages for the current week."""
    container = _container(request)
    profile = _require_profile(container, user_id)
    summary = container.stats_service.get_week(
        user_id, profile.targets, profile.timezone
    )
    return week_payload(summary)


@router.get("/streaks")
async def streaks(user_id: UUID, request: Request) -> dict[str, int]:
    """Return current and longest logging streaks."""
    container = _container(request)
    timezone_name = container.profile_service.get_timezone(user_id)
    result = await container.streak_service.compute_in_background(
        user_id, timezone_name
    )
    return streak_payload(result)


@router.post("/weights", status_code=status.HTTP_201_CREATED)
async def log_weight(
    user_id: UUID, payload: WeightIn, request: Request
) -> dict[str, object]:
    """Record a weight measurement."""
    entry = _container(request).weight_service.log_weight(
        user_id,
        payload.weight_kg,
        recorded_at=payload.recorded_at,
        body_fat_pct=payload.body_fat_pct,
        source=payload.source,
    )
    return weight_payload(entry)


@router.get("/weights/progress")
async def weight_progress(
    user_id: UUID, request: Request, target_weight_kg: float | None = None
) -> dict[str, object]:
    """Return progress toward the target weight."""
    container = _container(request)
    profile = container.profile_service.get_profile(user_id)
    target = target_weight_kg
    if target is None and profile is not None:
        target = profile.target_weight_kg
    if target is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Target weight is not set",
        )
    timezone_name = profile.timezone if profile else "UTC"
    progress = container.weight_service.get_progress(
        user_id, target, today=_today(timezone_name), timezone_name=timezone_name
    )
    if progress is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No weight entries"
        )
    body = progress_payload(progress)
    if profile is not None:
        height = profile.biometrics.height_cm
        category = bmi_category(progress.current_weight_kg, height)
        body["bmi"] = bmi(progress.current_weight_kg, height)
        body["bmi_category"] = category.value if category else None
    return body


@router.get("/achievements")
async def achievements(user_id: UUID, request: Request) -> dict[str, object]:
    """Return progress toward every achievement."""
    container = _container(request)
    timezone_name = container.profile_service.get_timezone(user_id)
    progress = container.achievement_service.evaluate(user_id, timezone_name)
    return {"achievements": [achievement_payload(entry) for entry in progress]}


def _validate_timezone(timezone_name: str) -> None:
    try:
        ZoneInfo(timezone_name)
    except (KeyError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Unknown timezone",
        ) from exc
