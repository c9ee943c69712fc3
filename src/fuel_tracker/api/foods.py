"""Public endpoints for goal calculation and food lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, status

from fuel_tracker.api.schemas import BiometricsIn, product_payload, targets_payload
from fuel_tracker.services.food_database import (
    InvalidBarcodeError,
    ProductNotFoundError,
)
from fuel_tracker.services.goals import compute_goals

if TYPE_CHECKING:
    from fuel_tracker.containers import AppContainer

router = APIRouter(tags=["foods"])


@router.post("/goals")
async def calculate_goals(payload: BiometricsIn) -> dict[str, object]:
    """Return calorie and macro targets for the given biometrics."""
    return targets_payload(compute_goals(payload.to_domain()))


@router.get("/foods/barcode/{code}")
async def lookup_barcode(code: str, request: Request) -> dict[str, object]:
    """Look a product up by barcode."""
    container: AppContainer = request.app.state.container
    try:
        product = await container.food_database_service.lookup_barcode(code)
    except InvalidBarcodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid barcode",
        ) from exc
    except ProductNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        ) from exc
    return product_payload(product)


@router.get("/foods/search")
async def search_foods(
    request: Request,
    q: str = Query(min_length=1),
    page: int = Query(default=1, ge=1),
) -> dict[str, object]:
    """Search foods by name."""
    container: AppContainer = request.app.state.container
    products = await container.food_database_service.search(q, page=page)
    return {"products": [product_payload(product) for product in products]}
