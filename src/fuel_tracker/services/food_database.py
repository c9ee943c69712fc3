"""Food database lookups over Open Food Facts and USDA FDC."""

import asyncio
import logging
import re
import string
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from fuel_tracker.adapters.fdc_client import FdcClient
from fuel_tracker.adapters.openfoodfacts_client import OpenFoodFactsClient
from fuel_tracker.domain.food import USDA_ID_PREFIX, ScannedProduct
from fuel_tracker.domain.nutrition import FoodMeasurement
from fuel_tracker.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

KJ_PER_KCAL = 4.184
MIN_BARCODE_LENGTH = 8
MAX_BARCODE_LENGTH = 14
DEFAULT_SERVING = (100.0, "g")

_SERVING_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(g|ml|oz|cup|piece|slice|serving)?", re.IGNORECASE
)
_WORD_SPLIT = re.compile(r"[\W_]+")

_FDC_NUTRIENT_IDS = {
    1008: "calories",
    1003: "protein_g",
    1005: "carbs_g",
    1004: "fat_g",
    1079: "fiber_g",
    2000: "sugar_g",
}


class FoodDatabaseError(Exception):
    """Base error for food database lookups."""


class InvalidBarcodeError(FoodDatabaseError):
    """Raised when a barcode isn't 8-14 digits."""


class ProductNotFoundError(FoodDatabaseError):
    """Raised when no product exists for a barcode."""


@dataclass
class FoodDatabaseService:
    """Barcode lookups and name search with caching."""

    off_client: OpenFoodFactsClient
    fdc_client: FdcClient | None
    cache: Cache
    cache_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup_barcode(self, barcode: str) -> ScannedProduct:
        """Return the product for a barcode."""
        code = barcode.strip()
        if not is_valid_barcode(code):
            raise InvalidBarcodeError(barcode)

        cache_key = f"off:barcode:{code}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, ScannedProduct):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: self.off_client.get_product(code),
                action=f"barcode:{code}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                raise ProductNotFoundError(code) from exc
            raise

        product_data = payload.get("product")
        if payload.get("status") != 1 or not isinstance(product_data, dict):
            raise ProductNotFoundError(code)

        product = parse_off_product(product_data, code)
        self.cache.set(cache_key, product, ttl_seconds=self.cache_ttl_seconds)
        _logger.info("Barcode lookup: barcode=%s name=%s", code, product.name)
        return product

    async def search(self, query: str, page: int = 1) -> list[ScannedProduct]:
        """Search generic foods and branded products by name."""
        term = query.strip().lower()
        if not term:
            return []

        results = await asyncio.gather(
            self._search_usda(query, page),
            self._search_off(query, page),
            return_exceptions=True,
        )
        combined: list[ScannedProduct] = []
        for source, result in zip(("usda", "off"), results, strict=True):
            if isinstance(result, Exception):
                _logger.warning("Food search %s failed: %s", source, result)
                continue
            if isinstance(result, BaseException):
                raise result
            combined.extend(result)

        products = rank_products(dedupe_by_name(combined), term)
        _logger.info("Food search: query=%s results=%s", query, len(products))
        return products

    def clear_cache(self) -> None:
        self.cache.clear()

    async def _search_usda(self, query: str, page: int) -> list[ScannedProduct]:
        if self.fdc_client is None:
            return []
        fdc_client = self.fdc_client
        payload = await self._call_with_retry(
            lambda: fdc_client.search_foods(query, page=page),
            action="usda_search",
        )
        return [parse_fdc_food(food) for food in payload.get("foods", [])]

    async def _search_off(self, query: str, page: int) -> list[ScannedProduct]:
        payload = await self._call_with_retry(
            lambda: self.off_client.search_products(query, page=page),
            action="off_search",
        )
        products = []
        for item in payload.get("products", []):
            code = item.get("code")
            name = item.get("product_name")
            if not code or not name:
                continue
            products.append(parse_off_product(item, str(code)))
        return products

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry on transient failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if _is_client_error(exc) or attempt > self.retry_attempts:
                    raise
                _logger.warning(
                    "Food database %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                await asyncio.sleep(self.retry_delay_seconds)


def is_valid_barcode(code: str) -> bool:
    return (
        code.isascii()
        and code.isdigit()
        and MIN_BARCODE_LENGTH <= len(code) <= MAX_BARCODE_LENGTH
    )


def parse_serving_size(serving: str | None) -> tuple[float, str]:
    """Parse text such as ``30g`` or ``1 cup (240ml)`` into size and unit."""
    if not serving:
        return DEFAULT_SERVING
    match = _SERVING_PATTERN.search(serving)
    if match is None:
        return DEFAULT_SERVING
    unit = match.group(2).lower() if match.group(2) else "g"
    return float(match.group(1)), unit


def parse_off_product(product: dict[str, object], barcode: str) -> ScannedProduct:
    """Build a product from an Open Food Facts product payload."""
    serving_text = _text(product.get("serving_size"))
    serving_size, serving_unit = parse_serving_size(serving_text)
    nutriments = product.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}

    def per_serving(name: str) -> float:
        value = _number(nutriments.get(f"{name}_serving"))
        if value is not None:
            return value
        return (_number(nutriments.get(f"{name}_100g")) or 0.0) * serving_size / 100

    calories = 0
    kcal_serving = _number(nutriments.get("energy-kcal_serving"))
    kcal_100g = _number(nutriments.get("energy-kcal_100g"))
    kj_100g = _number(nutriments.get("energy_100g"))
    if kcal_serving is not None:
        calories = int(kcal_serving)
    elif kcal_100g is not None:
        calories = int(kcal_100g * serving_size / 100)
    elif kj_100g is not None:
        calories = int(kj_100g / KJ_PER_KCAL * serving_size / 100)

    sodium_g_100g = _number(nutriments.get("sodium_100g")) or 0.0
    categories = _text(product.get("categories"))
    return ScannedProduct(
        barcode=barcode,
        name=_text(product.get("product_name")) or "Unknown Product",
        nutrition=FoodMeasurement(
            calories=calories,
            protein_g=per_serving("proteins"),
            carbs_g=per_serving("carbohydrates"),
            fat_g=per_serving("fat"),
            fiber_g=per_serving("fiber"),
            sugar_g=per_serving("sugars"),
            sodium_mg=sodium_g_100g * serving_size / 100 * 1000,
            saturated_fat_g=per_serving("saturated-fat"),
        ),
        serving_size=serving_size,
        serving_unit=serving_unit,
        serving_size_description=serving_text,
        brand=_text(product.get("brands")),
        image_url=_text(product.get("image_front_url"))
        or _text(product.get("image_url")),
        nutrition_grade=_text(product.get("nutrition_grades")),
        category=categories.split(",")[0].strip() if categories else None,
        quantity=_text(product.get("quantity")),
    )


def parse_fdc_food(food: dict[str, object]) -> ScannedProduct:
    """Build a product from a USDA FDC search result."""
    values: dict[str, float] = {}
    for nutrient in food.get("foodNutrients", []):
        field_name = _FDC_NUTRIENT_IDS.get(nutrient.get("nutrientId"))
        if field_name is not None:
            values[field_name] = _number(nutrient.get("value")) or 0.0

    name = string.capwords(str(food.get("description", "")))
    name = name.replace(", Raw", "").replace(", Nfs", "").strip()
    return ScannedProduct(
        barcode=f"{USDA_ID_PREFIX}{food.get('fdcId')}",
        name=name,
        nutrition=FoodMeasurement(
            calories=int(values.get("calories", 0.0)),
            protein_g=values.get("protein_g", 0.0),
            carbs_g=values.get("carbs_g", 0.0),
            fat_g=values.get("fat_g", 0.0),
            fiber_g=values.get("fiber_g", 0.0),
            sugar_g=values.get("sugar_g", 0.0),
        ),
        serving_size=_number(food.get("servingSize")) or 100.0,
        serving_unit=_text(food.get("servingSizeUnit")) or "g",
        brand=_text(food.get("brandName")) or _text(food.get("brandOwner")),
    )


def dedupe_by_name(products: list[ScannedProduct]) -> list[ScannedProduct]:
    """Keep the first product for each case-insensitive name."""
    seen: set[str] = set()
    unique = []
    for product in products:
        key = product.name.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(product)
    return unique


def rank_products(products: list[ScannedProduct], term: str) -> list[ScannedProduct]:
    """Order products by exact, prefix and first-word match, then by length."""

    def sort_key(product: ScannedProduct) -> tuple[bool, bool, bool, int]:
        name = product.name.lower()
        first_word = _WORD_SPLIT.split(name)[0]
        return (
            name != term,
            not name.startswith(term),
            not first_word.startswith(term),
            len(name),
        )

    return sorted(products, key=sort_key)


def _is_client_error(exc: Exception) -> bool:
    if not isinstance(exc, httpx.HTTPStatusError):
        return False
    return exc.response.status_code < httpx.codes.INTERNAL_SERVER_ERROR


def _number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _text(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None
