"""Tests for barcode lookups and food search."""

import asyncio
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from fuel_tracker.domain.meals import FoodSource
from fuel_tracker.services.cache import ProductCache
from fuel_tracker.services.food_database import (
    FoodDatabaseService,
    InvalidBarcodeError,
    ProductNotFoundError,
    is_valid_barcode,
    parse_fdc_food,
    parse_off_product,
    parse_serving_size,
)
from tests.conftest import FakeFdcClient, FakeOpenFoodFactsClient

BARCODE = "0123456789012"


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://off.test/product")
    return httpx.HTTPStatusError(
        "error", request=request, response=httpx.Response(status_code, request=request)
    )


def test_lookup_scales_per_100g_values_to_serving(
    food_database_service: FoodDatabaseService,
) -> None:
    product = asyncio.run(food_database_service.lookup_barcode(BARCODE))

    assert product.name == "Crunchy Oats"
    assert product.display_name == "Acme - Crunchy Oats"
    assert product.serving_size == 40
    assert product.nutrition.calories == 152
    assert product.nutrition.protein_g == pytest.approx(4)
    assert product.nutrition.carbs_g == pytest.approx(26)
    assert product.nutrition.fat_g == pytest.approx(3)
    assert product.nutrition.sodium_mg == pytest.approx(80)
    assert product.formatted_serving_size == "40g"


def test_lookup_is_cached(
    food_database_service: FoodDatabaseService,
    off_client: FakeOpenFoodFactsClient,
) -> None:
    first = asyncio.run(food_database_service.lookup_barcode(BARCODE))
    second = asyncio.run(food_database_service.lookup_barcode(f" {BARCODE} "))

    assert first == second
    assert off_client.product_calls == 1

    food_database_service.clear_cache()
    asyncio.run(food_database_service.lookup_barcode(BARCODE))
    assert off_client.product_calls == 2


def test_cache_entries_expire() -> None:
    current = datetime(2024, 6, 12, tzinfo=UTC)
    cache = ProductCache(clock=lambda: current)
    cache.set("key", "value", ttl_seconds=60)

    assert cache.get("key") == "value"
    current += timedelta(seconds=61)
    assert cache.get("key") is None


@pytest.mark.parametrize("code", ["1234567", "123456789012345", "12345abc", ""])
def test_invalid_barcode_is_rejected_without_network(
    food_database_service: FoodDatabaseService,
    off_client: FakeOpenFoodFactsClient,
    code: str,
) -> None:
    with pytest.raises(InvalidBarcodeError):
        asyncio.run(food_database_service.lookup_barcode(code))

    assert off_client.product_calls == 0


def test_barcode_validation() -> None:
    assert is_valid_barcode("12345678") is True
    assert is_valid_barcode("12345678901234") is True
    assert is_valid_barcode("١٢٣٤٥٦٧٨") is False


def test_missing_product_status(
    food_database_service: FoodDatabaseService,
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.product_payload = {"status": 0, "status_verbose": "product not found"}

    with pytest.raises(ProductNotFoundError):
        asyncio.run(food_database_service.lookup_barcode(BARCODE))


def test_http_404_is_not_found_and_not_retried(
    food_database_service: FoodDatabaseService,
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.error = _status_error(404)

    with pytest.raises(ProductNotFoundError):
        asyncio.run(food_database_service.lookup_barcode(BARCODE))

    assert off_client.product_calls == 1


def test_server_error_is_retried_then_raised(
    food_database_service: FoodDatabaseService,
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.error = _status_error(503)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(food_database_service.lookup_barcode(BARCODE))

    assert off_client.product_calls == 2


def test_search_merges_dedupes_and_ranks(
    food_database_service: FoodDatabaseService,
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.search_payload = {
        "products": [
            {"code": "111", "product_name": "Roasted Chicken Breast Slices"},
            {"code": "222", "product_name": "CHICKEN, BREAST"},
            {"code": "333", "product_name": "Chicken"},
            {"code": "444"},
            {"product_name": "No Code"},
        ]
    }

    results = asyncio.run(food_database_service.search("Chicken"))

    assert [product.name for product in results] == [
        "Chicken",
        "Chicken, Breast",
        "Roasted Chicken Breast Slices",
    ]
    assert results[1].barcode == "usda-171077"
    assert results[1].nutrition.calories == 120
    assert results[1].to_food_item().source is FoodSource.DATABASE


def test_search_survives_one_source_failing(
    food_database_service: FoodDatabaseService,
    fdc_client: FakeFdcClient,
    off_client: FakeOpenFoodFactsClient,
) -> None:
    off_client.search_payload = {
        "products": [{"code": "555", "product_name": "Chicken Soup"}]
    }
    fdc_client.error = httpx.ConnectError("offline")

    results = asyncio.run(food_database_service.search("chicken"))

    assert [product.name for product in results] == ["Chicken Soup"]


def test_search_without_fdc_client(off_client: FakeOpenFoodFactsClient) -> None:
    service = FoodDatabaseService(
        off_client=off_client, fdc_client=None, cache=ProductCache()
    )

    assert asyncio.run(service.search("rice")) == []
    assert asyncio.run(service.search("   ")) == []
    assert off_client.search_calls == 1


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("30g", (30.0, "g")),
        ("1 cup (240ml)", (1.0, "cup")),
        ("250 ML", (250.0, "ml")),
        ("2.5 oz", (2.5, "oz")),
        ("15", (15.0, "g")),
        ("a handful", (100.0, "g")),
        (None, (100.0, "g")),
    ],
)
def test_parse_serving_size(text: str | None, expected: tuple[float, str]) -> None:
    assert parse_serving_size(text) == expected


def test_parse_off_product_prefers_serving_values_and_kj_fallback() -> None:
    product = parse_off_product(
        {
            "product_name": "Juice",
            "serving_size": "200ml",
            "categories": "Beverages, Juices",
            "nutriments": {
                "energy_100g": 420,
                "sugars_100g": 10,
                "proteins_serving": 1.5,
            },
        },
        "12345678",
    )

    assert product.nutrition.calories == 200
    assert product.nutrition.sugar_g == pytest.approx(20)
    assert product.nutrition.protein_g == 1.5
    assert product.category == "Beverages"
    assert product.brand is None


def test_parse_off_product_defaults() -> None:
    product = parse_off_product({}, "12345678")

    assert product.name == "Unknown Product"
    assert product.nutrition.calories == 0
    assert product.serving_size == 100
    assert product.to_food_item(2).source is FoodSource.BARCODE


def test_parse_fdc_food_cleans_name() -> None:
    product = parse_fdc_food(
        {
            "fdcId": 42,
            "description": "RICE, WHITE, COOKED, NFS",
            "foodNutrients": [{"nutrientId": 1005, "value": 28.2}],
        }
    )

    assert product.name == "Rice, White, Cooked"
    assert product.barcode == "usda-42"
    assert product.nutrition.carbs_g == 28.2
