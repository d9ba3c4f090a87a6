"""Reference food lookup backed by USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from meal_planner.adapters.fdc_client import FdcClient
from meal_planner.domain.errors import ProviderUnavailableError
from meal_planner.domain.nutrition import NutritionValues, ReferenceFood
from meal_planner.services.cache import Cache

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

_logger = logging.getLogger(__name__)


class ReferenceFoodLookup(Protocol):
    """Interface for searching reference food records."""

    async def search(self, term: str) -> list[ReferenceFood]:
        """Return reference records for a search term."""


@dataclass
class NutritionService(ReferenceFoodLookup):
    """Searches FDC with caching and a short retry."""

    fdc_client: FdcClient
    cache: Cache
    page_size: int = 25
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, term: str) -> list[ReferenceFood]:
        """Search FDC foods, returning records with per-100g macros."""
        query = term.strip().lower()
        if not query:
            return []
        cache_key = f"fdc:search:{query}:{self.page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._search_with_retry(query)
        foods = [_to_reference_food(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.debug("FDC search: query=%s results=%s", query, len(foods))
        return foods

    async def _search_with_retry(self, query: str) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await self.fdc_client.search_foods(
                    query, page_size=self.page_size
                )
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "FDC search failed (attempt %s/%s, status=%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise ProviderUnavailableError(
                        f"Reference search failed for {query!r}"
                    ) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _to_reference_food(food: dict[str, object]) -> ReferenceFood:
    serving_size = food.get("servingSize")
    return ReferenceFood(
        fdc_id=int(food["fdcId"]),
        description=str(food.get("description", "")),
        per_100g=_extract_macros(food.get("foodNutrients", [])),
        brand_name=food.get("brandName") or food.get("brandOwner"),
        data_type=food.get("dataType"),
        serving_size_g=(
            float(serving_size) if isinstance(serving_size, int | float) else None
        ),
    )


def _extract_macros(food_nutrients: list[dict[str, object]]) -> NutritionValues:
    """Extract calories, protein, carbs, fat from FDC nutrients."""
    values: dict[str, float] = {
        "calories": 0.0,
        "protein": 0.0,
        "fat": 0.0,
        "carbs": 0.0,
    }
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("amount", nutrient.get("value"))
        if amount is None:
            continue
        for key, expected_id in _NUTRIENT_IDS.items():
            if nutrient_id == expected_id:
                values[key] = max(float(amount), 0.0)

    return NutritionValues(
        calories=values["calories"],
        protein_g=values["protein"],
        carbs_g=values["carbs"],
        fat_g=values["fat"],
    )
