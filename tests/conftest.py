"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from meal_planner.config import Settings
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import ProviderUnavailableError
from meal_planner.domain.meals import (
    MealPlanRequest,
    MealPlanSuggestion,
    MealSlot,
    SuggestedFood,
)
from meal_planner.domain.nutrition import NutritionValues, ReferenceFood
from meal_planner.domain.plans import MultiDayPlanRequest
from meal_planner.services.aggregation import sum_nutrition
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.documents import PlanDocumentAssembler
from meal_planner.services.meal_suggestions import MealSuggestionProvider
from meal_planner.services.nutrition import NutritionService, ReferenceFoodLookup
from meal_planner.services.plan_jobs import PlanJobService
from meal_planner.services.planner import MultiDayPlanService

CHICKEN = ReferenceFood(
    fdc_id=171077,
    description="Chicken breast grilled",
    per_100g=NutritionValues(calories=165, protein_g=31, carbs_g=0, fat_g=3.6),
    data_type="SR Legacy",
)
BROCCOLI = ReferenceFood(
    fdc_id=170379,
    description="Broccoli steamed",
    per_100g=NutritionValues(calories=35, protein_g=2.4, carbs_g=7.2, fat_g=0.4),
    data_type="SR Legacy",
)
WHITE_RICE = ReferenceFood(
    fdc_id=168878,
    description="Rice white cooked",
    per_100g=NutritionValues(calories=130, protein_g=2.7, carbs_g=28, fat_g=0.3),
    data_type="SR Legacy",
)


def suggested_food(
    name: str, grams: float, per_100g: NutritionValues | None = None
) -> SuggestedFood:
    nutrition = per_100g or NutritionValues(
        calories=100, protein_g=10, carbs_g=10, fat_g=2
    )
    return SuggestedFood(
        name=name,
        portion_description=f"{grams:.0f} g",
        gram_weight=grams,
        estimated_nutrition=nutrition.scaled(grams / 100.0),
    )


@dataclass
class FakeReferenceLookup(ReferenceFoodLookup):
    """Returns catalogue foods sharing a word with the term."""

    foods: list[ReferenceFood] = field(
        default_factory=lambda: [CHICKEN, BROCCOLI, WHITE_RICE]
    )
    fail: bool = False
    terms: list[str] = field(default_factory=list)

    async def search(self, term: str) -> list[ReferenceFood]:
        self.terms.append(term)
        if self.fail:
            raise ProviderUnavailableError("reference provider down")
        words = set(term.lower().split())
        return [
            food for food in self.foods if words & set(food.description.lower().split())
        ]


@dataclass
class FakeMealProvider(MealSuggestionProvider):
    """Returns a fixed chicken and broccoli meal and records requests."""

    requests: list[MealPlanRequest] = field(default_factory=list)
    failing_slots: dict[MealSlot, int] = field(default_factory=dict)
    extra_foods: tuple[SuggestedFood, ...] = ()
    meal_name: str | None = None

    async def generate_meal(self, request: MealPlanRequest) -> MealPlanSuggestion:
        self.requests.append(request)
        remaining = self.failing_slots.get(request.meal_slot, 0)
        if remaining:
            self.failing_slots[request.meal_slot] = remaining - 1
            raise ProviderUnavailableError("llm unavailable")
        foods = (
            suggested_food("Chicken breast grilled", 150, CHICKEN.per_100g),
            suggested_food("Broccoli steamed", 100, BROCCOLI.per_100g),
            *self.extra_foods,
        )
        return MealPlanSuggestion(
            meal_name=self.meal_name or f"Grilled chicken {request.meal_slot.value}",
            meal_slot=request.meal_slot,
            foods=foods,
            total_nutrition=sum_nutrition(food.estimated_nutrition for food in foods),
            preparation_notes="Grill the chicken and steam the broccoli.",
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        admin_token="admin-token",
        llm_mode="demo",
        fdc_mode="demo",
    )


@pytest.fixture
def reference_lookup() -> FakeReferenceLookup:
    return FakeReferenceLookup()


@pytest.fixture
def meal_provider() -> FakeMealProvider:
    return FakeMealProvider()


@pytest.fixture
def planner(
    meal_provider: FakeMealProvider, reference_lookup: FakeReferenceLookup
) -> MultiDayPlanService:
    return MultiDayPlanService(
        meal_provider=meal_provider, reference_lookup=reference_lookup
    )


@pytest.fixture
def plan_request() -> MultiDayPlanRequest:
    return MultiDayPlanRequest(
        number_of_days=3,
        start_date=date(2026, 3, 2),
        daily_calories=2000,
        daily_protein_g=150,
        daily_carbs_g=200,
        daily_fat_g=67,
    )


@pytest.fixture
def container(settings: Settings, planner: MultiDayPlanService) -> AppContainer:
    nutrition_service = NutritionService(
        fdc_client=_UnusedFdcClient(), cache=InMemoryCache()
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        llm_mode="demo",
        fdc_mode="demo",
        meal_provider=planner.meal_provider,
        nutrition_service=nutrition_service,
        planner=planner,
        plan_jobs=PlanJobService(planner),
        document_assembler=PlanDocumentAssembler(),
        close_resources=close_resources,
    )


class _UnusedFdcClient:
    async def search_foods(self, query: str, page_size: int = 25) -> dict[str, object]:
        return {"foods": []}

    async def close(self) -> None:
        return None
