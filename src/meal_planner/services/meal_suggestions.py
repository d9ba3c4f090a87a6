"""Meal generation through an LLM with structured output."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from meal_planner.domain.errors import ProviderUnavailableError
from meal_planner.domain.llm import AIMealResponse
from meal_planner.domain.meals import (
    Language,
    MealPlanRequest,
    MealPlanSuggestion,
    SuggestedFood,
)
from meal_planner.domain.nutrition import NutritionValues

_logger = logging.getLogger(__name__)

_NUMBER = {"type": "number"}

MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meal_name": {"type": "string"},
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "food_name": {"type": "string"},
                    "portion_description": {"type": "string"},
                    "gram_weight": _NUMBER,
                    "calories": _NUMBER,
                    "protein": _NUMBER,
                    "carbs": _NUMBER,
                    "fat": _NUMBER,
                },
                "required": [
                    "food_name",
                    "portion_description",
                    "gram_weight",
                    "calories",
                    "protein",
                    "carbs",
                    "fat",
                ],
                "additionalProperties": False,
            },
        },
        "total_nutrition": {
            "type": "object",
            "properties": {
                "calories": _NUMBER,
                "protein": _NUMBER,
                "carbs": _NUMBER,
                "fat": _NUMBER,
            },
            "required": ["calories", "protein", "carbs", "fat"],
            "additionalProperties": False,
        },
        "preparation_notes": {"type": "string"},
        "nutritionist_notes": {"type": "string"},
    },
    "required": [
        "meal_name",
        "foods",
        "total_nutrition",
        "preparation_notes",
        "nutritionist_notes",
    ],
    "additionalProperties": False,
}

_LANGUAGE_NAMES = {Language.ENGLISH: "English", Language.SPANISH: "Spanish"}


class MealSuggestionProvider(Protocol):
    """Interface for anything that can propose a meal."""

    async def generate_meal(self, request: MealPlanRequest) -> MealPlanSuggestion:
        """Return a meal suggestion for the request."""


class MealCompletionClient(Protocol):
    """Interface for LLM structured completions."""

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured meal data."""


@dataclass
class MealSuggestionService(MealSuggestionProvider):
    """Prepares dietitian prompts and validates LLM meal responses."""

    client: MealCompletionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate_meal(self, request: MealPlanRequest) -> MealPlanSuggestion:
        """Ask the LLM for a meal and convert it to domain objects."""
        prompt = build_meal_prompt(request)
        try:
            raw = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=MEAL_SCHEMA,
                prompt=prompt,
            )
        except ProviderUnavailableError:
            raise
        except Exception as exc:
            raise ProviderUnavailableError(f"Meal generation failed: {exc}") from exc
        try:
            response = AIMealResponse.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Invalid meal response: %s", exc)
            raise ProviderUnavailableError("Meal response failed validation") from exc
        return to_suggestion(response, request)


def to_suggestion(
    response: AIMealResponse, request: MealPlanRequest
) -> MealPlanSuggestion:
    """Convert a validated LLM response, clamping weights and nutrition."""
    foods = tuple(
        SuggestedFood(
            name=food.food_name.strip(),
            portion_description=food.portion_description,
            gram_weight=max(food.gram_weight, 1.0),
            estimated_nutrition=NutritionValues(
                calories=max(food.calories, 0.0),
                protein_g=max(food.protein, 0.0),
                carbs_g=max(food.carbs, 0.0),
                fat_g=max(food.fat, 0.0),
            ),
        )
        for food in response.foods
    )
    totals = response.total_nutrition
    return MealPlanSuggestion(
        meal_name=response.meal_name.strip(),
        meal_slot=request.meal_slot,
        foods=foods,
        total_nutrition=NutritionValues(
            calories=max(totals.calories, 0.0),
            protein_g=max(totals.protein, 0.0),
            carbs_g=max(totals.carbs, 0.0),
            fat_g=max(totals.fat, 0.0),
        ),
        preparation_notes=response.preparation_notes,
        nutritionist_notes=response.nutritionist_notes,
    )


def corrected_macros(request: MealPlanRequest) -> NutritionValues:
    """Return macro targets, replacing ones inconsistent with the calories.

    When 4P + 4C + 9F lands outside 50-150% of the calorie target the
    targets are rebuilt from a 25/50/25 protein/carb/fat split.
    """
    targets = request.targets
    calories = targets.calories
    if calories <= 0:
        return targets
    from_macros = targets.protein_g * 4 + targets.carbs_g * 4 + targets.fat_g * 9
    ratio = from_macros / calories
    if 0.5 <= ratio <= 1.5:
        return targets
    _logger.info(
        "Macro targets inconsistent with %s kcal (ratio %.2f); recalculating",
        round(calories),
        ratio,
    )
    return NutritionValues(
        calories=calories,
        protein_g=calories * 0.25 / 4,
        carbs_g=calories * 0.50 / 4,
        fat_g=calories * 0.25 / 9,
    )


def calorie_context(calories: float) -> str:
    """Describe the portion size implied by a calorie target."""
    if calories < 150:
        return "Very small snack portion"
    if calories < 300:
        return "Light snack or small meal"
    if calories < 500:
        return "Moderate meal or substantial snack"
    if calories < 800:
        return "Full meal portion"
    return "Large meal or multiple servings"


def build_meal_prompt(request: MealPlanRequest) -> str:
    """Compose the dietitian prompt for a single meal."""
    targets = corrected_macros(request)
    calories = round(targets.calories)
    lines = [
        "You are a professional registered dietitian creating a precise meal.",
        "The calorie target is critical and must be met within 5%.",
        "",
        "Nutritional targets:",
        f"- Calories: {calories} kcal ({calorie_context(targets.calories)})",
        f"- Protein: {targets.protein_g:.1f} g",
        f"- Carbohydrates: {targets.carbs_g:.1f} g",
        f"- Fat: {targets.fat_g:.1f} g",
        f"- Meal type: {request.meal_slot.value}",
        f"- Total calories must be between {round(calories * 0.95)} and "
        f"{round(calories * 1.05)} kcal.",
    ]
    if request.dietary_restrictions:
        lines.append(
            f"- Dietary restrictions: {', '.join(request.dietary_restrictions)}"
        )
    if request.medical_conditions:
        lines.append(f"- Medical conditions: {', '.join(request.medical_conditions)}")
        lines.append("  These conditions require careful nutritional consideration.")
    if request.cuisine_preference:
        lines.append(f"- Preferred cuisine: {request.cuisine_preference}")
    if request.variety_instructions:
        lines.append(f"- Variety: {request.variety_instructions.strip()}")
    lines.extend(
        [
            "",
            "Requirements:",
            "1. Suggest 3-5 specific foods with realistic portions.",
            "2. Use standard household measurements in portion descriptions.",
            "3. Name each food the way USDA FoodData Central describes it, "
            "e.g. 'Salmon, Atlantic, farmed, cooked, dry heat'.",
            "4. Give gram weight and estimated calories, protein, carbs, fat "
            "for each food.",
            f"5. Write the meal name and notes in "
            f"{_LANGUAGE_NAMES[request.language]}.",
        ]
    )
    return "\n".join(lines)
