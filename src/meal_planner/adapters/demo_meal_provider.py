"""Offline meal suggestions used when no LLM key is configured."""

from dataclasses import dataclass

from meal_planner.domain.meals import (
    Language,
    MealPlanRequest,
    MealPlanSuggestion,
    SuggestedFood,
)
from meal_planner.domain.nutrition import NutritionValues
from meal_planner.services.aggregation import sum_nutrition
from meal_planner.services.meal_suggestions import MealSuggestionProvider


@dataclass(frozen=True)
class _TemplateFood:
    name: str
    portion: str
    grams: float
    per_100g: NutritionValues


@dataclass(frozen=True)
class _MealTemplate:
    names: dict[Language, str]
    foods: tuple[_TemplateFood, ...]
    preparation: str


_TEMPLATES: dict[str, _MealTemplate] = {
    "mediterranean": _MealTemplate(
        names={
            Language.ENGLISH: "Mediterranean Salmon Plate",
            Language.SPANISH: "Plato Mediterráneo de Salmón",
        },
        foods=(
            _TemplateFood(
                "Salmon, Atlantic, farmed, cooked, dry heat",
                "4 oz fillet",
                113,
                NutritionValues(206, 25.4, 0, 12.4),
            ),
            _TemplateFood(
                "Sweet potato, cooked, baked in skin, without salt",
                "1 medium",
                150,
                NutritionValues(90, 2.0, 20.7, 0.2),
            ),
            _TemplateFood(
                "Spinach, sautéed in olive oil",
                "1 cup",
                100,
                NutritionValues(60, 3.0, 3.8, 4.5),
            ),
        ),
        preparation="Bake the salmon and sweet potato; sauté the spinach briefly.",
    ),
    "mexican": _MealTemplate(
        names={
            Language.ENGLISH: "Grilled Chicken with Brown Rice",
            Language.SPANISH: "Pollo a la Parrilla con Arroz Integral",
        },
        foods=(
            _TemplateFood(
                "Chicken, broilers or fryers, breast, meat only, cooked, grilled",
                "4 oz breast",
                113,
                NutritionValues(165, 31.0, 0, 3.6),
            ),
            _TemplateFood(
                "Brown rice, cooked",
                "3/4 cup",
                150,
                NutritionValues(111, 2.6, 23, 0.9),
            ),
            _TemplateFood(
                "Black beans, cooked",
                "1/2 cup",
                86,
                NutritionValues(132, 8.9, 23.7, 0.5),
            ),
        ),
        preparation="Grill the chicken, warm the beans, and serve over rice.",
    ),
    "american": _MealTemplate(
        names={
            Language.ENGLISH: "Egg and Broccoli Bowl",
            Language.SPANISH: "Bol de Huevo y Brócoli",
        },
        foods=(
            _TemplateFood(
                "Egg, whole, cooked, hard-boiled",
                "2 large eggs",
                100,
                NutritionValues(155, 12.6, 1.1, 10.6),
            ),
            _TemplateFood(
                "Broccoli, cooked, boiled, drained, without salt",
                "1 cup",
                156,
                NutritionValues(34, 2.4, 7.2, 0.4),
            ),
            _TemplateFood(
                "Bread, whole-wheat, toasted",
                "1 slice",
                30,
                NutritionValues(293, 12.5, 47.5, 4.1),
            ),
        ),
        preparation="Boil the eggs, steam the broccoli, and toast the bread.",
    ),
}

_DEFAULT_TEMPLATE = "american"


@dataclass
class DemoMealProvider(MealSuggestionProvider):
    """Scales fixed cuisine templates to the requested calorie target."""

    async def generate_meal(self, request: MealPlanRequest) -> MealPlanSuggestion:
        """Return a template meal scaled to the request."""
        template = _TEMPLATES.get(
            (request.cuisine_preference or "").strip().lower(),
            _TEMPLATES[_DEFAULT_TEMPLATE],
        )
        base_calories = sum(
            food.per_100g.calories * food.grams / 100.0 for food in template.foods
        )
        factor = request.target_calories / base_calories if base_calories else 1.0
        foods = tuple(
            SuggestedFood(
                name=food.name,
                portion_description=food.portion,
                gram_weight=round(food.grams * factor, 1),
                estimated_nutrition=food.per_100g.scaled(food.grams * factor / 100.0),
            )
            for food in template.foods
        )
        return MealPlanSuggestion(
            meal_name=template.names[request.language],
            meal_slot=request.meal_slot,
            foods=foods,
            total_nutrition=sum_nutrition(food.estimated_nutrition for food in foods),
            preparation_notes=template.preparation,
            nutritionist_notes="Demo suggestion scaled to the calorie target.",
        )
