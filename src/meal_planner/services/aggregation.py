"""Roll-ups of verified nutrition and accuracy."""

from collections.abc import Iterable, Sequence

from meal_planner.domain.meals import (
    MacroAccuracy,
    VerifiedFood,
    VerifiedMealPlanSuggestion,
)
from meal_planner.domain.nutrition import NutritionValues
from meal_planner.domain.plans import (
    DailyMealPlan,
    DailyNutritionSummary,
    MultiDayNutritionSummary,
)

NUTRITION_DEVIATION_THRESHOLD = 0.20

_GRADES = ((0.95, "A+"), (0.90, "A"), (0.85, "B+"), (0.80, "B"), (0.75, "C+"))


def sum_nutrition(values: Iterable[NutritionValues]) -> NutritionValues:
    """Add nutrition values together."""
    total = NutritionValues.zero()
    for value in values:
        total = total + value
    return total


def meal_nutrition(foods: Iterable[VerifiedFood]) -> NutritionValues:
    """Total verified nutrition of a meal's foods."""
    return sum_nutrition(food.verified_nutrition for food in foods)


def meal_accuracy(foods: Sequence[VerifiedFood]) -> float:
    """Mean match confidence of a meal's foods."""
    return _mean([food.confidence for food in foods])


def macro_accuracy(verified: NutritionValues, target: NutritionValues) -> MacroAccuracy:
    """Closeness of each verified macro to its target, clamped to [0, 1]."""
    return MacroAccuracy(
        calories=_closeness(verified.calories, target.calories),
        protein=_closeness(verified.protein_g, target.protein_g),
        carbs=_closeness(verified.carbs_g, target.carbs_g),
        fat=_closeness(verified.fat_g, target.fat_g),
    )


def macros_out_of_tolerance(
    accuracy: MacroAccuracy, threshold: float = NUTRITION_DEVIATION_THRESHOLD
) -> list[str]:
    """Names of macros deviating from target by more than the threshold."""
    values = {
        "calories": accuracy.calories,
        "protein": accuracy.protein,
        "carbs": accuracy.carbs,
        "fat": accuracy.fat,
    }
    return [name for name, value in values.items() if 1.0 - value > threshold]


def summarize_day(meals: Sequence[VerifiedMealPlanSuggestion]) -> DailyNutritionSummary:
    """Daily totals and the mean of the meals' accuracies."""
    total = sum_nutrition(meal.verified_nutrition for meal in meals)
    return DailyNutritionSummary(
        calories=total.calories,
        protein_g=total.protein_g,
        carbs_g=total.carbs_g,
        fat_g=total.fat_g,
        average_accuracy=_mean([meal.overall_accuracy for meal in meals]),
    )


def summarize_plan(days: Sequence[DailyMealPlan]) -> MultiDayNutritionSummary:
    """Plan totals, daily averages, and mean daily accuracy."""
    total = sum_nutrition(
        NutritionValues(
            calories=day.summary.calories,
            protein_g=day.summary.protein_g,
            carbs_g=day.summary.carbs_g,
            fat_g=day.summary.fat_g,
        )
        for day in days
    )
    count = len(days)
    average = total.scaled(1.0 / count) if count else NutritionValues.zero()
    return MultiDayNutritionSummary(
        total_calories=total.calories,
        total_protein_g=total.protein_g,
        total_carbs_g=total.carbs_g,
        total_fat_g=total.fat_g,
        average_daily_calories=average.calories,
        average_daily_protein_g=average.protein_g,
        average_daily_carbs_g=average.carbs_g,
        average_daily_fat_g=average.fat_g,
        overall_accuracy=_mean([day.summary.average_accuracy for day in days]),
    )


def accuracy_grade(accuracy: float) -> str:
    """Letter grade for an accuracy score."""
    for floor, grade in _GRADES:
        if accuracy >= floor:
            return grade
    return "C"


def _closeness(value: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return min(max(1.0 - abs(value - target) / target, 0.0), 1.0)


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)
